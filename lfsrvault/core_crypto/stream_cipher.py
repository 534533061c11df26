"""
XOR Stream Cipher

Byte-oriented stream cipher driven by the LFSR keystream generator.

Components:
- Mode flag (encrypt/decrypt) kept for API symmetry
- Per-byte transform: one generator step per data byte
- Block transform: ordered fold of the per-byte transform

XOR stream ciphers are self-inverse: decryption is the same transform as
encryption, provided both sides reset with the same key and consume
keystream bytes in the same order.

WARNING: This is for emulation and testing only!
"""

import logging
from enum import Enum
from typing import Generator, Iterable, Optional, Sequence

from .keystream import (
    BYTE_MASK, InvalidStateError, KeystreamGenerator
)


logger = logging.getLogger(__name__)


class Mode(Enum):
    """Direction of a transform. Both directions compute the same XOR."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class StreamCipher:
    """
    Stream cipher over a single owned KeystreamGenerator.

    Not thread-safe: use one instance per stream.

    Example:
        >>> cipher = StreamCipher(0xDEADBEEF)
        >>> ciphertext = cipher.encrypt(b"Hello, World!")
        >>> cipher.reset(0xDEADBEEF)
        >>> cipher.decrypt(ciphertext)
        b'Hello, World!'
    """

    def __init__(self, key: Optional[int] = None):
        """
        Initialize the cipher.

        Args:
            key: Optional 32-bit key. Without one the cipher stays
                 uninitialized until reset() is called.
        """
        self._generator = KeystreamGenerator()
        if key is not None:
            self.reset(key)

    @property
    def generator(self) -> KeystreamGenerator:
        """Access to the underlying keystream generator."""
        return self._generator

    @property
    def initialized(self) -> bool:
        """True once reset() has been called."""
        return self._generator.initialized

    def reset(self, key: int) -> None:
        """
        (Re)initialize the keystream from a key.

        Args:
            key: 32-bit key
        """
        self._generator.reset(key)

    def _require_reset(self) -> None:
        if not self._generator.initialized:
            logger.warning("Stream cipher used before reset")
            raise InvalidStateError("Cipher must be reset with a key before use")

    @staticmethod
    def _check_mode(mode: Mode) -> None:
        if not isinstance(mode, Mode):
            raise TypeError(f"mode must be a Mode, not {type(mode).__name__}")

    def process_byte(self, data: int, mode: Mode = Mode.ENCRYPT) -> int:
        """
        Transform one byte, consuming exactly one keystream byte.

        Args:
            data: Input byte (0-255)
            mode: Encrypt or decrypt; does not change the result

        Returns:
            data XOR keystream byte

        Raises:
            InvalidStateError: If reset() has not been called
        """
        self._require_reset()
        self._check_mode(mode)
        return (data & BYTE_MASK) ^ self._generator.step()

    def process_block(self, data: Iterable[int], mode: Mode = Mode.ENCRYPT) -> bytes:
        """
        Transform a sequence of bytes in order.

        Args:
            data: Bytes-like object or iterable of byte values
            mode: Encrypt or decrypt

        Returns:
            Transformed bytes, same length and order as the input

        Raises:
            InvalidStateError: If reset() has not been called
            TypeError: If mode or an element is invalid; no keystream is consumed
        """
        self._require_reset()
        self._check_mode(mode)
        # Mask the whole block first so a bad element consumes no keystream
        values = [b & BYTE_MASK for b in data]
        result = xor_bytes(values, self._generator.generate_bytes(len(values)))
        logger.debug("Processed %d bytes (%s)", len(result), mode.value)
        return result

    def encrypt(self, plaintext: Iterable[int]) -> bytes:
        """
        Encrypt plaintext using XOR with the keystream.

        Args:
            plaintext: Data to encrypt

        Returns:
            Encrypted ciphertext
        """
        return self.process_block(plaintext, Mode.ENCRYPT)

    def decrypt(self, ciphertext: Iterable[int]) -> bytes:
        """
        Decrypt ciphertext using XOR with the keystream.

        Since XOR is symmetric, decryption is identical to encryption.
        The generator must be in the same state as when encryption started.

        Args:
            ciphertext: Data to decrypt

        Returns:
            Decrypted plaintext
        """
        return self.process_block(ciphertext, Mode.DECRYPT)

    def encrypt_stream(self, data: Iterable[int],
                       mode: Mode = Mode.ENCRYPT) -> Generator[int, None, None]:
        """
        Generator for streaming encryption.

        Args:
            data: Data to transform

        Yields:
            Transformed bytes one at a time
        """
        self._require_reset()
        self._check_mode(mode)
        for byte in data:
            yield self.process_byte(byte, mode)

    def __repr__(self) -> str:
        return f"StreamCipher({self._generator!r})"


def xor_bytes(data: Sequence[int], keystream: bytes) -> bytes:
    """
    Simple XOR encryption/decryption against a precomputed keystream.

    Args:
        data: Data to encrypt/decrypt
        keystream: Keystream bytes (must be at least as long as data)

    Returns:
        XOR result
    """
    if len(keystream) < len(data):
        raise ValueError("Keystream must be at least as long as data")
    return bytes(d ^ k for d, k in zip(data, keystream))
