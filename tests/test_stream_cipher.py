"""
Unit tests for the XOR stream cipher.

Tests:
- Pinned process_byte vector
- Self-inverse encrypt/decrypt
- Block and stream semantics
- Mode symmetry
"""

import logging

import pytest
from lfsrvault.core_crypto.stream_cipher import StreamCipher, Mode, xor_bytes
from lfsrvault.core_crypto.keystream import generate_keystream
from lfsrvault.main import main


KEYS = [0x00000000, 0x12345678, 0x80000000, 0x00008000, 0xDEADBEEF, 0xFFFFFFFF]
MESSAGES = [
    b"",
    b"A",
    b"Hello, World!",
    bytes(range(256)),
    b"\x00" * 64,
]


class TestProcessByte:
    """Unit tests for single-byte transforms."""

    def test_encrypt_vector(self):
        """0xAB encrypts to 0xAB ^ 0xFE under key 0x12345678."""
        cipher = StreamCipher(0x12345678)
        assert cipher.process_byte(0xAB, Mode.ENCRYPT) == 0x55

    def test_decrypt_vector(self):
        """Fresh cipher on the same key recovers 0xAB."""
        cipher = StreamCipher(0x12345678)
        assert cipher.process_byte(0x55, Mode.DECRYPT) == 0xAB

    def test_consumes_one_keystream_byte(self):
        """Each call advances the generator exactly once."""
        cipher = StreamCipher(0x80000000)
        keystream = generate_keystream(0x80000000, 10)
        for ks in keystream:
            assert cipher.process_byte(0x00) == ks

    def test_mode_does_not_change_result(self):
        """Encrypt and decrypt compute the same transform."""
        enc = StreamCipher(0xCAFEBABE)
        dec = StreamCipher(0xCAFEBABE)
        for value in range(256):
            assert enc.process_byte(value, Mode.ENCRYPT) == dec.process_byte(value, Mode.DECRYPT)

    def test_data_masked_to_byte(self):
        """Values wider than 8 bits are masked."""
        a = StreamCipher(0x1234)
        b = StreamCipher(0x1234)
        assert a.process_byte(0x1AB) == b.process_byte(0xAB)


class TestProcessBlock:
    """Unit tests for block transforms."""

    @pytest.mark.parametrize("key", KEYS)
    @pytest.mark.parametrize("message", MESSAGES)
    def test_self_inverse(self, key, message):
        """decrypt(encrypt(m, k), k) == m."""
        ciphertext = StreamCipher(key).encrypt(message)
        assert StreamCipher(key).decrypt(ciphertext) == message

    def test_preserves_length(self):
        """Output has the same length as input."""
        cipher = StreamCipher(0xDEADBEEF)
        assert len(cipher.process_block(b"x" * 1000)) == 1000

    def test_block_equals_byte_fold(self):
        """process_block is an ordered fold over process_byte."""
        data = b"The quick brown fox"
        block = StreamCipher(0x0F0F0F0F).process_block(data)
        single = StreamCipher(0x0F0F0F0F)
        assert block == bytes(single.process_byte(b) for b in data)

    def test_ciphertext_is_data_xor_keystream(self):
        """Ciphertext equals plaintext XOR the generator keystream."""
        data = b"keystream check"
        keystream = generate_keystream(0x80000000, len(data))
        assert StreamCipher(0x80000000).encrypt(data) == xor_bytes(data, keystream)

    def test_accepts_iterables(self):
        """Lists and bytearrays are accepted like bytes."""
        data = [1, 2, 3, 250]
        expected = StreamCipher(7).process_block(bytes(data))
        assert StreamCipher(7).process_block(data) == expected
        assert StreamCipher(7).process_block(bytearray(data)) == expected

    def test_empty_block_does_not_step(self):
        """An empty block leaves the generator untouched."""
        cipher = StreamCipher(0x12345678)
        before = cipher.generator.snapshot()
        assert cipher.process_block(b"") == b""
        assert cipher.generator.snapshot() == before

    def test_split_blocks_continue_keystream(self):
        """Two blocks encrypt like one concatenated block."""
        data = b"split across two calls"
        cipher = StreamCipher(0xABCDEF01)
        parts = cipher.encrypt(data[:7]) + cipher.encrypt(data[7:])
        assert parts == StreamCipher(0xABCDEF01).encrypt(data)

    def test_reset_rewinds(self):
        """Reset with the same key replays the same ciphertext."""
        cipher = StreamCipher(0x13579BDF)
        first = cipher.encrypt(b"replay")
        cipher.reset(0x13579BDF)
        assert cipher.encrypt(b"replay") == first

    def test_different_seed_bits_differ(self):
        """Keys with different seed bits produce different ciphertext."""
        pt = b"test message"
        assert StreamCipher(0).encrypt(pt) != StreamCipher(0x80000000).encrypt(pt)

    def test_reset_logs_key_once(self, caplog):
        """A cipher reset logs one fingerprint record."""
        with caplog.at_level(logging.DEBUG):
            StreamCipher(0xDEADBEEF)
        assert caplog.text.count("key fingerprint") == 1

    def test_block_logs_count(self, caplog):
        """Block processing logs byte count and mode."""
        cipher = StreamCipher(1)
        with caplog.at_level(logging.DEBUG, logger="lfsrvault.core_crypto.stream_cipher"):
            cipher.decrypt(b"abcd")
        assert "Processed 4 bytes (decrypt)" in caplog.text


class TestEncryptStream:
    """Unit tests for the streaming generator."""

    def test_stream_matches_block(self):
        """Streaming output equals block output."""
        data = b"streamed message"
        streamed = bytes(StreamCipher(0x2468ACE0).encrypt_stream(data))
        assert streamed == StreamCipher(0x2468ACE0).encrypt(data)

    def test_stream_is_lazy(self):
        """Keystream is consumed only as bytes are pulled."""
        cipher = StreamCipher(0x2468ACE0)
        stream = cipher.encrypt_stream(b"abc")
        assert not cipher.generator.ready
        next(stream)
        assert cipher.generator.ready


class TestXorBytes:
    """Unit tests for the XOR helper."""

    def test_xor_symmetric(self):
        """XOR with the same keystream twice restores the data."""
        data = b"Test data"
        keystream = generate_keystream(999, len(data))
        assert xor_bytes(xor_bytes(data, keystream), keystream) == data

    def test_longer_keystream_allowed(self):
        """Extra keystream bytes are ignored."""
        assert xor_bytes(b"\x0f", b"\xf0\xff") == b"\xff"


class TestSelfTest:
    """Smoke test for the demo entry point."""

    def test_main_passes(self, capsys):
        """Self-test reports success."""
        assert main() is True
        out = capsys.readouterr().out
        assert "B1 = 0xFE" in out
        assert "All tests passed!" in out
