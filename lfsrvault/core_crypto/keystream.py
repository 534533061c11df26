"""
LFSR Keystream Generator

Software model of a clocked keystream generator built from two 32-bit
registers:

- LFSR register: feedback polynomial x^32 + x^22 + x^2 + x + 1
  (tap bits 31, 21, 1, 0), reset to all ones
- Key-schedule register: feedback from bits 31 and 15, reset to zero and
  seeded by a single bit derived from the key

Each call to step() models one rising clock edge: both registers shift left
by one, the feedback bits enter at bit 0, and the low bytes of the two
registers are XORed into one keystream byte.

Security Note:
    This generator is linear and the key contributes a single bit of state.
    It is for emulation and testing only - NOT cryptographically secure!
"""

import logging
from dataclasses import dataclass
from typing import Generator, Optional, Tuple

from cryptography.hazmat.primitives import hashes


logger = logging.getLogger(__name__)


# Register geometry
REGISTER_BITS = 32
REGISTER_MASK = (1 << REGISTER_BITS) - 1   # 0xFFFFFFFF
BYTE_MASK = 0xFF

# Reset values
LFSR_RESET_VALUE = REGISTER_MASK           # All ones, never the zero fixed point
KEY_SCHEDULE_RESET_VALUE = 0x00000000

# Tap positions (0-indexed from LSB)
LFSR_TAPS: Tuple[int, ...] = (31, 21, 1, 0)
KEY_SCHEDULE_TAPS: Tuple[int, ...] = (31, 15)

FINGERPRINT_LENGTH = 16


class InvalidStateError(Exception):
    """Raised when the generator is used before it has been reset."""
    pass


def _feedback(state: int, taps: Tuple[int, ...]) -> int:
    bit = 0
    for tap in taps:
        bit ^= (state >> tap) & 1
    return bit


def lfsr_feedback(state: int) -> int:
    """
    Compute the LFSR feedback bit for a register value.

    Args:
        state: 32-bit LFSR register value

    Returns:
        bit31 XOR bit21 XOR bit1 XOR bit0
    """
    return _feedback(state, LFSR_TAPS)


def schedule_feedback(state: int) -> int:
    """
    Compute the key-schedule feedback bit for a register value.

    Args:
        state: 32-bit key-schedule value (or the raw key at reset)

    Returns:
        bit31 XOR bit15
    """
    return _feedback(state, KEY_SCHEDULE_TAPS)


def _advance(lfsr: int, key_schedule: int,
             seed_bit: Optional[int] = None) -> Tuple[int, int]:
    # One clock edge; a pending seed bit replaces the schedule feedback
    lfsr = ((lfsr << 1) | lfsr_feedback(lfsr)) & REGISTER_MASK
    sfb = schedule_feedback(key_schedule) if seed_bit is None else seed_bit
    key_schedule = ((key_schedule << 1) | sfb) & REGISTER_MASK
    return lfsr, key_schedule


def key_fingerprint(key: int) -> str:
    """
    Short SHA-256 fingerprint of a key, safe to put in log records.

    Args:
        key: 32-bit key

    Returns:
        First 16 hex characters of SHA-256 over the big-endian key bytes
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update((key & REGISTER_MASK).to_bytes(4, 'big'))
    return digest.finalize().hex()[:FINGERPRINT_LENGTH]


@dataclass(frozen=True)
class GeneratorState:
    """Snapshot of the generator registers."""
    lfsr: int
    key_schedule: int
    ready: bool


class KeystreamGenerator:
    """
    Two-register keystream generator (LFSR + key schedule).

    The generator starts uninitialized and must be reset with a key before
    the first step.

    Example:
        >>> gen = KeystreamGenerator()
        >>> gen.reset(0x12345678)
        >>> hex(gen.step())
        '0xfe'
        >>> gen.ready
        True
    """

    def __init__(self):
        self._lfsr = LFSR_RESET_VALUE
        self._key_schedule = KEY_SCHEDULE_RESET_VALUE
        self._ready = False
        self._initialized = False
        # Key-derived feedback bit consumed by the first schedule update
        self._seed_bit = None

    @property
    def lfsr(self) -> int:
        """Current LFSR register value."""
        return self._lfsr

    @property
    def key_schedule(self) -> int:
        """Current key-schedule register value."""
        return self._key_schedule

    @property
    def ready(self) -> bool:
        """True once a step has happened since the last reset."""
        return self._ready

    @property
    def initialized(self) -> bool:
        """True once reset() has been called."""
        return self._initialized

    def reset(self, key: int) -> None:
        """
        Load reset values and latch the key seed bit.

        The LFSR always returns to all ones regardless of the key. The key
        reaches the key schedule only through one injected feedback bit,
        bit31(key) XOR bit15(key), which the next step shifts in.

        Args:
            key: 32-bit key (wider values are masked)
        """
        key &= REGISTER_MASK
        self._lfsr = LFSR_RESET_VALUE
        self._key_schedule = KEY_SCHEDULE_RESET_VALUE
        self._seed_bit = schedule_feedback(key)
        self._ready = False
        self._initialized = True
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Keystream generator reset (key fingerprint %s)",
                         key_fingerprint(key))

    def _require_reset(self) -> None:
        if not self._initialized:
            logger.warning("Keystream generator used before reset")
            raise InvalidStateError("Generator must be reset with a key before use")

    def step(self) -> int:
        """
        Advance both registers by one clock and return a keystream byte.

        Returns:
            (lfsr & 0xFF) XOR (key_schedule & 0xFF), sampled after the update

        Raises:
            InvalidStateError: If reset() has not been called
        """
        self._require_reset()
        self._lfsr, self._key_schedule = _advance(
            self._lfsr, self._key_schedule, self._seed_bit)
        self._seed_bit = None
        self._ready = True
        return (self._lfsr & BYTE_MASK) ^ (self._key_schedule & BYTE_MASK)

    def generate_bytes(self, count: int) -> bytes:
        """
        Step the generator count times.

        Args:
            count: Number of keystream bytes

        Returns:
            Keystream bytes in step order
        """
        if count < 0:
            raise ValueError("Byte count must be non-negative")
        self._require_reset()
        return bytes(self.step() for _ in range(count))

    def keystream(self, length: int) -> Generator[int, None, None]:
        """
        Generator yielding keystream bytes.

        Args:
            length: Number of bytes to yield

        Yields:
            Keystream bytes one at a time
        """
        if length < 0:
            raise ValueError("Keystream length must be non-negative")
        self._require_reset()
        for _ in range(length):
            yield self.step()

    def snapshot(self) -> GeneratorState:
        """Return a copy of the current register values."""
        return GeneratorState(self._lfsr, self._key_schedule, self._ready)

    def get_period(self, max_iterations: int = 1 << 16) -> int:
        """
        Count steps until the combined register state recurs.

        Works on a copy of the registers, so the keystream position is
        unchanged. The LFSR alone has period 2^32 - 1, so for most purposes
        this only confirms that no short cycle exists within the limit.

        Args:
            max_iterations: Maximum steps to try

        Returns:
            Period length, or -1 if not found within limit
        """
        self._require_reset()
        # Start from a post-step state so the seed bit is already consumed
        initial = _advance(self._lfsr, self._key_schedule, self._seed_bit)
        state = initial

        for i in range(1, max_iterations + 1):
            state = _advance(*state)
            if state == initial:
                return i

        return -1

    def __repr__(self) -> str:
        return (f"KeystreamGenerator(lfsr=0x{self._lfsr:08X}, "
                f"key_schedule=0x{self._key_schedule:08X}, ready={self._ready})")


def generate_keystream(key: int, length: int) -> bytes:
    """
    Generate a keystream from a freshly reset generator.

    Args:
        key: 32-bit key
        length: Number of bytes to generate

    Returns:
        Keystream bytes
    """
    gen = KeystreamGenerator()
    gen.reset(key)
    return gen.generate_bytes(length)
