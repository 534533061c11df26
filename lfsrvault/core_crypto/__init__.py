# Core Cryptography Module
"""
LFSR stream cipher model including:
- Keystream generator (32-bit LFSR + key-schedule register) - keystream.py
- XOR stream cipher with byte and block transforms - stream_cipher.py

Security note:
- Emulation of a weak hardware primitive, NOT a secure cipher
"""

from .keystream import (
    KeystreamGenerator,
    GeneratorState,
    InvalidStateError,
    generate_keystream,
    key_fingerprint,
    lfsr_feedback,
    schedule_feedback,
    LFSR_TAPS,
    KEY_SCHEDULE_TAPS,
    LFSR_RESET_VALUE,
    KEY_SCHEDULE_RESET_VALUE,
)

from .stream_cipher import (
    Mode,
    StreamCipher,
    xor_bytes,
)

__all__ = [
    'KeystreamGenerator',
    'GeneratorState',
    'InvalidStateError',
    'generate_keystream',
    'key_fingerprint',
    'lfsr_feedback',
    'schedule_feedback',
    'LFSR_TAPS',
    'KEY_SCHEDULE_TAPS',
    'LFSR_RESET_VALUE',
    'KEY_SCHEDULE_RESET_VALUE',
    'Mode',
    'StreamCipher',
    'xor_bytes',
]
