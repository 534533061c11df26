"""
LFSR Vault - Main Entry Point
Software model of a 32-bit LFSR stream-cipher primitive.

Run with: python -m lfsrvault.main
"""

import logging

from lfsrvault.core_crypto.keystream import KeystreamGenerator, generate_keystream
from lfsrvault.core_crypto.stream_cipher import StreamCipher, Mode


# Regression vectors printed by the self-test
VECTOR_KEY = 0x12345678
VECTOR_PLAINTEXT_BYTE = 0xAB
DEMO_KEY = 0xDEADBEEF
DEMO_MESSAGE = b"Hello, World! This is a secret message."


def main(verbose: bool = False) -> bool:
    """
    Print the regression vectors and an encrypt/decrypt round trip.

    Returns:
        True if every check passed
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    print("=" * 60)
    print("LFSR Vault - Stream Cipher Self-Test")
    print("=" * 60)

    # Test 1: Reset values
    print("\n[Test 1] Reset values")
    gen = KeystreamGenerator()
    gen.reset(0)
    print(f"  After reset(0): {gen}")
    test1_pass = gen.lfsr == 0xFFFFFFFF and gen.key_schedule == 0 and not gen.ready
    print(f"  Status: {'✓ PASS' if test1_pass else '✗ FAIL'}")

    # Test 2: First keystream byte
    print(f"\n[Test 2] First keystream byte for key 0x{VECTOR_KEY:08X}")
    gen.reset(VECTOR_KEY)
    b1 = gen.step()
    print(f"  B1 = 0x{b1:02X}")
    print(f"  {gen}")

    # Test 3: Single byte round trip
    print("\n[Test 3] process_byte round trip")
    cipher = StreamCipher(VECTOR_KEY)
    ct = cipher.process_byte(VECTOR_PLAINTEXT_BYTE, Mode.ENCRYPT)
    cipher.reset(VECTOR_KEY)
    pt = cipher.process_byte(ct, Mode.DECRYPT)
    print(f"  0x{VECTOR_PLAINTEXT_BYTE:02X} -> 0x{ct:02X} -> 0x{pt:02X}")
    test3_pass = ct == VECTOR_PLAINTEXT_BYTE ^ b1 and pt == VECTOR_PLAINTEXT_BYTE
    print(f"  Status: {'✓ PASS' if test3_pass else '✗ FAIL'}")

    # Test 4: Message round trip
    print("\n[Test 4] Message encryption/decryption")
    cipher = StreamCipher(DEMO_KEY)
    ciphertext = cipher.encrypt(DEMO_MESSAGE)
    cipher.reset(DEMO_KEY)
    decrypted = cipher.decrypt(ciphertext)
    print(f"  Plaintext:  {DEMO_MESSAGE}")
    print(f"  Ciphertext: {ciphertext.hex()[:60]}...")
    print(f"  Decrypted:  {decrypted}")
    test4_pass = decrypted == DEMO_MESSAGE
    print(f"  Status: {'✓ PASS' if test4_pass else '✗ FAIL'}")

    # Test 5: Keystreams per key seed bit
    print("\n[Test 5] Keystream prefixes")
    for key in (0x00000000, 0x80000000, VECTOR_KEY):
        print(f"  key 0x{key:08X}: {generate_keystream(key, 8).hex()}")

    all_passed = test1_pass and test3_pass and test4_pass
    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
    print("\n⚠️  WARNING: this cipher is NOT secure for real cryptographic use!")
    return all_passed


if __name__ == "__main__":
    main()
