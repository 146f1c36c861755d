"""
Unit tests for PKCS#1 v1.5 padding.

Tests:
- Signature padding (type 1) layout and round trip
- sign / verify
- Encryption padding (type 2) layout and round trip
- PKCS#1 encrypt / decrypt
"""

import pytest

from rsacore.core_crypto.rng import SeededRandomSource
from rsacore.rsa import primitive
from rsacore.rsa.keygen import generate_insecure
from rsacore.rsa.pkcs1 import (
    signature_pad, signature_unpad, sign, verify,
    encryption_pad, encryption_unpad, encrypt, decrypt,
    BLOCK_OVERHEAD, MIN_PAD_LEN,
)
from rsacore.rsa.primitive import NoMask, Blind, BlindWith


class TestSignaturePadding:
    """Unit tests for type 1 padding."""

    def test_known_block(self):
        """size=16, msg=AA BB gives 00 01 FF*11 00 AA BB."""
        block = signature_pad(16, b"\xaa\xbb")
        assert block == b"\x00\x01" + b"\xff" * 11 + b"\x00\xaa\xbb"
        assert len(block) == 16

    def test_known_block_unpad(self):
        """Unpadding the known block returns AA BB."""
        block = b"\x00\x01" + b"\xff" * 11 + b"\x00\xaa\xbb"
        assert signature_unpad(block) == b"\xaa\xbb"

    def test_too_little_room(self):
        """size - len(msg) <= 3 fails."""
        assert signature_pad(5, b"\x01\x02") is None
        assert signature_pad(4, b"\x01\x02") is None
        assert signature_pad(2, b"\x01\x02\x03") is None

    def test_minimum_room(self):
        """size - len(msg) == 4 leaves a single FF byte."""
        assert signature_pad(6, b"\x01\x02") == b"\x00\x01\xff\x00\x01\x02"

    def test_roundtrip_lengths(self):
        """Every message up to size - 4 round-trips."""
        size = 32
        for length in range(0, size - 3):
            msg = bytes((i * 7 + 1) % 256 for i in range(length))
            assert signature_unpad(signature_pad(size, msg)) == msg

    def test_bad_scan_byte(self):
        """A byte other than FF or 00 before the separator fails."""
        assert signature_unpad(b"\x00\x01\xff\xff\x05\x00\xaa") is None

    def test_bad_header(self):
        """Header must be 00 01."""
        assert signature_unpad(b"\x00\x02\xff\xff\x00\xaa") is None
        assert signature_unpad(b"\x01\x01\xff\xff\x00\xaa") is None

    def test_missing_separator(self):
        """Running off the end without a 00 fails."""
        assert signature_unpad(b"\x00\x01" + b"\xff" * 10) is None


class TestSignVerify:
    """Unit tests for sign / verify."""

    def test_sign_verify(self, key, pub):
        """verify(sign(msg)) returns msg."""
        msg = b"attack at dawn"
        signature = sign(key, msg)
        assert len(signature) == key.byte_size
        assert verify(pub, signature) == msg

    @pytest.mark.parametrize("mask", [NoMask(), Blind(), BlindWith(SeededRandomSource(4))])
    def test_sign_every_mask(self, key, pub, mask):
        """Signatures are deterministic regardless of the mask."""
        msg = b"\x30\x31" + b"\x42" * 20
        assert sign(key, msg, mask=mask) == sign(key, msg, mask=NoMask())
        assert verify(pub, sign(key, msg, mask=mask)) == msg

    def test_sign_is_padded_decrypt(self, key):
        """A signature is the raw private operation on the type 1 block."""
        msg = b"digest"
        expected = primitive.decrypt(key, signature_pad(key.byte_size, msg), mask=NoMask())
        assert sign(key, msg) == expected

    def test_sign_longest_message(self, key, pub):
        """Message of byte_size - 4 bytes fits."""
        msg = b"\x11" * (key.byte_size - 4)
        assert verify(pub, sign(key, msg)) == msg

    def test_sign_too_long(self, key):
        """Message of byte_size - 3 bytes doesn't fit."""
        assert sign(key, b"\x11" * (key.byte_size - 3)) is None

    def test_sign_empty_message(self, key, pub):
        """An empty message can be signed."""
        assert verify(pub, sign(key, b"")) == b""

    def test_tampered_signature_rejected(self, key, pub):
        """Flipping a bit breaks the padding."""
        signature = bytearray(sign(key, b"message"))
        signature[-1] ^= 0x01
        assert verify(pub, bytes(signature)) is None

    def test_wrong_key_rejected(self, key):
        """A signature doesn't verify under an unrelated key."""
        other = generate_insecure(520, rng=SeededRandomSource(77))
        signature = sign(key, b"message")
        assert verify(other.public_key(), signature) is None


class TestEncryptionPadding:
    """Unit tests for type 2 padding."""

    def test_layout(self, seeded_rng):
        """00 02 | non-zero fill | 00 | data."""
        data = b"secret"
        block = encryption_pad(32, data, rng=seeded_rng)
        assert len(block) == 32
        assert block[:2] == b"\x00\x02"
        fill = block[2:32 - len(data) - 1]
        assert len(fill) == 32 - len(data) - 3
        assert 0 not in fill
        assert block[32 - len(data) - 1] == 0
        assert block.endswith(data)

    def test_seeded_fill_deterministic(self):
        """Same seed, same block."""
        a = encryption_pad(64, b"x", rng=SeededRandomSource(5))
        b = encryption_pad(64, b"x", rng=SeededRandomSource(5))
        assert a == b

    def test_fill_is_random(self):
        """Two paddings of the same data differ."""
        assert encryption_pad(64, b"x") != encryption_pad(64, b"x")

    def test_roundtrip_lengths(self, seeded_rng):
        """Every data length below size - 10 round-trips."""
        size = 40
        for length in range(0, size - 10):
            data = bytes((i * 13 + 5) % 256 for i in range(length))
            block = encryption_pad(size, data, rng=seeded_rng)
            assert encryption_unpad(block, size) == data

    def test_data_with_zero_bytes(self, seeded_rng):
        """Zero bytes inside the data survive; only the first 00 separates."""
        data = b"\x00\x01\x00\x00"
        block = encryption_pad(24, data, rng=seeded_rng)
        assert encryption_unpad(block, 24) == data

    def test_too_long(self):
        """Fewer than 8 fill bytes fails."""
        assert encryption_pad(32, b"\x01" * 22) is None
        assert encryption_pad(32, b"\x01" * 21) is not None

    def test_fill_length_uses_block_overhead(self, seeded_rng):
        """Type 2 fill is size - len(data) minus header and separator."""
        data = b"\x01" * 10
        block = encryption_pad(32, data, rng=seeded_rng)
        fill = block[2:block.index(0, 2)]
        assert BLOCK_OVERHEAD == 3
        assert len(fill) == 32 - len(data) - BLOCK_OVERHEAD

    def test_minimum_fill_boundary(self, seeded_rng):
        """Exactly MIN_PAD_LEN fill bytes is accepted, one fewer is not."""
        longest = 32 - BLOCK_OVERHEAD - MIN_PAD_LEN
        block = encryption_pad(32, b"\x01" * longest, rng=seeded_rng)
        assert len(block[2:block.index(0, 2)]) == MIN_PAD_LEN
        assert encryption_pad(32, b"\x01" * (longest + 1)) is None

    def test_unpad_wrong_size(self, seeded_rng):
        """Block length must match the modulus size."""
        block = encryption_pad(32, b"data", rng=seeded_rng)
        assert encryption_unpad(block, 33) is None
        assert encryption_unpad(block, 31) is None

    def test_unpad_bad_header(self):
        """Header must be 00 02."""
        assert encryption_unpad(b"\x00\x01" + b"\x07" * 8 + b"\x00ab", 13) is None
        assert encryption_unpad(b"\x01\x02" + b"\x07" * 8 + b"\x00ab", 13) is None

    def test_unpad_no_separator(self):
        """No 00 after the header fails."""
        assert encryption_unpad(b"\x00\x02" + b"\x07" * 14, 16) is None


class TestPKCS1Encryption:
    """Unit tests for PKCS#1 encrypt / decrypt."""

    @pytest.mark.parametrize("mask", [NoMask(), Blind(), BlindWith(SeededRandomSource(6))])
    def test_roundtrip(self, key, pub, mask):
        """decrypt(encrypt(data)) == data for every mask."""
        data = b"the magic words are squeamish ossifrage"
        ciphertext = encrypt(pub, data)
        assert len(ciphertext) == key.byte_size
        assert decrypt(key, ciphertext, mask=mask) == data

    def test_roundtrip_boundaries(self, key, pub):
        """Empty data and the longest allowed data round-trip."""
        for data in (b"", b"\x5a" * (key.byte_size - 11)):
            assert decrypt(key, encrypt(pub, data)) == data

    def test_too_long(self, pub):
        """Data longer than byte_size - 11 can't be encrypted."""
        assert encrypt(pub, b"\x5a" * (pub.byte_size - 10)) is None

    def test_ciphertexts_randomized(self, pub):
        """Encrypting twice gives different ciphertexts."""
        assert encrypt(pub, b"same") != encrypt(pub, b"same")

    def test_seeded_encrypt_deterministic(self, pub):
        """A seeded source reproduces the ciphertext."""
        a = encrypt(pub, b"same", rng=SeededRandomSource(9))
        b = encrypt(pub, b"same", rng=SeededRandomSource(9))
        assert a == b

    def test_wrong_block_size(self, key, pub):
        """Ciphertext must be exactly one modulus width."""
        ciphertext = encrypt(pub, b"data")
        assert decrypt(key, ciphertext[1:]) is None
        assert decrypt(key, b"\x00" + ciphertext) is None

    def test_bad_padding_rejected(self, key, pub):
        """A raw ciphertext of a block without type 2 padding fails."""
        block = b"\x00\x03" + b"\x01" * 61 + b"\x00"
        assert decrypt(key, primitive.encrypt(pub, block)) is None

    def test_missing_separator_rejected(self, key, pub):
        """A type 2 header with no separator fails."""
        block = b"\x00\x02" + b"\x01" * 62
        assert decrypt(key, primitive.encrypt(pub, block)) is None
