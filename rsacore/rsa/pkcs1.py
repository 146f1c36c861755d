"""
PKCS#1 v1.5 Padding (RFC 8017)

Block layouts, one modulus width (k bytes) each:

    Signature  (type 1):  00 01 | FF ... FF | 00 | message
    Encryption (type 2):  00 02 | random non-zero bytes | 00 | data

Padding functions never raise on malformed input. Failure is reported as
None, and callers must propagate it. No failure reason is exposed.

Range violations on the underlying RSA integers still raise InvalidMessage
from the primitive layer.
"""

from typing import Optional

from ..core_crypto.rng import RandomSource, default_source
from . import primitive
from .keys import PrivateKey, PublicKey
from .primitive import Blind, Mask


BLOCK_OVERHEAD = 3       # Header and separator bytes (00 01|02 ... 00)
MIN_PAD_LEN = 8          # Minimum random fill for type 2


# ============================================================================
# SIGNATURE PADDING (TYPE 1)
# ============================================================================

def signature_pad(size: int, msg: bytes) -> Optional[bytes]:
    """
    Build a type 1 block of exactly ``size`` bytes.

    Args:
        size: Block size (modulus size in bytes)
        msg: Message or encoded digest to embed

    Returns:
        00 01 | FF * (size - len(msg) - 3) | 00 | msg, or None if
        size - len(msg) <= 3
    """
    pad = size - len(msg)
    if pad <= BLOCK_OVERHEAD:
        return None
    return b'\x00\x01' + b'\xff' * (pad - BLOCK_OVERHEAD) + b'\x00' + bytes(msg)


def signature_unpad(block: bytes) -> Optional[bytes]:
    """
    Strip type 1 padding.

    After the 00 01 header, 0xFF bytes are skipped; the first other byte
    must be 00 and everything after it is the message. Not constant time:
    the block was recovered with the public exponent.

    Returns:
        The embedded message, or None if the padding is malformed
    """
    if len(block) < 2 or block[0] != 0x00 or block[1] != 0x01:
        return None

    for i in range(2, len(block)):
        byte = block[i]
        if byte == 0xff:
            continue
        if byte == 0x00:
            return bytes(block[i + 1:])
        return None

    return None


def sign(key: PrivateKey, msg: bytes, mask: Mask = Blind()) -> Optional[bytes]:
    """
    Sign ``msg`` with type 1 padding.

    ``msg`` is embedded as is; for interoperable signatures pass the
    DER-encoded DigestInfo of the hash.

    Returns:
        key.byte_size signature bytes, or None if msg is too long
    """
    padded = signature_pad(key.byte_size, msg)
    if padded is None:
        return None
    return primitive.decrypt(key, padded, mask=mask)


def verify(key: PublicKey, signature: bytes) -> Optional[bytes]:
    """
    Recover the message embedded in a type 1 signature.

    Returns:
        The signed message, or None if the padding doesn't check out

    Raises:
        InvalidMessage: If the signature integer is outside [1, n)
    """
    return signature_unpad(primitive.encrypt(key, signature))


# ============================================================================
# ENCRYPTION PADDING (TYPE 2)
# ============================================================================

def _nonzero_bytes(count: int, rng: RandomSource) -> bytes:
    """
    Draw ``count`` random non-zero bytes.

    Zero bytes are discarded and more are drawn until the fill is complete.
    Terminates with probability 1.
    """
    out = bytearray()
    while len(out) < count:
        chunk = rng.random_bytes(2 * (count - len(out)))
        out.extend(b for b in chunk if b != 0)
    return bytes(out[:count])


def encryption_pad(size: int, data: bytes,
                   rng: Optional[RandomSource] = None) -> Optional[bytes]:
    """
    Build a type 2 block of exactly ``size`` bytes.

    Args:
        size: Block size (modulus size in bytes)
        data: Plaintext to embed
        rng: Source of the random fill (process default if omitted)

    Returns:
        00 02 | PS | 00 | data with len(PS) = size - len(data) - 3, or None
        if fewer than 8 fill bytes fit (len(data) > size - 11)
    """
    padlen = size - len(data) - BLOCK_OVERHEAD
    if padlen < MIN_PAD_LEN:
        return None

    fill = _nonzero_bytes(padlen, rng or default_source())
    return b'\x00\x02' + fill + b'\x00' + bytes(data)


def encryption_unpad(block: bytes, size: int) -> Optional[bytes]:
    """
    Strip type 2 padding.

    The block must be exactly ``size`` bytes and start with 00 02. The
    first 00 at index 2 or later is the separator; everything after it is
    the data. The scan always visits the whole block and every failure
    collapses into the same None result.

    Returns:
        The embedded data, or None
    """
    if len(block) != size or size < BLOCK_OVERHEAD:
        return None

    good_header = block[0] == 0x00 and block[1] == 0x02

    separator = 0
    for i in range(2, size):
        if block[i] == 0x00 and separator == 0:
            separator = i

    if not good_header or separator == 0:
        return None
    return bytes(block[separator + 1:])


def encrypt(key: PublicKey, data: bytes,
            rng: Optional[RandomSource] = None) -> Optional[bytes]:
    """
    PKCS#1 v1.5 encryption.

    Returns:
        key.byte_size ciphertext bytes, or None if data is longer than
        key.byte_size - 11
    """
    padded = encryption_pad(key.byte_size, data, rng=rng)
    if padded is None:
        return None
    return primitive.encrypt(key, padded)


def decrypt(key: PrivateKey, block: bytes, mask: Mask = Blind()) -> Optional[bytes]:
    """
    PKCS#1 v1.5 decryption.

    Returns:
        The plaintext, or None if the block has the wrong size or the
        decrypted padding is invalid

    Raises:
        InvalidMessage: If the ciphertext integer is outside [1, n)
    """
    size = key.byte_size
    if len(block) != size:
        return None
    return encryption_unpad(primitive.decrypt(key, block, mask=mask), size)
