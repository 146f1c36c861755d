# RSA Module
"""
RSA implementations including:
- Public / CRT private key model - keys.py
- Raw, CRT and blinded primitives - primitive.py
- Debug-only key generation - keygen.py
- PKCS#1 v1.5 signature and encryption padding - pkcs1.py
- Conversion to / from ``cryptography`` keys - interop.py

Security features:
- Blinded decryption by default
- Padding failures reported as None, without a reason
- Secret key fields hidden from repr()
"""

from .keys import PublicKey, PrivateKey, format_private_key

from .primitive import (
    Mask,
    NoMask,
    Blind,
    BlindWith,
    encrypt_unsafe,
    decrypt_unsafe,
    decrypt_blinded_unsafe,
    encrypt_int,
    decrypt_int,
    encrypt,
    decrypt,
)

from .keygen import generate_insecure, DEFAULT_PUBLIC_EXPONENT

from .interop import to_cryptography, from_cryptography

from . import pkcs1

__all__ = [
    'PublicKey',
    'PrivateKey',
    'format_private_key',
    'Mask',
    'NoMask',
    'Blind',
    'BlindWith',
    'encrypt_unsafe',
    'decrypt_unsafe',
    'decrypt_blinded_unsafe',
    'encrypt_int',
    'decrypt_int',
    'encrypt',
    'decrypt',
    'generate_insecure',
    'DEFAULT_PUBLIC_EXPONENT',
    'to_cryptography',
    'from_cryptography',
    'pkcs1',
]
