# rsacore
"""
RSA public-key cryptosystem.

Modules:
- core_crypto: integer codec, number theory helpers, random sources, errors
- rsa: keys, primitives, key generation, PKCS#1 v1.5 padding
"""

__version__ = "0.1.0"
