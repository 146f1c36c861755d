"""
Conversion between rsacore keys and ``cryptography`` key objects.

Goes through RSAPublicNumbers / RSAPrivateNumbers, so no serialization
format is involved. Useful for checking output against a mainstream
implementation, or for handing a key generated here to code that expects
a ``cryptography`` key.
"""

from typing import Union

from cryptography.hazmat.primitives.asymmetric import rsa

from .keys import PrivateKey, PublicKey


def to_cryptography(key: Union[PublicKey, PrivateKey]
                    ) -> Union[rsa.RSAPublicKey, rsa.RSAPrivateKey]:
    """
    Convert a key to its ``cryptography`` equivalent.

    Private keys keep their CRT parameters as is.

    Raises:
        TypeError: If ``key`` is not a PublicKey or PrivateKey
    """
    if not isinstance(key, (PublicKey, PrivateKey)):
        raise TypeError(f"Not an RSA key: {type(key).__name__}")

    public_numbers = rsa.RSAPublicNumbers(e=key.e, n=key.n)
    if isinstance(key, PrivateKey):
        return rsa.RSAPrivateNumbers(
            p=key.p,
            q=key.q,
            d=key.d,
            dmp1=key.dp,
            dmq1=key.dq,
            iqmp=key.q_inv,
            public_numbers=public_numbers,
        ).private_key()
    return public_numbers.public_key()


def from_cryptography(key: Union[rsa.RSAPublicKey, rsa.RSAPrivateKey]
                      ) -> Union[PublicKey, PrivateKey]:
    """
    Convert a ``cryptography`` RSA key.

    Raises:
        InvalidKey: If the numbers violate a key invariant
        TypeError: If ``key`` is not an RSA key
    """
    if isinstance(key, rsa.RSAPrivateKey):
        numbers = key.private_numbers()
        return PrivateKey(
            e=numbers.public_numbers.e,
            d=numbers.d,
            n=numbers.public_numbers.n,
            p=numbers.p,
            q=numbers.q,
            dp=numbers.dmp1,
            dq=numbers.dmq1,
            q_inv=numbers.iqmp,
        )
    if isinstance(key, rsa.RSAPublicKey):
        numbers = key.public_numbers()
        return PublicKey(e=numbers.e, n=numbers.n)
    raise TypeError(f"Not an RSA key: {type(key).__name__}")
