"""
Exceptions raised by the RSA core.

Only caller-contract violations are raised. Malformed padding is reported
through ``None`` results by the PKCS#1 layer and never reaches this module.
"""


class RSAError(ValueError):
    """Base class for RSA input-contract violations."""
    pass


class InvalidMessage(RSAError):
    """Raised when a message, ciphertext or signature integer is outside [1, n)."""
    pass


class InvalidKey(RSAError):
    """Raised when key parameters are inconsistent."""
    pass
