"""Pytest fixtures for rsacore tests."""
import pytest

from rsacore.core_crypto.rng import SeededRandomSource
from rsacore.rsa.keys import PrivateKey
from tests.keys import P_25519, P_SECP256K1, E_DEFAULT


@pytest.fixture
def key():
    """511-bit CRT private key built from fixed primes."""
    return PrivateKey.from_primes(E_DEFAULT, P_25519, P_SECP256K1)


@pytest.fixture
def pub(key):
    """Public half of the fixed key."""
    return key.public_key()


@pytest.fixture
def toy_key():
    """Textbook key: p=61, q=53, e=17, d=2753."""
    return PrivateKey.from_primes(17, 61, 53)


@pytest.fixture
def seeded_rng():
    """Deterministic random source."""
    return SeededRandomSource(1234)
