# rsacore Test Suite
"""
Test suite including:
- Unit tests (codec, random sources, keys, primitives, padding)
- Security tests (malformed and hostile inputs)
- Interoperability tests against the cryptography package

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
