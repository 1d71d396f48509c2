# bnengine Test Suite
"""
Unit tests for the bignum engine:
- Magnitude arithmetic
- Signed arithmetic and long division
- Storage, setters and byte conversion
- Modular exponentiation
- RSA primitives

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
