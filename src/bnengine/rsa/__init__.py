# RSA Module
"""
Raw RSA primitives built on the bignum engine's modular exponentiation.
"""

from .rsa_math import (
    RSAKeyPair,
    rsa_encrypt,
    rsa_decrypt,
    rsa_sign,
    rsa_verify,
    private_exponent,
)

__all__ = [
    'RSAKeyPair',
    'rsa_encrypt',
    'rsa_decrypt',
    'rsa_sign',
    'rsa_verify',
    'private_exponent',
]
