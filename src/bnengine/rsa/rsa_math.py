"""
RSA Operations on the Bignum Engine

Implements raw (textbook) RSA on top of the engine's modular exponentiation:
- Encryption / decryption: c = m^e mod n, m = c^d mod n
- Signing / verification: s = h^d mod n, s^e mod n == h
- Byte-level helpers using the engine's big-endian wire format

Key material comes from the `cryptography` package; the private exponent can
also be recomputed with the engine's own modular inverse.

Note: This is raw RSA without padding. It exists to exercise and
      demonstrate the numeric kernel, not as a complete RSA scheme.
"""

from typing import Tuple

from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.backends import default_backend

from ..core.arith import compare, multiply, subtract
from ..core.bignum import Bignum, Sign, init_many, release_many
from ..core.config import WORD_BITS
from ..core.modarith import powm, mod_inverse


DEFAULT_PUBLIC_EXPONENT = 65537


def _check_message(message: Bignum, n: Bignum) -> None:
    if message.get_sign() == Sign.NEGATIVE:
        raise ValueError("Message must be non-negative")
    if compare(message, n) >= 0:
        raise ValueError("Message must be less than modulus n")


def rsa_encrypt(message: Bignum, public_key: Tuple[Bignum, Bignum]) -> Bignum:
    """
    RSA encryption of a message.

    Computes ciphertext = message^e mod n

    Args:
        message: Integer message (must be < n)
        public_key: Tuple (e, n)

    Returns:
        Encrypted ciphertext
    """
    e, n = public_key
    _check_message(message, n)
    r = Bignum()
    powm(r, message, e, n)
    return r


def rsa_decrypt(ciphertext: Bignum, private_key: Tuple[Bignum, Bignum]) -> Bignum:
    """Computes message = ciphertext^d mod n."""
    d, n = private_key
    r = Bignum()
    powm(r, ciphertext, d, n)
    return r


def rsa_sign(message: Bignum, private_key: Tuple[Bignum, Bignum]) -> Bignum:
    """Computes signature = message^d mod n (message must be < n)."""
    d, n = private_key
    _check_message(message, n)
    r = Bignum()
    powm(r, message, d, n)
    return r


def rsa_verify(message: Bignum, signature: Bignum, public_key: Tuple[Bignum, Bignum]) -> bool:
    """Checks if signature^e mod n == message."""
    e, n = public_key
    with Bignum() as decrypted:
        powm(decrypted, signature, e, n)
        return compare(decrypted, message) == 0


def private_exponent(e: Bignum, p: Bignum, q: Bignum) -> Bignum:
    """
    Compute d = e^(-1) mod φ(n), with φ(n) = (p-1)(q-1).

    Raises:
        NoInverseError: If e is not coprime to φ(n)
    """
    one, p1, q1, phi = init_many(4)
    try:
        one.set_ui(1)
        subtract(p1, p, one)
        subtract(q1, q, one)
        multiply(phi, p1, q1)
        d = Bignum()
        mod_inverse(d, e, phi)
        return d
    finally:
        release_many(one, p1, q1, phi)


class RSAKeyPair:
    """
    RSA key pair container with convenient methods.

    Example:
        >>> keypair = RSAKeyPair.generate(bits=512)
        >>> message = Bignum.from_int(12345)
        >>> int(keypair.decrypt(keypair.encrypt(message)))
        12345
    """

    def __init__(self, e: Bignum, d: Bignum, n: Bignum):
        """
        Initialize with existing key components.

        Args:
            e: Public exponent
            d: Private exponent
            n: Modulus
        """
        self._e = e
        self._d = d
        self._n = n

    @classmethod
    def generate(cls, bits: int = 2048, public_exponent: int = DEFAULT_PUBLIC_EXPONENT) -> 'RSAKeyPair':
        """
        Generate a new RSA key pair.

        Args:
            bits: Bit length of modulus n
            public_exponent: Public exponent e

        Returns:
            New RSAKeyPair instance
        """
        private_key = rsa.generate_private_key(
            public_exponent=public_exponent,
            key_size=bits,
            backend=default_backend()
        )
        return cls.from_private_key(private_key)

    @classmethod
    def from_private_key(cls, private_key: rsa.RSAPrivateKey) -> 'RSAKeyPair':
        """Build a key pair from a `cryptography` RSA private key."""
        private_numbers = private_key.private_numbers()
        public_numbers = private_numbers.public_numbers
        return cls(
            Bignum.from_int(public_numbers.e),
            Bignum.from_int(private_numbers.d),
            Bignum.from_int(public_numbers.n),
        )

    @classmethod
    def from_primes(cls, p: Bignum, q: Bignum, e: Bignum) -> 'RSAKeyPair':
        """Build a key pair from two primes, computing n and d with the engine."""
        n = Bignum()
        multiply(n, p, q)
        return cls(e, private_exponent(e, p, q), n)

    @property
    def public_key(self) -> Tuple[Bignum, Bignum]:
        """Public key (e, n)."""
        return self._e, self._n

    @property
    def private_key(self) -> Tuple[Bignum, Bignum]:
        """Private key (d, n)."""
        return self._d, self._n

    @property
    def modulus(self) -> Bignum:
        """Modulus n."""
        return self._n

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        top = self._n.words[self._n.size - 1]
        return (self._n.size - 1) * WORD_BITS + top.bit_length()

    def encrypt(self, message: Bignum) -> Bignum:
        """Encrypt a message using public key."""
        return rsa_encrypt(message, self.public_key)

    def decrypt(self, ciphertext: Bignum) -> Bignum:
        """Decrypt a ciphertext using private key."""
        return rsa_decrypt(ciphertext, self.private_key)

    def sign(self, message: Bignum) -> Bignum:
        """Sign a message using private key."""
        return rsa_sign(message, self.private_key)

    def verify(self, message: Bignum, signature: Bignum) -> bool:
        """Verify a signature using public key."""
        return rsa_verify(message, signature, self.public_key)

    def encrypt_bytes(self, data: bytes) -> bytes:
        """Encrypt bytes (must be shorter than key size)."""
        message = Bignum.from_bytes(data)
        if compare(message, self._n) >= 0:
            raise ValueError("Data too long for key size")
        return _fixed_length(self.encrypt(message), self._n.byte_length())

    def decrypt_bytes(self, data: bytes) -> bytes:
        """Decrypt bytes."""
        return self.decrypt(Bignum.from_bytes(data)).to_bytes()

    def __repr__(self) -> str:
        return f"RSAKeyPair(bits={self.key_size}, e={int(self._e)})"


def _fixed_length(value: Bignum, length: int) -> bytes:
    """Minimal export left-padded with zero bytes to `length`."""
    return value.to_bytes().rjust(length, b'\x00')
