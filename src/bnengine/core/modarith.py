"""
Modular Arithmetic on Bignums

Implements the composite operations used by public-key primitives:
- Modular exponentiation (square-and-multiply algorithm)
- Greatest common divisor (Euclidean algorithm)
- Modular inverse (Extended Euclidean Algorithm)

All working values are temporaries with their own init/release lifecycle;
caller inputs are never modified. Results are accumulated in temporaries and
copied out at the end, so the output may alias any input.

Reductions use the truncating remainder from arith.divide. With a
non-negative base the result lies in [0, m); a negative base gives a result
in (-m, 0] when the power is negative.
"""

from . import config
from .arith import add, subtract, multiply, divide, shift_right, cmp_ui
from .bignum import Bignum, Sign, copy, init_many, release_many
from .errors import DivisionByZeroError, NotImplementedOperationError, NoInverseError
from .magnitude import is_zero
from ..integration.event_logger import EventType


def _require_modulus(modulus: Bignum) -> None:
    if is_zero(modulus):
        config.emit(EventType.DIV_BY_ZERO, numerator_words=0)
        raise DivisionByZeroError("Modulus must be non-zero")
    if modulus.sign == Sign.NEGATIVE:
        raise NotImplementedOperationError("Negative moduli are not supported")


def powm(r: Bignum, base: Bignum, exponent: Bignum, modulus: Bignum) -> None:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Computes r = (base^exponent) mod modulus.

    Algorithm (right-to-left binary method):
    1. Start with result = 1 (mod modulus)
    2. For each bit of exponent (from LSB to MSB):
       - If bit is 1, multiply result by base (mod modulus)
       - Square the base (mod modulus)

    Time complexity: O(log exponent) multiply + reduce steps

    Raises:
        DivisionByZeroError: If modulus is zero
        NotImplementedOperationError: If exponent or modulus is negative
    """
    for value in (base, exponent, modulus):
        value.require_number()
    _require_modulus(modulus)
    if exponent.sign == Sign.NEGATIVE:
        raise NotImplementedOperationError("Negative exponents are not supported")

    config.emit(EventType.POWM_START, exponent_words=exponent.size, modulus_words=modulus.size)

    acc, b, e, t = init_many(4)
    try:
        # 1 mod modulus (0 when modulus is 1)
        acc.set_ui(1)
        divide(None, acc, acc, modulus)

        divide(None, b, base, modulus)
        copy(e, exponent)

        while not is_zero(e):
            # If current bit is 1, multiply result by base
            if e.words[0] & 1:
                multiply(t, acc, b)
                divide(None, acc, t, modulus)

            shift_right(e, e, 1)

            # Square the base for the next bit
            if not is_zero(e):
                multiply(t, b, b)
                divide(None, b, t, modulus)

        copy(r, acc)
    finally:
        release_many(acc, b, e, t)

    config.emit(EventType.POWM_DONE, result_words=r.size)


def gcd(r: Bignum, a: Bignum, b: Bignum) -> None:
    """
    Greatest common divisor using Euclidean algorithm.

    The result is non-negative; gcd(0, 0) is 0.
    """
    a.require_number()
    b.require_number()

    x, y, t = init_many(3)
    try:
        copy(x, a)
        x.sign = Sign.POSITIVE
        copy(y, b)
        y.sign = Sign.POSITIVE

        while not is_zero(y):
            divide(None, t, x, y)
            copy(x, y)
            copy(y, t)

        copy(r, x)
    finally:
        release_many(x, y, t)


def mod_inverse(r: Bignum, a: Bignum, m: Bignum) -> None:
    """
    Modular multiplicative inverse using Extended Euclidean Algorithm.

    Finds r in [0, m) such that (a * r) mod m = 1.

    Raises:
        NoInverseError: If gcd(a, m) != 1
        DivisionByZeroError: If m is zero
        NotImplementedOperationError: If m is negative
    """
    a.require_number()
    m.require_number()
    _require_modulus(m)

    old_r, cur_r, old_s, cur_s, q, t = init_many(6)
    try:
        divide(None, old_r, a, m)
        if old_r.sign == Sign.NEGATIVE:
            add(old_r, old_r, m)
        copy(cur_r, m)
        old_s.set_ui(1)
        cur_s.set_ui(0)

        while not is_zero(cur_r):
            divide(q, t, old_r, cur_r)
            copy(old_r, cur_r)
            copy(cur_r, t)

            multiply(t, q, cur_s)
            subtract(t, old_s, t)
            copy(old_s, cur_s)
            copy(cur_s, t)

        if cmp_ui(old_r, 1) != 0:
            raise NoInverseError(f"Modular inverse doesn't exist (gcd = 0x{old_r.to_hex()})")

        divide(None, t, old_s, m)
        if t.sign == Sign.NEGATIVE:
            add(t, t, m)
        copy(r, t)
    finally:
        release_many(old_r, cur_r, old_s, cur_s, q, t)
