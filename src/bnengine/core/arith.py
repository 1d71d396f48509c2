"""
Signed Bignum Arithmetic

In-place operations of the form op(r, a, b): the result is written into r,
which may be the same object as a or b.

Sign handling for add/subtract reduces every case to unsigned magnitude
addition or subtraction (magnitude.py) with the operands reordered so the
larger magnitude is always the minuend:

    r = a + b       -> |a| + |b|, sign of a
    r = a + (-b)    -> |a| - |b| or |b| - |a|, sign of the larger
    r = (-a) - b    -> |a| + |b|, sign of a
    r = a - b       -> |a| - |b| or |b| - |a|, sign flipped when swapped

Division truncates toward zero: the quotient takes the XOR of the operand
signs and the remainder takes the sign of the numerator, so that
numerator == quotient * denominator + remainder always holds.
"""

from typing import Optional

from . import config
from .config import WORD_BITS, WORD_MASK
from .bignum import Bignum, Sign, copy, init_many, release_many
from .errors import DivisionByZeroError, InternalError
from .magnitude import (
    is_zero, compare_magnitude, add_magnitude, sub_magnitude,
    mul_magnitude, mul_word, push_word, top_bits, commit,
)
from ..integration.event_logger import EventType


def _flip(sign: Sign) -> Sign:
    return Sign(-sign)


def _set_zero(r: Bignum) -> None:
    r.ensure_capacity(1)
    r.words[0] = 0
    r.size = 1
    r.sign = Sign.POSITIVE


def _finish(r: Bignum, sign: Sign) -> None:
    """Assign the sign, keep zero positive and optionally validate."""
    r.sign = sign
    r.normalize_zero()
    if config.get_config().check_invariants:
        r.validate()


def _require(*values: Bignum) -> None:
    for value in values:
        value.require_number()


# ============================================================================
# Add / Subtract / Compare / Negate
# ============================================================================

def add(r: Bignum, a: Bignum, b: Bignum) -> None:
    """r = a + b."""
    _require(a, b)

    if a.sign != b.sign:
        m = compare_magnitude(a, b)
        if m >= 0:
            larger, smaller = a, b
        else:
            larger, smaller = b, a
        sign = larger.sign if m != 0 else Sign.POSITIVE
        sub_magnitude(r, larger, smaller)
    else:
        sign = a.sign
        add_magnitude(r, a, b)

    _finish(r, sign)


def subtract(r: Bignum, a: Bignum, b: Bignum) -> None:
    """r = a - b."""
    _require(a, b)

    if a.sign != b.sign:
        sign = a.sign
        add_magnitude(r, a, b)
    elif compare_magnitude(a, b) < 0:
        sign = _flip(a.sign)
        sub_magnitude(r, b, a)
    else:
        sign = a.sign
        sub_magnitude(r, a, b)

    _finish(r, sign)


def compare(a: Bignum, b: Bignum) -> int:
    """
    Compare two bignums.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    _require(a, b)

    if a.sign != b.sign:
        return -1 if a.sign == Sign.NEGATIVE else 1

    return int(a.sign) * compare_magnitude(a, b)


def negate(a: Bignum) -> None:
    """Flip the sign of a in place. Zero stays positive."""
    a.require_number()
    if not is_zero(a):
        a.sign = _flip(a.sign)


# ============================================================================
# Small Integer Helpers
# ============================================================================

def add_ui(r: Bignum, value: int) -> None:
    """r = r + value for an unsigned 32-bit value."""
    r.require_number()
    with Bignum() as t:
        t.set_ui(value)
        add(r, r, t)


def add_si(r: Bignum, value: int) -> None:
    """r = r + value for a signed 32-bit value."""
    r.require_number()
    with Bignum() as t:
        t.set_si(value)
        add(r, r, t)


def cmp_ui(a: Bignum, value: int) -> int:
    """Compare a against an unsigned 32-bit value (-1, 0 or 1)."""
    a.require_number()
    if a.sign == Sign.NEGATIVE:
        return -1
    if a.size > 1:
        return 1
    if a.words[0] == value:
        return 0
    return 1 if a.words[0] > value else -1


# ============================================================================
# Multiply
# ============================================================================

def multiply(r: Bignum, a: Bignum, b: Bignum) -> None:
    """
    r = a * b (schoolbook).

    The product is accumulated in a scratch value of a.size + b.size words
    and copied into r afterwards, so r may alias a or b. The scratch value is
    released on every path.
    """
    _require(a, b)

    if is_zero(a) or is_zero(b):
        _set_zero(r)
        return

    sign = Sign(a.sign * b.sign)

    scratch = Bignum()
    try:
        mul_magnitude(scratch, a, b)
        scratch.sign = sign
        copy(r, scratch)
    finally:
        scratch.release()

    _finish(r, sign)


# ============================================================================
# Divide
# ============================================================================

def divide(
    q: Optional[Bignum],
    rem: Optional[Bignum],
    numerator: Bignum,
    denominator: Bignum
) -> None:
    """
    Long division: q = numerator / denominator, rem = numerator % denominator.

    Algorithm (one numerator word per step, most significant first):
    1. Shift the next numerator word into the remainder accumulator
    2. Shift a zero word into the quotient
    3. Estimate the quotient digit from the leading words of the
       accumulator and the divisor (Knuth's estimate; it is never too small
       and at most 2 too large)
    4. Subtract digit * divisor, correcting the digit by repeated
       subtraction of the divisor while the product is too large
    5. Add the digit into the quotient

    Either output may be None. Outputs are only written once the whole
    division has succeeded, so they may alias the inputs; q and rem must be
    distinct objects.

    Raises:
        DivisionByZeroError: If the denominator is zero (outputs untouched)
    """
    _require(numerator, denominator)
    if q is not None and q is rem:
        raise InternalError("Quotient and remainder must be distinct bignums")

    if is_zero(denominator):
        config.emit(EventType.DIV_BY_ZERO, numerator_words=numerator.size)
        raise DivisionByZeroError("Division by zero")

    quot_sign = Sign(numerator.sign * denominator.sign)
    rem_sign = numerator.sign

    if compare_magnitude(numerator, denominator) < 0:
        # quotient is zero and the remainder is the numerator itself
        if q is not None:
            q.ensure_capacity(1)
        if rem is not None:
            copy(rem, numerator)
        if q is not None:
            _set_zero(q)
        return

    quot, acc, t = init_many(3)
    try:
        quot.set_ui(0)
        acc.set_ui(0)

        k = denominator.size
        shift = WORD_BITS - denominator.words[k - 1].bit_length()
        d_top = top_bits(denominator, k, shift)

        for i in range(numerator.size - 1, -1, -1):
            push_word(acc, numerator.words[i])
            push_word(quot, 0)

            if compare_magnitude(acc, denominator) < 0:
                continue

            digit = min(top_bits(acc, k, shift) // d_top, WORD_MASK)
            mul_word(t, denominator, digit)
            while compare_magnitude(t, acc) > 0:
                sub_magnitude(t, t, denominator)
                digit -= 1
            sub_magnitude(acc, acc, t)

            add_ui(quot, digit)

        if compare_magnitude(acc, denominator) >= 0:
            raise InternalError("Remainder not reduced below the denominator")

        quot.sign = quot_sign
        quot.normalize_zero()
        acc.sign = rem_sign
        acc.normalize_zero()

        # grow both outputs before writing either
        if q is not None:
            q.ensure_capacity(quot.size)
        if rem is not None:
            rem.ensure_capacity(acc.size)
        if rem is not None:
            copy(rem, acc)
        if q is not None:
            copy(q, quot)
    finally:
        release_many(quot, acc, t)

    if config.get_config().check_invariants:
        for out in (q, rem):
            if out is not None:
                out.validate()


# ============================================================================
# Shifts
# ============================================================================

def _check_shift(n: int) -> None:
    if not 0 <= n < WORD_BITS:
        raise InternalError(f"Shift count must be in [0, {WORD_BITS}), got {n}")


def shift_left(r: Bignum, a: Bignum, n: int) -> None:
    """r = a << n for 0 <= n < 32; may grow r by one word."""
    a.require_number()
    _check_shift(n)

    out = []
    carry = 0
    for i in range(a.size):
        w = a.words[i]
        out.append(((w << n) & WORD_MASK) | carry)
        carry = w >> (WORD_BITS - n)
    if carry:
        out.append(carry)

    sign = a.sign
    commit(r, out)
    _finish(r, sign)


def shift_right(r: Bignum, a: Bignum, n: int) -> None:
    """
    r = a >> n for 0 <= n < 32.

    The magnitude is shifted and the sign copied; the bit pattern is not
    sign-extended.
    """
    a.require_number()
    _check_shift(n)

    out = []
    for i in range(a.size):
        high = a.words[i + 1] if i + 1 < a.size else 0
        out.append((a.words[i] >> n) | ((high << (WORD_BITS - n)) & WORD_MASK))

    sign = a.sign
    commit(r, out)
    _finish(r, sign)
