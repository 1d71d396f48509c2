"""
Magnitude Arithmetic

Unsigned operations on the word arrays of bignums. Nothing here looks at or
sets a sign; the signed layer (arith.py) decides signs and operand order.

Words are 32-bit and stored least-significant first. Carries and borrows are
propagated through a Python int accumulator that plays the role of a 64-bit
register: after each step the low 32 bits become the output word and the
accumulator is shifted down by 32.

Results are assembled in a local list and committed to the destination only
after its buffer has been grown, so the destination may alias an operand and
a failed growth leaves it untouched. mul_magnitude is the exception: it
accumulates directly in the destination buffer, which therefore must not
alias an operand.
"""

from typing import List

from .config import WORD_BITS, WORD_MASK
from .errors import InternalError


def _word(a, n: int) -> int:
    """Word n of a's magnitude, zero beyond its size."""
    return a.words[n] if n < a.size else 0


def is_zero(a) -> bool:
    """True iff every significant word is 0."""
    for n in range(a.size):
        if a.words[n]:
            return False
    return True


def trim(r, n: int) -> None:
    """Set r.size to n less any leading zero words, never below 1."""
    while n > 1 and r.words[n - 1] == 0:
        n -= 1
    r.size = n


def commit(r, out: List[int]) -> None:
    """Grow r to hold `out`, copy it in and trim."""
    n = len(out)
    r.ensure_capacity(n)
    r.words[:n] = out
    trim(r, n)


def compare_magnitude(a, b) -> int:
    """
    Compare |a| and |b|.

    Canonical values carry no leading zero words, so the shorter magnitude is
    the smaller one. Equal sizes are compared word by word from the top.

    Returns:
        -1, 0 or 1
    """
    if a.size < b.size:
        return -1
    if a.size > b.size:
        return 1

    for n in range(a.size - 1, -1, -1):
        if a.words[n] > b.words[n]:
            return 1
        if a.words[n] < b.words[n]:
            return -1

    return 0


def add_magnitude(r, a, b) -> None:
    """r = |a| + |b|."""
    m = max(a.size, b.size)
    out = []
    carry = 0

    for n in range(m):
        carry += _word(a, n) + _word(b, n)
        out.append(carry & WORD_MASK)
        carry >>= WORD_BITS

    if carry:
        out.append(carry)

    commit(r, out)


def sub_magnitude(r, a, b) -> None:
    """
    r = |a| - |b|.

    Requires |a| >= |b|. The signed layer reorders operands to guarantee it;
    a borrow out of the top word means the caller broke that contract.
    """
    out = []
    borrow = 0

    for n in range(a.size):
        diff = a.words[n] - _word(b, n) - borrow
        out.append(diff & WORD_MASK)
        borrow = (diff >> WORD_BITS) & 1

    if borrow or b.size > a.size:
        raise InternalError("sub_magnitude called with |a| < |b|")

    commit(r, out)


def mul_magnitude(r, a, b) -> None:
    """
    r = |a| * |b| using the schoolbook double loop.

    r is grown to a.size + b.size words and cleared before accumulation, so
    it must be a different object from both a and b.
    """
    if r is a or r is b:
        raise InternalError("mul_magnitude output aliases an operand")

    m = a.size + b.size
    r.ensure_capacity(m)

    words = r.words
    for n in range(m):
        words[n] = 0

    # iterate the longer operand in the inner loop
    if a.size < b.size:
        a, b = b, a

    for j in range(b.size):
        B = b.words[j]
        if B == 0:
            continue
        carry = 0
        for i in range(a.size):
            carry += a.words[i] * B + words[i + j]
            words[i + j] = carry & WORD_MASK
            carry >>= WORD_BITS
        words[j + a.size] = carry

    trim(r, m)


def mul_word(r, a, w: int) -> None:
    """r = |a| * w for a single word w."""
    out = []
    carry = 0

    for n in range(a.size):
        carry += a.words[n] * w
        out.append(carry & WORD_MASK)
        carry >>= WORD_BITS

    if carry:
        out.append(carry)

    commit(r, out)


def push_word(r, w: int) -> None:
    """r = |r| * 2**32 + w, shifting one word in at the bottom."""
    if is_zero(r):
        commit(r, [w])
    else:
        commit(r, [w] + r.words[:r.size])


def top_bits(a, k: int, shift: int) -> int:
    """
    Leading digits of |a| aligned against a k-word divisor.

    Returns floor(|a| * 2**shift / 2**(32*(k-1))) computed from the three
    words a[k], a[k-1] and a[k-2]. With `shift` chosen so that the divisor's
    top bit is set, this is the value Knuth's quotient estimate works with,
    without materializing the shifted operands.
    """
    value = (_word(a, k) << (2 * WORD_BITS)) | (_word(a, k - 1) << WORD_BITS)
    if k >= 2:
        value |= _word(a, k - 2)
    return (value << shift) >> WORD_BITS
