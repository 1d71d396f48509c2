"""
Unit tests for the magnitude (unsigned) layer.
"""

import pytest

from bnengine.core.bignum import Bignum
from bnengine.core.errors import InternalError
from bnengine.core.magnitude import (
    is_zero, trim, compare_magnitude, add_magnitude, sub_magnitude,
    mul_magnitude, mul_word, push_word, top_bits,
)


def words_of(value: int) -> list:
    """Reference word split of a non-negative int, least significant first."""
    out = []
    while True:
        out.append(value & 0xFFFFFFFF)
        value >>= 32
        if not value:
            return out


class TestZeroAndTrim:
    """Tests for is_zero and trim."""

    def test_zero_is_zero(self):
        """Canonical zero is zero."""
        assert is_zero(Bignum.from_int(0))

    def test_nonzero(self):
        """A value with any non-zero word is not zero."""
        assert not is_zero(Bignum.from_int(1 << 40))

    def test_trim_drops_leading_zero_words(self):
        """trim shrinks size past leading zero words."""
        a = Bignum.from_int(5)
        a.ensure_capacity(4)
        a.words[1:4] = [0, 0, 0]
        trim(a, 4)
        assert a.size == 1

    def test_trim_never_below_one(self):
        """trim keeps at least one word."""
        a = Bignum.from_int(0)
        a.ensure_capacity(3)
        a.words[:3] = [0, 0, 0]
        trim(a, 3)
        assert a.size == 1


class TestCompareMagnitude:
    """Tests for compare_magnitude."""

    def test_shorter_is_smaller(self):
        """A value with fewer words is smaller."""
        assert compare_magnitude(Bignum.from_int(0xFFFFFFFF), Bignum.from_int(1 << 32)) == -1

    def test_most_significant_word_decides(self):
        """Equal sizes compare from the top word down."""
        a = Bignum.from_int((2 << 32) | 1)
        b = Bignum.from_int((1 << 32) | 0xFFFFFFFF)
        assert compare_magnitude(a, b) == 1
        assert compare_magnitude(b, a) == -1

    def test_sign_ignored(self):
        """Magnitude comparison ignores signs."""
        assert compare_magnitude(Bignum.from_int(-7), Bignum.from_int(7)) == 0


class TestAddSubMagnitude:
    """Tests for add_magnitude and sub_magnitude."""

    def test_carry_adds_word(self):
        """A final carry produces an extra word."""
        r = Bignum.from_int(0)
        add_magnitude(r, Bignum.from_int(0xFFFFFFFF), Bignum.from_int(1))
        assert r.size == 2
        assert r.words[:2] == [0, 1]

    def test_carry_ripples(self):
        """Carries propagate across several words."""
        r = Bignum.from_int(0)
        add_magnitude(r, Bignum.from_int((1 << 96) - 1), Bignum.from_int(1))
        assert r.words[:r.size] == words_of(1 << 96)

    def test_add_into_operand(self):
        """The destination may be one of the operands."""
        a = Bignum.from_int(123456789012345678901234567890)
        add_magnitude(a, a, a)
        assert int(a) == 2 * 123456789012345678901234567890

    def test_borrow_ripples(self):
        """Borrows propagate and the result is trimmed."""
        r = Bignum.from_int(0)
        sub_magnitude(r, Bignum.from_int(1 << 96), Bignum.from_int(1))
        assert r.words[:r.size] == words_of((1 << 96) - 1)

    def test_sub_to_zero_trims(self):
        """Subtracting equal magnitudes leaves one zero word."""
        a = Bignum.from_int(1 << 100)
        r = Bignum.from_int(0)
        sub_magnitude(r, a, a)
        assert r.size == 1 and r.words[0] == 0

    def test_sub_precondition_violation(self):
        """A smaller minuend is reported as an internal error."""
        r = Bignum.from_int(0)
        with pytest.raises(InternalError):
            sub_magnitude(r, Bignum.from_int(1), Bignum.from_int(2))


class TestMulMagnitude:
    """Tests for mul_magnitude, mul_word and push_word."""

    def test_schoolbook_product(self):
        """Multi-word product matches the reference."""
        x = 0xDEADBEEFCAFEBABE1234567890
        y = 0xFEEDFACE0123456789ABCDEF
        r = Bignum()
        mul_magnitude(r, Bignum.from_int(x), Bignum.from_int(y))
        assert r.words[:r.size] == words_of(x * y)

    def test_output_must_not_alias(self):
        """mul_magnitude refuses an aliased destination."""
        a = Bignum.from_int(3)
        with pytest.raises(InternalError):
            mul_magnitude(a, a, Bignum.from_int(2))

    def test_mul_word(self):
        """Multiplying by one word."""
        r = Bignum()
        mul_word(r, Bignum.from_int((1 << 64) - 1), 0xFFFFFFFF)
        assert r.words[:r.size] == words_of(((1 << 64) - 1) * 0xFFFFFFFF)

    def test_push_word(self):
        """push_word shifts a word in at the bottom."""
        r = Bignum.from_int(0xABCD)
        push_word(r, 0x1234)
        assert r.words[:r.size] == [0x1234, 0xABCD]

    def test_push_word_into_zero(self):
        """Pushing into zero yields just the word."""
        r = Bignum.from_int(0)
        push_word(r, 0)
        assert r.size == 1 and r.words[0] == 0


class TestTopBits:
    """Tests for the quotient-estimate helper."""

    def test_single_word_divisor(self):
        """For one-word divisors the whole value is shifted."""
        a = Bignum.from_int(0x1_0000_0005)
        assert top_bits(a, 1, 4) == 0x1_0000_0005 << 4

    def test_extracts_leading_bits(self):
        """Leading bits are taken from words k, k-1 and k-2."""
        value = (0x3 << 96) | (0x80000001 << 64) | (0xF0000000 << 32) | 0x1
        a = Bignum.from_int(value)
        assert top_bits(a, 3, 4) == value >> (64 - 4)
