"""
Unit tests for modular arithmetic.

Tests:
- Modular exponentiation (square-and-multiply)
- GCD computation
- Modular inverse
"""

import random

import pytest

from bnengine.core import (
    Bignum, AllocationMode, configure, set_config, get_config, powm, gcd,
    mod_inverse, DivisionByZeroError, NotImplementedOperationError,
    NotANumberError, NoInverseError, NumberTooBigError,
)
from bnengine.integration import EventLogger, EventType


def big(value: int) -> Bignum:
    return Bignum.from_int(value)


def modexp(base: int, exponent: int, modulus: int) -> int:
    r = Bignum()
    powm(r, big(base), big(exponent), big(modulus))
    return int(r)


class TestPowm:
    """Tests for modular exponentiation."""

    def test_small_vector(self):
        """4^13 mod 497 = 445."""
        assert modexp(4, 13, 497) == 445

    def test_basic_cases(self):
        """Test basic modular exponentiation cases."""
        assert modexp(2, 10, 1000) == 24
        assert modexp(3, 4, 5) == 1
        assert modexp(5, 3, 13) == 8

    def test_zero_exponent(self):
        """x^0 = 1 mod m."""
        assert modexp(12345, 0, 97) == 1

    def test_modulus_one(self):
        """Everything is 0 mod 1."""
        assert modexp(7, 0, 1) == 0
        assert modexp(7, 5, 1) == 0

    def test_zero_base(self):
        """0^e = 0 for e > 0."""
        assert modexp(0, 9, 31) == 0

    def test_base_larger_than_modulus(self):
        """The base is reduced first."""
        assert modexp(10 ** 30 + 7, 3, 1009) == pow(10 ** 30 + 7, 3, 1009)

    def test_matches_builtin_pow(self):
        """Multi-word operands agree with pow()."""
        rng = random.Random(1337)
        for _ in range(8):
            m = rng.getrandbits(256) | 1
            b = rng.getrandbits(300)
            e = rng.getrandbits(64)
            assert modexp(b, e, m) == pow(b, e, m)

    def test_negative_base(self):
        """A negative base gives a congruent result in (-m, 0]."""
        result = modexp(-2, 3, 5)
        assert -5 < result <= 0
        assert (result - pow(-2, 3, 5)) % 5 == 0

    def test_result_may_alias_inputs(self):
        """The output may be the base, exponent or modulus."""
        b, e, m = big(4), big(13), big(497)
        powm(b, b, e, m)
        assert int(b) == 445

        b, e, m = big(4), big(13), big(497)
        powm(m, b, e, m)
        assert int(m) == 445

        e = big(13)
        powm(e, big(4), e, big(497))
        assert int(e) == 445

    def test_inputs_unchanged(self):
        """Caller inputs are not modified."""
        b, e, m = big(123456789), big(65537), big(1000000007)
        powm(Bignum(), b, e, m)
        assert (int(b), int(e), int(m)) == (123456789, 65537, 1000000007)

    def test_zero_modulus(self):
        """A zero modulus is a division by zero."""
        with pytest.raises(DivisionByZeroError):
            modexp(2, 3, 0)

    def test_negative_exponent(self):
        """Negative exponents are not implemented."""
        with pytest.raises(NotImplementedOperationError):
            modexp(2, -3, 7)

    def test_negative_modulus(self):
        """Negative moduli are not implemented."""
        with pytest.raises(NotImplementedOperationError):
            modexp(2, 3, -7)

    def test_nan_input(self):
        """Inputs must hold numbers."""
        with pytest.raises(NotANumberError):
            powm(Bignum(), Bignum(), big(1), big(7))


@pytest.fixture
def small_static_engine():
    """Four-word static buffers with an event log; yields the log."""
    event_logger = EventLogger()
    previous = configure(mode=AllocationMode.STATIC, max_words=4, event_logger=event_logger)
    yield event_logger
    set_config(previous)


@pytest.fixture
def static_engine():
    """64-word static buffers."""
    previous = configure(mode=AllocationMode.STATIC, max_words=64)
    yield
    set_config(previous)


class TestStaticPowm:
    """Tests for modular exponentiation on fixed-capacity buffers."""

    def test_matches_builtin_pow(self, static_engine):
        """Multi-word operands agree with pow()."""
        rng = random.Random(4242)
        for _ in range(8):
            m = rng.getrandbits(256) | 1
            b = rng.getrandbits(300)
            e = rng.getrandbits(64)
            assert modexp(b, e, m) == pow(b, e, m)

    def test_widest_modulus(self, small_static_engine):
        """A modulus of max_words // 2 words works."""
        assert get_config().max_modulus_bits == 64
        m = (1 << 64) - 59
        assert modexp(3, 1000, m) == pow(3, 1000, m)

    def test_overflow_releases_temporaries(self, small_static_engine):
        """A product that outgrows the buffer leaves r alone and frees every temporary."""
        events = small_static_engine
        r = big(42)
        with pytest.raises(NumberTooBigError):
            powm(r, big((1 << 95) + 3), big(5), big((1 << 96) + 7))
        assert int(r) == 42

        history = events.get_all_events()
        assert history[-6].event_type == EventType.GROWTH_REFUSED
        assert all(e.event_type == EventType.RELEASE for e in history[-5:])
        assert len(events.get_events_by_type(EventType.RELEASE)) == 6
        assert events.get_events_by_type(EventType.POWM_START)
        assert not events.get_events_by_type(EventType.POWM_DONE)


class TestGCD:
    """Tests for greatest common divisor."""

    def test_gcd_basic(self):
        """Test basic GCD cases."""
        cases = [(48, 18, 6), (17, 13, 1), (100, 25, 25), (0, 5, 5), (5, 0, 5), (0, 0, 0)]
        for a, b, expected in cases:
            r = Bignum()
            gcd(r, big(a), big(b))
            assert int(r) == expected

    def test_gcd_signs_ignored(self):
        """The result is non-negative."""
        r = Bignum()
        gcd(r, big(-48), big(18))
        assert int(r) == 6

    def test_gcd_multi_word(self):
        """Large operands with a known common factor."""
        f = (1 << 127) - 1
        r = Bignum()
        gcd(r, big(f * 3 * 5), big(f * 7))
        assert int(r) == f


class TestModInverse:
    """Tests for modular inverse."""

    def test_mod_inverse_basic(self):
        """Test basic modular inverse cases."""
        for a, m, expected in [(3, 11, 4), (10, 17, 12), (7, 26, 15)]:
            r = Bignum()
            mod_inverse(r, big(a), big(m))
            assert int(r) == expected
            assert (a * expected) % m == 1

    def test_negative_operand(self):
        """Negative values are reduced into [0, m)."""
        r = Bignum()
        mod_inverse(r, big(-3), big(11))
        assert int(r) == pow(-3, -1, 11)

    def test_multi_word(self):
        """Large modulus agrees with pow(a, -1, m)."""
        m = (1 << 521) - 1
        a = 0x1234567890ABCDEF1234567890ABCDEF
        r = Bignum()
        mod_inverse(r, big(a), big(m))
        assert int(r) == pow(a, -1, m)

    def test_no_inverse(self):
        """Test that non-coprime numbers raise error."""
        with pytest.raises(NoInverseError):
            mod_inverse(Bignum(), big(6), big(9))

    def test_no_inverse_is_value_error(self):
        """NoInverseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            mod_inverse(Bignum(), big(4), big(8))

    def test_zero_modulus(self):
        """A zero modulus is a division by zero."""
        with pytest.raises(DivisionByZeroError):
            mod_inverse(Bignum(), big(3), big(0))
