"""
Bignum Value Implementation

A signed integer of unbounded (or configuration-bounded) magnitude stored as
a sign and an array of 32-bit words, least-significant word first.

Lifecycle:
1. Bignum() initializes the value (sign NAN, "holds no number")
2. A setter or byte import gives it a value
3. Arithmetic in arith.py mutates it in place
4. release() drops the buffer; init() makes it usable again

Byte format (set_bytes / get_bytes):
    big-endian unsigned magnitude, minimal length; negative values are
    exported as two's complement over exactly the written length.
"""

from enum import IntEnum
from typing import List, Optional

from . import config
from .config import AllocationMode, WORD_BITS, WORD_BYTES, WORD_MASK
from .errors import (
    NotANumberError, NumberTooBigError, AllocFailedError, InternalError,
)
from .magnitude import is_zero, trim
from ..integration.event_logger import EventType


INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


class Sign(IntEnum):
    """Sign of a bignum. NAN marks a value that holds no number."""
    NEGATIVE = -1
    NAN = 0
    POSITIVE = 1


def _words_for_bytes(n: int) -> int:
    """Number of 32-bit words needed for n octets."""
    return (n + WORD_BYTES - 1) // WORD_BYTES


class Bignum:
    """
    Multi-precision signed integer.

    Attributes:
        sign: Sign.POSITIVE, Sign.NEGATIVE or Sign.NAN
        words: word buffer; its length is the capacity
        size: number of significant words

    Example:
        >>> a = Bignum.from_int(-6666)
        >>> b = Bignum.from_int(7777)
        >>> int(a + b)
        1111
    """

    __slots__ = ('sign', 'size', 'words')

    def __init__(self):
        self.init()

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def init(self) -> None:
        """(Re)initialize storage; the value holds no number until set."""
        cfg = config.get_config()
        self.sign = Sign.NAN
        if cfg.mode is AllocationMode.STATIC:
            self.words = [0] * cfg.max_words
            self.size = 1
        else:
            self.words = []
            self.size = 0

    def release(self) -> None:
        """Free the buffer and reset size and capacity to 0."""
        released = len(self.words)
        self.words = []
        self.size = 0
        self.sign = Sign.NAN
        if released:
            config.emit(EventType.RELEASE, words=released)

    def __enter__(self) -> 'Bignum':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @property
    def capacity(self) -> int:
        """Number of words currently allocated."""
        return len(self.words)

    @property
    def is_nan(self) -> bool:
        """True if the value holds no number."""
        return self.sign == Sign.NAN

    def ensure_capacity(self, n: int) -> None:
        """
        Grow the buffer to hold at least n words.

        Static buffers never grow. Dynamic buffers grow to the next multiple
        of the configured increment. Existing words are preserved and nothing
        changes if growth fails.

        Raises:
            NumberTooBigError: In static mode when n exceeds the capacity
            AllocFailedError: If memory for the new buffer is unavailable
        """
        if n <= len(self.words):
            return

        cfg = config.get_config()
        if cfg.mode is AllocationMode.STATIC:
            config.emit(EventType.GROWTH_REFUSED, needed=n, capacity=len(self.words))
            raise NumberTooBigError(
                f"{n} words needed, static capacity is {len(self.words)}"
            )

        step = cfg.grow_words
        new_capacity = ((n + step - 1) // step) * step
        try:
            self.words.extend([0] * (new_capacity - len(self.words)))
        except MemoryError as e:
            config.emit(EventType.ALLOC_FAILED, needed=new_capacity)
            raise AllocFailedError(f"Could not grow bignum to {new_capacity} words") from e

        config.emit(EventType.BUFFER_GROW, needed=n, capacity=new_capacity)

    def require_number(self) -> None:
        """Raise NotANumberError unless the value holds a number."""
        if self.sign == Sign.NAN:
            raise NotANumberError("Bignum holds no number")

    def validate(self) -> None:
        """
        Check the representation invariants.

        Raises:
            InternalError: If any invariant is violated
        """
        self.require_number()
        if self.size < 1 or self.size > len(self.words):
            raise InternalError(f"Bad size {self.size} for capacity {len(self.words)}")
        if self.size > 1 and self.words[self.size - 1] == 0:
            raise InternalError("Leading zero word in non-zero bignum")
        if any(w < 0 or w > WORD_MASK for w in self.words[:self.size]):
            raise InternalError("Word out of 32-bit range")
        if self.sign == Sign.NEGATIVE and is_zero(self):
            raise InternalError("Negative zero")

    def normalize_zero(self) -> None:
        """Make a zero magnitude canonical and positive."""
        if is_zero(self):
            self.size = 1
            self.sign = Sign.POSITIVE

    # ========================================================================
    # Setters
    # ========================================================================

    def set_si(self, value: int) -> 'Bignum':
        """Set from a signed 32-bit integer."""
        if not INT32_MIN <= value <= INT32_MAX:
            raise NumberTooBigError(f"{value} does not fit a signed 32-bit integer")
        self.ensure_capacity(1)
        self.size = 1
        if value >= 0:
            self.words[0] = value
            self.sign = Sign.POSITIVE
        else:
            self.words[0] = -value
            self.sign = Sign.NEGATIVE
        return self

    def set_ui(self, value: int) -> 'Bignum':
        """Set from an unsigned 32-bit integer."""
        if not 0 <= value <= WORD_MASK:
            raise NumberTooBigError(f"{value} does not fit an unsigned 32-bit integer")
        self.ensure_capacity(1)
        self.size = 1
        self.words[0] = value
        self.sign = Sign.POSITIVE
        return self

    def set_bytes(self, data: bytes) -> 'Bignum':
        """
        Set from a big-endian unsigned byte string.

        Bytes are packed four to a word from the least significant end; a
        partial leading group is zero-padded on the high side.

        Raises:
            NotANumberError: If data is empty
        """
        length = len(data)
        if length < 1:
            raise NotANumberError("Cannot import an empty byte string")

        m = _words_for_bytes(length)
        self.ensure_capacity(m)

        words = self.words
        for n in range(m):
            end = length - n * WORD_BYTES
            start = max(0, end - WORD_BYTES)
            words[n] = int.from_bytes(data[start:end], 'big')

        trim(self, m)
        self.sign = Sign.POSITIVE
        return self

    def set(self, source: 'Bignum') -> 'Bignum':
        """Copy source into this value (see copy())."""
        copy(self, source)
        return self

    def set_int(self, value: int) -> 'Bignum':
        """Set from an arbitrary Python integer."""
        magnitude = abs(value)
        length = max(1, (magnitude.bit_length() + 7) // 8)
        self.set_bytes(magnitude.to_bytes(length, 'big'))
        if value < 0:
            self.sign = Sign.NEGATIVE
        return self

    @classmethod
    def from_int(cls, value: int) -> 'Bignum':
        """Create a bignum from a Python integer."""
        return cls().set_int(value)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Bignum':
        """Create a bignum from a big-endian unsigned byte string."""
        return cls().set_bytes(data)

    # ========================================================================
    # Getters
    # ========================================================================

    def get_sign(self) -> Sign:
        """Sign.POSITIVE or Sign.NEGATIVE."""
        self.require_number()
        return self.sign

    def byte_length(self) -> int:
        """Length of the minimal big-endian export (at least 1)."""
        self.require_number()
        top = self.words[self.size - 1]
        return (self.size - 1) * WORD_BYTES + max(1, (top.bit_length() + 7) // 8)

    def get_bytes(self, buffer: bytearray, length: Optional[int] = None) -> int:
        """
        Write the minimal big-endian form into buffer.

        Negative values are converted to two's complement (bitwise NOT, +1)
        over exactly the written length.

        Args:
            buffer: Writable buffer; output starts at offset 0
            length: Usable buffer length (defaults to len(buffer))

        Returns:
            Number of bytes written

        Raises:
            InternalError: If length < 1
            NumberTooBigError: If the value does not fit
        """
        self.require_number()
        if length is None:
            length = len(buffer)
        if length < 1:
            raise InternalError("Output buffer length must be at least 1")

        n = self.byte_length()
        if n > length:
            raise NumberTooBigError(f"{n} bytes needed, buffer holds {length}")

        out = bytearray()
        for i in range(self.size - 1, -1, -1):
            out += self.words[i].to_bytes(WORD_BYTES, 'big')
        out = out[len(out) - n:]

        if self.sign == Sign.NEGATIVE:
            _negate_bytes(out)

        buffer[:n] = out
        return n

    def to_bytes(self) -> bytes:
        """Minimal export as a bytes object."""
        buffer = bytearray(self.byte_length())
        self.get_bytes(buffer)
        return bytes(buffer)

    def to_hex(self) -> str:
        """Hex digits of the magnitude, prefixed with '-' when negative."""
        self.require_number()
        digits = ''.join(f"{self.words[i]:08x}" for i in range(self.size - 1, -1, -1))
        digits = digits.lstrip('0') or '0'
        return ('-' if self.sign == Sign.NEGATIVE else '') + digits

    def __int__(self) -> int:
        self.require_number()
        value = 0
        for i in range(self.size - 1, -1, -1):
            value = (value << WORD_BITS) | self.words[i]
        return -value if self.sign == Sign.NEGATIVE else value

    def __bool__(self) -> bool:
        self.require_number()
        return not is_zero(self)

    def __repr__(self) -> str:
        if self.sign == Sign.NAN:
            return f"Bignum(nan, capacity={self.capacity})"
        return f"Bignum(0x{self.to_hex()}, size={self.size}, capacity={self.capacity})"

    def __str__(self) -> str:
        return str(int(self))

    # ========================================================================
    # Operators (return new values; the in-place API lives in arith.py)
    # ========================================================================

    def _coerce(self, other) -> 'Bignum':
        if isinstance(other, Bignum):
            return other
        if isinstance(other, int):
            return Bignum.from_int(other)
        return NotImplemented

    def _binary(self, other, op) -> 'Bignum':
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        r = Bignum()
        op(r, self, other)
        return r

    def __add__(self, other):
        from .arith import add
        return self._binary(other, add)

    def __sub__(self, other):
        from .arith import subtract
        return self._binary(other, subtract)

    def __mul__(self, other):
        from .arith import multiply
        return self._binary(other, multiply)

    __radd__ = __add__
    __rmul__ = __mul__

    def _reflected(self, other, op) -> 'Bignum':
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        r = Bignum()
        op(r, other, self)
        return r

    def __rsub__(self, other):
        from .arith import subtract
        return self._reflected(other, subtract)

    def __floordiv__(self, other):
        """Truncating quotient."""
        from .arith import divide
        return self._binary(other, lambda q, a, b: divide(q, None, a, b))

    def __mod__(self, other):
        """Truncating remainder; takes the sign of the numerator."""
        from .arith import divide
        return self._binary(other, lambda rem, a, b: divide(None, rem, a, b))

    def __divmod__(self, other):
        from .arith import divide
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        q, rem = Bignum(), Bignum()
        divide(q, rem, self, other)
        return q, rem

    def __rfloordiv__(self, other):
        from .arith import divide
        return self._reflected(other, lambda q, a, b: divide(q, None, a, b))

    def __rmod__(self, other):
        from .arith import divide
        return self._reflected(other, lambda rem, a, b: divide(None, rem, a, b))

    def __rdivmod__(self, other):
        from .arith import divide
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        q, rem = Bignum(), Bignum()
        divide(q, rem, other, self)
        return q, rem

    def __lshift__(self, n: int) -> 'Bignum':
        from .arith import shift_left
        r = Bignum()
        shift_left(r, self, n)
        return r

    def __rshift__(self, n: int) -> 'Bignum':
        from .arith import shift_right
        r = Bignum()
        shift_right(r, self, n)
        return r

    def __neg__(self) -> 'Bignum':
        from .arith import negate
        r = Bignum().set(self)
        negate(r)
        return r

    def __abs__(self) -> 'Bignum':
        r = Bignum().set(self)
        r.sign = Sign.POSITIVE
        return r

    def _compare(self, other) -> int:
        from .arith import compare
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return compare(self, other)

    def __eq__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result == 0

    def __lt__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result >= 0


def _negate_bytes(b: bytearray) -> None:
    """Two's complement negation of a big-endian octet array in place."""
    carry = 1
    for n in range(len(b) - 1, -1, -1):
        carry += b[n] ^ 0xFF
        b[n] = carry & 0xFF
        carry >>= 8


def copy(dest: Bignum, source: Bignum) -> None:
    """
    Copy source into dest.

    dest is grown first if needed, then size, sign and the significant words
    are copied.
    """
    source.require_number()
    if dest is source:
        return
    dest.ensure_capacity(source.size)
    dest.words[:source.size] = source.words[:source.size]
    dest.size = source.size
    dest.sign = source.sign


def init_many(count: int) -> List[Bignum]:
    """Initialize several bignums at once."""
    return [Bignum() for _ in range(count)]


def release_many(*values: Bignum) -> None:
    """Release several bignums at once."""
    for value in values:
        value.release()


def get_sign(a: Bignum) -> Sign:
    """Sign of a; NotANumberError if it holds no number."""
    return a.get_sign()
