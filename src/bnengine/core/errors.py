"""
Bignum Error Taxonomy

Every failure the engine can report has a numeric code (kept compatible with
the classic "negative result value" convention) and an exception class.

Codes:
- NOT_A_NUMBER: operand holds no number, or an empty byte import
- NUMBER_TOO_BIG: fixed capacity exhausted, or export buffer too small
- ALLOC_FAILED: dynamic growth could not obtain memory
- NOT_IMPLEMENTED: unsupported operation or configuration
- DIV_BY_ZERO: division (or reduction) by zero
- NO_INVERSE: modular inverse requested for operands that are not coprime
- INTERNAL_ERROR: invariant violation or bad parameter (a programming defect)
"""

from enum import Enum


class ErrorCode(Enum):
    """Result codes of the bignum engine."""

    SUCCESS = 0
    NOT_A_NUMBER = 1
    NUMBER_TOO_BIG = 2
    ALLOC_FAILED = 3
    NOT_IMPLEMENTED = 4
    DIV_BY_ZERO = 5
    NO_INVERSE = 6
    INTERNAL_ERROR = 666


class BignumError(Exception):
    """Base class for all bignum engine errors."""

    code = ErrorCode.INTERNAL_ERROR

    @property
    def result(self) -> int:
        """The tagged (negative) result value for this error."""
        return -self.code.value


class NotANumberError(BignumError):
    """Raised when an operand has been initialized but never set."""
    code = ErrorCode.NOT_A_NUMBER


class NumberTooBigError(BignumError):
    """Raised when a value does not fit the available storage."""
    code = ErrorCode.NUMBER_TOO_BIG


class AllocFailedError(BignumError):
    """Raised when a buffer could not be grown."""
    code = ErrorCode.ALLOC_FAILED


class NotImplementedOperationError(BignumError):
    """Raised for operations the engine does not support."""
    code = ErrorCode.NOT_IMPLEMENTED


class DivisionByZeroError(BignumError, ZeroDivisionError):
    """Raised on division by a zero denominator."""
    code = ErrorCode.DIV_BY_ZERO


class InternalError(BignumError):
    """Raised on invariant violations and bad parameters."""
    code = ErrorCode.INTERNAL_ERROR


class NoInverseError(BignumError, ValueError):
    """Raised when a modular inverse does not exist."""
    code = ErrorCode.NO_INVERSE
