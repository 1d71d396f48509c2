# Core Bignum Module
"""
Multi-precision integer engine:
- Magnitude arithmetic - magnitude.py
- Signed arithmetic and long division - arith.py
- Storage, setters and byte conversion - bignum.py
- Modular exponentiation, gcd, modular inverse - modarith.py
- Engine-wide allocation switch - config.py
- Error taxonomy - errors.py
"""

from .config import (
    AllocationMode,
    EngineConfig,
    configure,
    get_config,
    set_config,
    reset_config,
    WORD_BITS,
)

from .errors import (
    ErrorCode,
    BignumError,
    NotANumberError,
    NumberTooBigError,
    AllocFailedError,
    NotImplementedOperationError,
    DivisionByZeroError,
    InternalError,
    NoInverseError,
)

from .bignum import (
    Bignum,
    Sign,
    copy,
    get_sign,
    init_many,
    release_many,
)

from .arith import (
    add,
    subtract,
    compare,
    negate,
    multiply,
    divide,
    shift_left,
    shift_right,
    add_ui,
    add_si,
    cmp_ui,
)

from .modarith import (
    powm,
    gcd,
    mod_inverse,
)

__all__ = [
    # Configuration
    'AllocationMode',
    'EngineConfig',
    'configure',
    'get_config',
    'set_config',
    'reset_config',
    'WORD_BITS',
    # Errors
    'ErrorCode',
    'BignumError',
    'NotANumberError',
    'NumberTooBigError',
    'AllocFailedError',
    'NotImplementedOperationError',
    'DivisionByZeroError',
    'InternalError',
    'NoInverseError',
    # Values
    'Bignum',
    'Sign',
    'copy',
    'get_sign',
    'init_many',
    'release_many',
    # Arithmetic
    'add',
    'subtract',
    'compare',
    'negate',
    'multiply',
    'divide',
    'shift_left',
    'shift_right',
    'add_ui',
    'add_si',
    'cmp_ui',
    # Modular arithmetic
    'powm',
    'gcd',
    'mod_inverse',
]
