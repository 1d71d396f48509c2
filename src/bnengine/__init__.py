"""
bnengine - multi-precision signed integer engine.

The numeric kernel for public-key arithmetic: 32-bit word arrays with
add/subtract/multiply/divide/shift/compare, big-endian byte conversion and
square-and-multiply modular exponentiation.
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all

__version__ = "0.2.0"

__all__ = list(_core_all) + ['__version__']
