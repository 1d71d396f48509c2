"""
Engine Configuration

The allocation strategy is a single engine-wide switch:

- STATIC: every bignum owns a fixed buffer of `max_words` words. Growth
  beyond it fails with NumberTooBigError and no allocation ever happens.
- DYNAMIC: bignums start empty and grow on demand in steps of
  `grow_words` words, bounded only by available memory.

A product needs room for a.size + b.size words, so in STATIC mode the largest
modulus powm can use is max_words // 2 words (512 bits with the default
32-word buffers); operands may be up to max_words words.

Values created under one mode keep the buffer they were given; switch modes
before creating bignums.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..integration.event_logger import EventLogger, EventType


# ============================================================================
# Constants
# ============================================================================

WORD_BITS = 32
WORD_BYTES = 4
WORD_MASK = 0xFFFFFFFF

DEFAULT_MAX_WORDS = 32   # 1024-bit numbers, 512-bit powm moduli
DEFAULT_GROW_WORDS = 32  # grow by 1024 bits at a time


class AllocationMode(Enum):
    """Storage strategy for bignum buffers."""
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class EngineConfig:
    """Engine-wide configuration."""
    mode: AllocationMode = AllocationMode.DYNAMIC
    max_words: int = DEFAULT_MAX_WORDS
    grow_words: int = DEFAULT_GROW_WORDS
    check_invariants: bool = False
    event_logger: Optional[EventLogger] = None

    def __post_init__(self):
        if self.max_words < 1:
            raise ValueError("max_words must be at least 1")
        if self.grow_words < 1:
            raise ValueError("grow_words must be at least 1")

    @property
    def max_bits(self) -> Optional[int]:
        """Largest representable bit length, or None when unbounded."""
        if self.mode is AllocationMode.STATIC:
            return self.max_words * WORD_BITS
        return None

    @property
    def max_modulus_bits(self) -> Optional[int]:
        """Widest powm modulus a static buffer can hold the products of."""
        if self.mode is AllocationMode.STATIC:
            return (self.max_words // 2) * WORD_BITS
        return None


_config = EngineConfig()


def get_config() -> EngineConfig:
    """Return the active engine configuration."""
    return _config


def configure(**changes) -> EngineConfig:
    """
    Replace fields of the active configuration.

    Example:
        >>> configure(mode=AllocationMode.STATIC, max_words=64)

    Returns:
        The previous configuration (handy for restoring it)
    """
    global _config
    previous = _config
    _config = replace(_config, **changes)
    return previous


def set_config(config: EngineConfig) -> EngineConfig:
    """Install a complete configuration, returning the previous one."""
    global _config
    previous = _config
    _config = config
    return previous


def reset_config() -> None:
    """Restore the default configuration."""
    set_config(EngineConfig())


def emit(event_type: EventType, **details) -> None:
    """Send an event to the configured event logger, if any."""
    event_logger = _config.event_logger
    if event_logger is not None:
        event_logger.log(event_type, **details)
