"""
Engine Event Log

Records engine events (buffer growth, refused growth, releases, division
by zero, modular exponentiation runs) for diagnostics.

Features:
- Typed events with compact JSON serialization
- Bounded in-memory history
- Subscriber callbacks
- Every event mirrored to the standard `bnengine` logger at DEBUG level
"""

import json
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Callable


logger = logging.getLogger('bnengine')


# ============================================================================
# Constants
# ============================================================================

DEFAULT_HISTORY_SIZE = 1024
EVENT_VERSION = "1.0"


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of engine events that can be logged."""

    # Storage events
    BUFFER_GROW = "buffer_grow"
    GROWTH_REFUSED = "growth_refused"
    ALLOC_FAILED = "alloc_failed"
    RELEASE = "release"

    # Arithmetic events
    DIV_BY_ZERO = "div_by_zero"
    POWM_START = "powm_start"
    POWM_DONE = "powm_done"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class EngineEvent:
    """Represents a single engine event."""
    event_type: EventType
    timestamp: float
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> str:
        """Convert event to a compact JSON record."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'time': self.timestamp,
            'details': self.details,
        }, separators=(',', ':'))

    @classmethod
    def from_record(cls, record: str) -> 'EngineEvent':
        """Parse event from a JSON record."""
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        details = ' '.join(f"{k}={v}" for k, v in self.details.items())
        return f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] {self.event_type.value} {details}".rstrip()


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    In-memory event logger for the bignum engine.

    Keeps the most recent `history_size` events and notifies subscribed
    callbacks as events arrive.
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        """
        Initialize the event logger.

        Args:
            history_size: Maximum number of events kept in memory
        """
        if history_size < 1:
            raise ValueError("History size must be at least 1")
        self._events = deque(maxlen=history_size)
        self._event_count = 0
        self._callbacks: List[Callable[[EngineEvent], None]] = []

    def log(self, event_type: EventType, **details: Any) -> EngineEvent:
        """
        Log an engine event.

        Args:
            event_type: The kind of event
            **details: Event details (must be JSON serializable)

        Returns:
            The logged event
        """
        event = EngineEvent(
            event_type=event_type,
            timestamp=time.time(),
            details=details,
        )
        self._add_event(event)
        return event

    def _add_event(self, event: EngineEvent) -> None:
        """Add event to history and notify callbacks."""
        self._events.append(event)
        self._event_count += 1
        logger.debug("%s %s", event.event_type.value, event.details)

        for callback in self._callbacks:
            callback(event)

    def add_callback(self, callback: Callable[[EngineEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[EngineEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # Retrieval
    # ========================================================================

    @property
    def event_count(self) -> int:
        """Total number of events logged, including evicted ones."""
        return self._event_count

    def get_all_events(self) -> List[EngineEvent]:
        """Retrieve all events still held in history."""
        return list(self._events)

    def get_events_by_type(self, event_type: EventType) -> List[EngineEvent]:
        """Get all events of a specific type."""
        return [e for e in self._events if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> List[EngineEvent]:
        """Get the most recent events."""
        events = self.get_all_events()
        return events[-count:] if len(events) > count else events

    def clear(self) -> None:
        """Drop all events from history."""
        self._events.clear()

    def export_log(self) -> str:
        """Export the history as a JSON array of records."""
        return json.dumps([json.loads(e.to_record()) for e in self._events])

    @classmethod
    def import_log(cls, json_str: str, history_size: int = DEFAULT_HISTORY_SIZE) -> 'EventLogger':
        """Rebuild an event logger from an exported log."""
        event_logger = cls(history_size=history_size)
        for data in json.loads(json_str):
            event_logger._add_event(EngineEvent.from_record(json.dumps(data)))
        return event_logger


# ============================================================================
# Convenience Functions
# ============================================================================

def create_event_logger(history_size: int = DEFAULT_HISTORY_SIZE) -> EventLogger:
    """Create a new event logger."""
    return EventLogger(history_size=history_size)
