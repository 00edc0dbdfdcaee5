"""
Value routing between the Alarm command class and the node that owns its values.

Every alarm value a node exposes is addressed by an integer index:

* 0 - Alarm Type
* 1 - Alarm Level
* 2 - SourceNodeId (version 2 and later)
* 3 .. 16 - one value per supported event type (event type index + 3)

The legacy lock state string lives at its own index, outside the byte range,
so that it cannot collide with an event type value.
"""

from collections.abc import Sequence
from enum import IntEnum
from typing import Protocol

from .event import EventType

EVENT_TYPE_INDEX_OFFSET = 3


class ValueIndex(IntEnum):
    """Fixed value indices of the Alarm command class."""

    TYPE = 0
    LEVEL = 1
    SOURCE_NODE_ID = 2
    LOCK_STATE = 0x200


def value_index_for_event_type(event_type: EventType | int) -> int:
    """Return the value index used for an event type's event parameter."""
    raw = event_type.value if isinstance(event_type, EventType) else event_type
    return raw + EVENT_TYPE_INDEX_OFFSET


def event_type_for_value_index(index: int) -> EventType | None:
    """
    Return the event type a value index belongs to.

    Returns None for the fixed indices and for indices beyond the event
    type table.
    """
    return EventType.from_raw(index - EVENT_TYPE_INDEX_OFFSET)


class ValueSink(Protocol):
    """
    Receives decoded alarm values on behalf of a node.

    Implemented by the node/value registry of the surrounding driver.
    :py:class:`alarmcc.node.Node` is an in-memory implementation.
    """

    def register_value(self, index: int, name: str) -> None:
        """Create (or keep) the value at index with a display name."""

    def publish(self, index: int, value: int | str) -> None:
        """Refresh the value at index. Unregistered indices are ignored."""

    def has_get_capability(self) -> bool:
        """Return True if the device answers Get requests."""

    def known_target_types(self) -> Sequence[tuple[int, EventType]]:
        """Return (value index, event type) for every registered event type."""
