"""Provides an in-memory representation of the alarm values of a device node."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .event import EventType
from .values import event_type_for_value_index

_LOGGER = logging.getLogger(__name__)


class Node:
    """
    In-memory value registry for the alarm values of one node.

    Implements the :py:class:`alarmcc.values.ValueSink` protocol.
    """

    @dataclass
    class Value:
        """Represents one registered alarm value and its current content."""

        index: int
        name: str
        value: int | str | None = None

    node_id: int
    values: dict[int, "Node.Value"]

    def __init__(self, *, node_id: int = 1, get_supported: bool = True) -> None:
        """
        Create a new Node instance.

        :param node_id: The node id of the device
        :param get_supported: Whether the device answers Get requests
        """
        self.node_id = node_id
        self.values = {}
        self._get_supported = get_supported

        self._on_value_added: Callable[[int, str], None] | None = None
        self._on_value_change: Callable[[int, int | str], None] | None = None

    def register_value(self, index: int, name: str) -> None:
        """Create the value at index, keeping it if it already exists."""
        if index in self.values:
            _LOGGER.debug("Node %d value %d already registered", self.node_id, index)
            return

        self.values[index] = Node.Value(index=index, name=name)
        if self._on_value_added is not None:
            self._on_value_added(index, name)

    def publish(self, index: int, value: int | str) -> None:
        """Refresh the value at index, ignoring indices that were not registered."""
        entry = self.values.get(index)
        if entry is None:
            _LOGGER.debug(
                "Node %d ignoring value %s for unregistered index %d",
                self.node_id,
                value,
                index,
            )
            return

        if entry.value != value:
            _LOGGER.debug(
                "Node %d value %s change %s->%s",
                self.node_id,
                entry.name,
                entry.value,
                value,
            )
            entry.value = value
            if self._on_value_change is not None:
                self._on_value_change(index, value)

    def has_get_capability(self) -> bool:
        """Return True if the device answers Get requests."""
        return self._get_supported

    def known_target_types(self) -> list[tuple[int, EventType]]:
        """Return (value index, event type) for the registered event types."""
        targets = []
        for index in sorted(self.values):
            event_type = event_type_for_value_index(index)
            if event_type is not None:
                targets.append((index, event_type))
        return targets

    def get_value(self, index: int) -> int | str | None:
        """Return the current content of the value at index."""
        entry = self.values.get(index)
        return entry.value if entry is not None else None

    def value_names(self) -> list[str]:
        """Return the registered value names in registration order."""
        return [entry.name for entry in self.values.values()]

    def on_value_added(self, f: Callable[[int, str], None] | None) -> None:
        """Set the callback that receives newly registered values."""
        self._on_value_added = f

    def on_value_change(self, f: Callable[[int, int | str], None] | None) -> None:
        """Set the callback that receives value changes."""
        self._on_value_change = f
