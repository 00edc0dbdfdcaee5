"""Builds the Get and Supported Get requests sent to an alarm device."""

import logging

from .errors import NotSupportedError
from .event import AlarmGet, EventType, SupportedGet
from .packet import Packet
from .values import ValueSink

_LOGGER = logging.getLogger(__name__)

FIRST_EVENT_MIN_VERSION = 3


def encode_get(version: int, event_type: EventType | None = None) -> Packet:
    """
    Build a Get request for the negotiated command class version.

    * version 1: ``[0x04]``, the device reports whatever it has
    * version 2: ``[0x04, 0x00, type]``
    * version 3 and later: ``[0x04, 0x00, type, 0x01]``

    :param version: The command class version the device supports
    :param event_type: The event type to poll, required from version 2
    """
    if version < 1:
        msg = f"Command class version must be 1 or greater - got {version}"
        raise ValueError(msg)
    if version == 1:
        return AlarmGet().encode()
    if event_type is None:
        msg = f"A version {version} Get must select an event type"
        raise ValueError(msg)
    return AlarmGet(
        event_type=event_type, first_event=version >= FIRST_EVENT_MIN_VERSION
    ).encode()


def encode_supported_get(version: int) -> Packet:
    """Build a Supported Get request - only defined from version 2."""
    if version <= 1:
        msg = f"Supported Get is not defined for version {version}"
        raise NotSupportedError(msg)
    return SupportedGet().encode()


class RequestEncoder:
    """Builds requests for one device, honouring its Get capability."""

    def __init__(self, sink: ValueSink) -> None:
        """
        Create a RequestEncoder.

        :param sink: The value sink of the node the requests are sent to
        """
        self._sink = sink

    def _check_get_capability(self) -> None:
        if not self._sink.has_get_capability():
            msg = "AlarmCmd_Get Not Supported on this node"
            raise NotSupportedError(msg)

    def build_get(self, version: int, event_type: EventType | None = None) -> Packet:
        """Build a single Get request, see :py:func:`encode_get`."""
        self._check_get_capability()
        return encode_get(version, event_type)

    def build_gets(self, version: int) -> list[Packet]:
        """
        Build the Get requests that poll every known event type.

        Version 1 devices get a single request. Later versions get one
        request per event type registered on the node, not a batched one.
        """
        self._check_get_capability()
        if version == 1:
            return [encode_get(version)]

        packets = []
        for index, event_type in sorted(
            self._sink.known_target_types(), key=lambda t: t[1].value
        ):
            _LOGGER.debug("Polling %s (value index %d)", event_type.label, index)
            packets.append(encode_get(version, event_type))
        return packets

    def build_supported_get(self, version: int) -> Packet:
        """Build a Supported Get request, see :py:func:`encode_supported_get`."""
        return encode_supported_get(version)
