"""Allows decoding and encoding of the payload of Alarm command class packets."""

import logging
from collections.abc import Iterable
from enum import Enum

from .errors import TooShortError, UnknownCommandError
from .packet import CommandType, Packet

_LOGGER = logging.getLogger(__name__)

UNKNOWN_TYPE_NAME = "Unknown type"

_EVENT_TYPE_NAMES = (
    "General",
    "Smoke",
    "Carbon Monoxide",
    "Carbon Dioxide",
    "Heat",
    "Flood",
    "Access Control",
    "Burglar",
    "Power Management",
    "System",
    "Emergency",
    "Clock",
    "Appliance",
    "HomeHealth",
)


class EventType(Enum):
    """The alarm / notification event types, in protocol index order."""

    GENERAL = 0
    SMOKE = 1
    CARBON_MONOXIDE = 2
    CARBON_DIOXIDE = 3
    HEAT = 4
    FLOOD = 5
    ACCESS_CONTROL = 6
    BURGLAR = 7
    POWER_MANAGEMENT = 8
    SYSTEM = 9
    EMERGENCY = 10
    CLOCK = 11
    APPLIANCE = 12
    HOME_HEALTH = 13

    @property
    def label(self) -> str:
        """Return the display name, e.g. 'Carbon Monoxide'."""
        return _EVENT_TYPE_NAMES[self.value]

    @classmethod
    def from_raw(cls, raw: int) -> "EventType | None":
        """Return the event type for a raw index, or None if it is out of range."""
        if 0 <= raw < EVENT_TYPE_COUNT:
            return cls(raw)
        return None

    @classmethod
    def from_name(cls, name: str) -> "EventType":
        """
        Look up an event type by member name or display name.

        Accepts 'CARBON_MONOXIDE', 'carbon-monoxide' or 'Carbon Monoxide'.
        """
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        if key == "HOMEHEALTH":
            key = "HOME_HEALTH"
        try:
            return cls[key]
        except KeyError as e:
            msg = f"Unknown event type name: {name!r}"
            raise ValueError(msg) from e


EVENT_TYPE_COUNT = len(_EVENT_TYPE_NAMES)


def event_type_name(raw: int) -> str:
    """Return the display name for a raw event type index."""
    event_type = EventType.from_raw(raw)
    if event_type is None:
        return UNKNOWN_TYPE_NAME
    return event_type.label


# Legacy (Kwikset) lock states, reported as alarm types 17 to 25
LOCK_STATE_TYPE_MIN = 17
LOCK_STATE_TYPE_MAX = 25

LOCK_STATES = (
    "Secured at Keypad - Jammed",
    "Secured at Keypad - Success",
    "Unsecured at Keypad",
    "Unknown",
    "Secured Manually",
    "Unsecured Manually",
    "Secured by Controller - Jammed",
    "Secured by Controller",
    "Unsecured by Controller",
)


def lock_state_name(alarm_type: int) -> str | None:
    """Return the legacy lock state for an alarm type, or None outside 17-25."""
    if LOCK_STATE_TYPE_MIN <= alarm_type <= LOCK_STATE_TYPE_MAX:
        return LOCK_STATES[alarm_type - LOCK_STATE_TYPE_MIN]
    return None


def unpack_bitmap(bitmap: bytes) -> list[int]:
    """
    Parse a LSB-first bitmap into the list of set bit positions.

    Bit b of byte i represents position i*8+b. Positions are returned in
    ascending order.
    """
    return [
        (i << 3) + bit
        for i, byte in enumerate(bitmap)
        for bit in range(8)
        if byte & (1 << bit)
    ]


def pack_bitmap(positions: Iterable[int]) -> bytes:
    """
    Construct a LSB-first bitmap from a list of bit positions.

    Performs the reverse of unpack_bitmap(), using as few bytes as needed.
    """
    positions = list(positions)
    if not positions:
        return b""
    bitmap = bytearray((max(positions) >> 3) + 1)
    for position in positions:
        bitmap[position >> 3] |= 1 << (position & 0x07)
    return bytes(bitmap)


class BaseEvent:
    """Represents a decoded Alarm command class payload."""

    def __repr__(self) -> str:
        """Get a string representation of the event."""
        return f"<{self.__class__.__name__} {self.__dict__}>"

    @classmethod
    def decode(cls, packet: Packet, version: int = 1) -> "BaseEvent":
        """
        Decode a packet exchanged with an alarm device.

        :param packet: The packet that is to be decoded
        :param version: The command class version the device supports
        :return: The decoded :py:class:`BaseEvent` object
        """
        if packet.command == CommandType.REPORT:
            return AlarmReport.decode(packet, version)
        if packet.command == CommandType.SUPPORTED_REPORT:
            return SupportedReport.decode(packet)
        if packet.command == CommandType.GET:
            return AlarmGet.decode(packet, version)
        if packet.command == CommandType.SUPPORTED_GET:
            return SupportedGet()

        msg = f"Unknown command: {packet.command}"
        raise UnknownCommandError(msg)

    def encode(self) -> Packet:
        """
        Abstract method - do not call.

        Provides a prototype for subclasses which can be encoded into
        a :py:class:`Packet`
        """
        raise NotImplementedError


class AlarmReport(BaseEvent):
    """
    An Alarm Report received from a device.

    Version 1 reports carry only the alarm type and level. Version 2 and
    later devices may append the source node, a status byte, the event type
    and the event parameter.
    """

    # Command:1, Type:1, Level:1
    MINIMUM_LENGTH = 3
    # ... Source:1, Status:1, EventType:1, Event:1
    EXTENDED_LENGTH = 7

    alarm_type: int
    level: int
    source_node_id: int | None
    status: int | None
    event_type: int | None
    event_parameter: int | None
    lock_state: str | None

    def __init__(  # noqa: PLR0913 # Mirrors the report fields
        self,
        *,
        alarm_type: int,
        level: int,
        source_node_id: int | None = None,
        status: int | None = None,
        event_type: int | None = None,
        event_parameter: int | None = None,
    ) -> None:
        """
        Construct an :py:class:`AlarmReport` - used by :py:meth:`decode`.

        :param alarm_type: The (version 1) alarm type
        :param level: The (version 1) alarm level
        :param source_node_id: The node id of the sensor that raised the alarm
        :param status: The status byte, 0x00 in most reports
        :param event_type: The raw event type index, which may be unknown
        :param event_parameter: The event raised for the event type
        """
        self.alarm_type = alarm_type
        self.level = level
        self.source_node_id = source_node_id
        self.status = status
        self.event_type = event_type
        self.event_parameter = event_parameter
        self.lock_state = lock_state_name(alarm_type)

    @property
    def is_extended(self) -> bool:
        """Return True if the report carries the version 2 fields."""
        return self.event_type is not None

    @property
    def known_event_type(self) -> EventType | None:
        """Return the event type, or None if absent or unknown."""
        if self.event_type is None:
            return None
        return EventType.from_raw(self.event_type)

    @property
    def event_type_name(self) -> str | None:
        """Return the event type display name, 'Unknown type' if out of range."""
        if self.event_type is None:
            return None
        return event_type_name(self.event_type)

    @classmethod
    def decode(cls, packet: Packet, version: int = 1) -> "AlarmReport":
        """
        Decode a Report packet.

        The extended fields are only read when the device supports version 2
        or later and the payload is long enough to hold them.

        :param packet: The packet that is to be decoded
        :param version: The command class version the device supports
        :return: The decoded :py:class:`AlarmReport` object
        """
        length = len(packet.data) + 1
        if length < AlarmReport.MINIMUM_LENGTH:
            raise TooShortError("Report", length, AlarmReport.MINIMUM_LENGTH)

        data = packet.data
        if version == 1 or length < AlarmReport.EXTENDED_LENGTH:
            return AlarmReport(alarm_type=data[0], level=data[1])

        return AlarmReport(
            alarm_type=data[0],
            level=data[1],
            source_node_id=data[2],
            status=data[3],
            event_type=data[4],
            event_parameter=data[5],
        )

    def encode(self) -> Packet:
        """
        Encode this :py:class:`AlarmReport` into a :py:class:`Packet`.

        Note: Primarily for testing and emulating an alarm device
        """
        data = bytes([self.alarm_type, self.level])
        if self.is_extended:
            data += bytes(
                [
                    self.source_node_id or 0,
                    self.status or 0,
                    self.event_type or 0,
                    self.event_parameter or 0,
                ]
            )
        return Packet(command=CommandType.REPORT, data=data)


class SupportedReport(BaseEvent):
    """
    A Supported Report received from a version 2 or later device.

    Lists the event types the device can report. Bitmap positions beyond the
    known event types are kept aside as unrecognized.
    """

    # Command:1, NumBytes:1
    MINIMUM_LENGTH = 2

    supported: list[EventType]
    unrecognized: list[int]
    truncated: bool

    def __init__(
        self,
        *,
        supported: list[EventType],
        unrecognized: list[int] | None = None,
        truncated: bool = False,
    ) -> None:
        """
        Construct a :py:class:`SupportedReport` - used by :py:meth:`decode`.

        :param supported: The supported event types, in ascending order
        :param unrecognized: Set bitmap positions with no known event type
        :param truncated: True if the bitmap was shorter than announced
        """
        self.supported = supported
        self.unrecognized = unrecognized if unrecognized is not None else []
        self.truncated = truncated

    @property
    def unrecognized_count(self) -> int:
        """Return the number of unrecognized bitmap positions."""
        return len(self.unrecognized)

    @classmethod
    def decode(cls, packet: Packet) -> "SupportedReport":
        """
        Decode a Supported Report packet.

        :param packet: The packet that is to be decoded
        :return: The decoded :py:class:`SupportedReport` object
        """
        length = len(packet.data) + 1
        if length < SupportedReport.MINIMUM_LENGTH:
            raise TooShortError(
                "SupportedReport", length, SupportedReport.MINIMUM_LENGTH
            )

        num_bytes = packet.data[0]
        bitmap = packet.data[1 : 1 + num_bytes]
        truncated = len(bitmap) < num_bytes
        if truncated:
            _LOGGER.warning(
                "Supported report announces %d bitmap bytes but carries %d",
                num_bytes,
                len(bitmap),
            )

        supported = []
        unrecognized = []
        for index in unpack_bitmap(bitmap):
            event_type = EventType.from_raw(index)
            if event_type is None:
                _LOGGER.info("    Unknown alarm type: %d", index)
                unrecognized.append(index)
            else:
                supported.append(event_type)

        return SupportedReport(
            supported=supported, unrecognized=unrecognized, truncated=truncated
        )

    def encode(self) -> Packet:
        """
        Encode this :py:class:`SupportedReport` into a :py:class:`Packet`.

        Note: Primarily for testing and emulating an alarm device
        """
        bitmap = pack_bitmap([e.value for e in self.supported] + self.unrecognized)
        return Packet(
            command=CommandType.SUPPORTED_REPORT, data=bytes([len(bitmap)]) + bitmap
        )


class AlarmGet(BaseEvent):
    """
    A Get request sent to a device.

    Version 1 requests carry no parameters. Version 2 requests select an
    event type, and version 3 requests add a flag asking for the first
    event of that type.
    """

    RESERVED = 0x00
    FIRST_EVENT_FLAG = 0x01
    TYPED_DATA_LENGTH = 2

    event_type: EventType | None
    first_event: bool

    def __init__(
        self, *, event_type: EventType | None = None, first_event: bool = False
    ) -> None:
        """
        Construct an :py:class:`AlarmGet`.

        :param event_type: The event type to poll (version 2 and later)
        :param first_event: Append the 'first event' flag (version 3 and later)
        """
        self.event_type = event_type
        self.first_event = first_event

    @classmethod
    def decode(cls, packet: Packet, version: int = 1) -> "AlarmGet":
        """
        Decode a Get packet.

        Used by the device emulator to answer requests.
        """
        data = packet.data
        # Reserved:1, EventType:1, Flag:1
        if version == 1 or len(data) < AlarmGet.TYPED_DATA_LENGTH:
            return AlarmGet()
        flag = data[AlarmGet.TYPED_DATA_LENGTH :]
        return AlarmGet(
            event_type=EventType.from_raw(data[1]),
            first_event=flag[:1] == bytes([AlarmGet.FIRST_EVENT_FLAG]),
        )

    def encode(self) -> Packet:
        """Encode this :py:class:`AlarmGet` into a :py:class:`Packet`."""
        data = b""
        if self.event_type is not None:
            data = bytes([AlarmGet.RESERVED, self.event_type.value])
            if self.first_event:
                data += bytes([AlarmGet.FIRST_EVENT_FLAG])
        return Packet(command=CommandType.GET, data=data)


class SupportedGet(BaseEvent):
    """A Supported Get request sent to a version 2 or later device."""

    def encode(self) -> Packet:
        """Encode this :py:class:`SupportedGet` into a :py:class:`Packet`."""
        return Packet(command=CommandType.SUPPORTED_GET)
