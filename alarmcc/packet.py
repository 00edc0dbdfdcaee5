r"""
Encode / Decode Alarm command class payloads.

Payloads are the command class body of a mesh network frame, starting at the
command byte. The command class byte (0x71) and everything below it
(addressing, length, transmit options, checksum) belongs to the transport.

Report (from device):
* Command:   1 byte - must be 0x05
* Type:      1 byte - alarm type
* Level:     1 byte - alarm level
* -- Version 2 and later, only when the payload is at least 7 bytes --
* Source:    1 byte - node id of the sensor that raised the event
* Status:    1 byte - reserved / notification status
* EventType: 1 byte - index into the event type table (may be unknown)
* Event:     1 byte - event parameter for the event type

Supported Report (from device, version 2 and later):
* Command:   1 byte - must be 0x08
* NumBytes:  1 byte - number of bitmap bytes that follow
* Bitmap:    N bytes - bit b of byte i set means event type i*8+b is supported

Get (to device):
* Command:   1 byte - must be 0x04
* -- Version 2 and later --
* Reserved:  1 byte - always 0x00
* EventType: 1 byte - the event type being polled
* -- Version 3 and later --
* Flag:      1 byte - 0x01, return the first event of this type

Supported Get (to device, version 2 and later):
* Command:   1 byte - must be 0x07
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .errors import TooShortError, UnknownCommandError

_LOGGER = logging.getLogger(__name__)

COMMAND_CLASS_ALARM = 0x71


class CommandType(Enum):
    """Alarm command class command byte values."""

    GET = 0x04
    REPORT = 0x05
    SET = 0x06
    SUPPORTED_GET = 0x07
    SUPPORTED_REPORT = 0x08


@dataclass
class Packet:
    """Represents a single Alarm command class payload."""

    command: CommandType
    data: bytes

    BYTE_MAX = 0xFF

    # Command:1
    MINIMUM_PACKET_LENGTH = 1

    # Command class + command bytes counted by the transport length field
    HEADER_LENGTH = 2

    def __init__(self, *, command: CommandType, data: bytes = b"") -> None:
        """
        Create a packet object.

        Users will call this to create a packet ready for encoding/sending.

        Internally it is called by decode() to create the decoded packet.
        """
        if not isinstance(command, CommandType):
            msg = f"Unknown command {command}"
            raise ValueError(msg)
        if any(b < 0 or b > Packet.BYTE_MAX for b in data):
            msg = f"Packet data must be bytes 0x00-0xff - got {list(data)}"
            raise ValueError(msg)

        self.command = command
        self.data = bytes(data)

    @property
    def length(self) -> int:
        """
        Return the transport length value for this packet.

        The length counts the command class byte, the command byte and the
        data bytes, e.g. 2 for a version 1 Get and 5 for a version 3 Get.
        """
        return Packet.HEADER_LENGTH + len(self.data)

    @property
    def name(self) -> str:
        """Return a short name for logging, e.g. 'AlarmCmd_SupportedGet'."""
        words = self.command.name.title().replace("_", "")
        return f"AlarmCmd_{words}"

    def encode(self, *, with_command_class: bool = False) -> bytes:
        """
        Encode this packet to payload bytes.

        :param with_command_class: Prefix the command class byte, as the
                                   transport places it in the frame
        """
        header = bytes([COMMAND_CLASS_ALARM]) if with_command_class else b""
        return header + bytes([self.command.value]) + self.data

    def hex(self) -> str:
        """Encode this packet as a lower case hex string."""
        return self.encode().hex()

    @classmethod
    def decode(cls, _data: bytes) -> "Packet":
        """
        Decode payload bytes into a Packet.

        +-------------------------+
        | command | data          |
        | 1       | n             |
        +-------------------------+

        The data is kept as-is, interpretation belongs to the event classes
        since the layout depends on the negotiated version.
        """
        if len(_data) < Packet.MINIMUM_PACKET_LENGTH:
            raise TooShortError("Packet", len(_data), Packet.MINIMUM_PACKET_LENGTH)

        data = DataIterator(bytes(_data))
        _LOGGER.debug("Decoding bytes: '%s'", bytes(_data).hex())

        command_value = data.take_byte_value()
        try:
            command = CommandType(command_value)
        except ValueError as e:
            msg = f"Unknown command: 0x{command_value:02x}"
            raise UnknownCommandError(msg) from e
        return Packet(command=command, data=data.take_rest())

    @classmethod
    def from_hex(cls, text: str) -> "Packet":
        """Decode a hex string such as '05070109000101' into a Packet."""
        cleaned = text.replace(" ", "").replace(":", "")
        try:
            raw = bytes.fromhex(cleaned)
        except ValueError as e:
            msg = f"Invalid non-hex character in data: {text!r}"
            raise ValueError(msg) from e
        return cls.decode(raw)


class DataIterator:
    """Data Buffer that allows taking incremental byte amounts."""

    def __init__(self, data: bytes) -> None:
        """Create a DataIterator with the specified bytes."""
        self._data = data
        self._position = 0

    def take_bytes(self, n: int) -> bytes:
        """Take bytes from the buffer, advancing the read position."""
        position = self._position
        self._position += n
        if self._position > len(self._data):
            msg = "Unable to take more data than exists"
            raise ValueError(msg)

        return self._data[position : self._position]

    def take_byte_value(self) -> int:
        """Return the integer value of the next byte."""
        return self.take_bytes(1)[0]

    def take_rest(self) -> bytes:
        """Take all remaining bytes."""
        return self.take_bytes(self.remaining())

    def remaining(self) -> int:
        """Return the number of bytes not yet taken."""
        return max(len(self._data) - self._position, 0)

    def is_consumed(self) -> bool:
        """Return True if entire buffer has been read."""
        return self._position >= len(self._data)
