"""Exceptions raised by the Alarm command class codec."""


class AlarmError(Exception):
    """Base class for all alarmcc errors."""


class DecodeError(AlarmError, ValueError):
    """A payload received from a device could not be decoded."""


class TooShortError(DecodeError):
    """A payload is shorter than the minimum for its command."""

    def __init__(self, command: str, length: int, minimum: int) -> None:
        """
        Create a TooShortError.

        :param command: Name of the command being decoded
        :param length: Length of the received payload
        :param minimum: Minimum payload length for the command
        """
        self.command = command
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"{command} payload too short - got {length} bytes, need {minimum}"
        )


class UnknownCommandError(DecodeError):
    """A payload carries a command byte this command class does not define."""


class NotSupportedError(AlarmError):
    """A request cannot be built for this device."""
