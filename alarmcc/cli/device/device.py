"""Provides the alarm state of the emulated device."""

import logging
from collections.abc import Callable

from alarmcc.event import (
    LOCK_STATE_TYPE_MAX,
    LOCK_STATE_TYPE_MIN,
    AlarmGet,
    AlarmReport,
    BaseEvent,
    EventType,
    SupportedGet,
    SupportedReport,
)
from alarmcc.packet import Packet

_LOGGER = logging.getLogger(__name__)


class EmulatedDevice:
    """Represents the alarm state of an emulated device, answering requests."""

    LEVEL_ACTIVE = 0xFF
    LEVEL_IDLE = 0x00

    version: int
    supported: list[EventType]
    source_node_id: int
    alarm_type: int
    level: int
    events: dict[EventType, int]
    _report_sent: Callable[[bytes], None] | None

    def __init__(
        self,
        *,
        version: int,
        supported: list[EventType],
        source_node_id: int = 1,
        report_sent: Callable[[bytes], None] | None = None,
    ) -> None:
        """
        Create an emulated device.

        :param version: The Alarm command class version the device implements
        :param supported: The event types the device reports
        :param source_node_id: The node id placed in version 2 reports
        :param report_sent: Receives unsolicited report payloads
        """
        self.version = version
        self.supported = sorted(set(supported), key=lambda e: e.value)
        self.source_node_id = source_node_id
        self.alarm_type = 0
        self.level = EmulatedDevice.LEVEL_IDLE
        self.events = {event_type: 0 for event_type in self.supported}
        self._report_sent = report_sent

    def handle_request(self, payload: bytes) -> list[bytes]:
        """
        Answer a request payload sent to the device.

        :return: The payloads the device sends back
        """
        request = BaseEvent.decode(Packet.decode(payload), self.version)
        _LOGGER.debug("Emulated device handling %s", request)

        if isinstance(request, SupportedGet):
            if self.version == 1:
                _LOGGER.warning("Version 1 device ignoring Supported Get")
                return []
            report = SupportedReport(supported=self.supported)
            return [report.encode().encode()]

        if isinstance(request, AlarmGet):
            return [self._build_report(request.event_type).encode().encode()]

        _LOGGER.warning("Emulated device ignoring unexpected payload %s", payload.hex())
        return []

    def trigger(self, event_type: EventType, event_parameter: int) -> bytes:
        """Raise an event on the device and send an unsolicited report."""
        if event_type not in self.events:
            msg = f"{event_type.label} is not supported by this device"
            raise ValueError(msg)

        _check_byte("Event parameter", event_parameter)
        self.events[event_type] = event_parameter
        self.alarm_type = event_type.value
        self.level = (
            EmulatedDevice.LEVEL_ACTIVE
            if event_parameter
            else EmulatedDevice.LEVEL_IDLE
        )
        return self._send(self._build_report(event_type).encode().encode())

    def lock(self, alarm_type: int, level: int = 1) -> bytes:
        """Send a legacy lock report, as door locks do for types 17-25."""
        if not LOCK_STATE_TYPE_MIN <= alarm_type <= LOCK_STATE_TYPE_MAX:
            msg = (
                f"Lock alarm type must be in the range {LOCK_STATE_TYPE_MIN}"
                f" - {LOCK_STATE_TYPE_MAX} - got {alarm_type}"
            )
            raise ValueError(msg)

        _check_byte("Lock level", level)
        self.alarm_type = alarm_type
        self.level = level
        report = AlarmReport(alarm_type=alarm_type, level=level)
        return self._send(report.encode().encode())

    def _build_report(self, event_type: EventType | None) -> AlarmReport:
        if self.version == 1 or event_type is None:
            return AlarmReport(alarm_type=self.alarm_type, level=self.level)

        return AlarmReport(
            alarm_type=self.alarm_type,
            level=self.level,
            source_node_id=self.source_node_id,
            status=0x00,
            event_type=event_type.value,
            event_parameter=self.events.get(event_type, 0),
        )

    def _send(self, payload: bytes) -> bytes:
        _LOGGER.debug("Emulated device sending %s", payload.hex())
        if self._report_sent is not None:
            self._report_sent(payload)
        return payload


def _check_byte(name: str, value: int) -> None:
    """Reject values that do not fit the single byte a report carries."""
    if not 0 <= value <= Packet.BYTE_MAX:
        msg = f"{name} must be in the range 0 - {Packet.BYTE_MAX} - got {value}"
        raise ValueError(msg)
