"""Provides the Alarm command class handler for one device node."""

import logging
from collections.abc import Callable
from enum import Enum, Flag, auto

from .errors import DecodeError, NotSupportedError
from .event import AlarmReport, BaseEvent, SupportedReport
from .packet import CommandType, Packet
from .request import RequestEncoder
from .values import ValueIndex, ValueSink, value_index_for_event_type

_LOGGER = logging.getLogger(__name__)


class RequestFlag(Flag):
    """Kinds of state a driver asks a command class to request."""

    STATIC = auto()
    DYNAMIC = auto()


class StaticRequest(Enum):
    """Progress of the one-shot discovery of supported alarm types."""

    VALUES_UNKNOWN = "VALUES_UNKNOWN"
    VALUES_REQUESTED = "VALUES_REQUESTED"
    VALUES_KNOWN = "VALUES_KNOWN"


class AlarmCommandClass:
    """
    Handles the Alarm command class for one node.

    Decodes payloads received from the node and pushes the values into its
    :py:class:`alarmcc.values.ValueSink`, and builds the requests the driver
    sends to the node.
    """

    node_id: int
    version: int
    static_request: StaticRequest
    bad_received_packets: int
    _sink: ValueSink
    _encoder: RequestEncoder
    _legacy_lock_state: bool
    _on_event_received: Callable[[BaseEvent], None] | None

    def __init__(
        self,
        *,
        sink: ValueSink,
        node_id: int = 1,
        version: int = 1,
        legacy_lock_state: bool = False,
    ) -> None:
        """
        Create the Alarm command class handler for a node.

        :param sink: Receives the values decoded from the node
        :param node_id: The node id, used in log messages
        :param version: The command class version the node supports
        :param legacy_lock_state: Expose the legacy 'Lock State' value that
            some door locks report through alarm types 17-25
        """
        if version < 1:
            msg = f"Command class version must be 1 or greater - got {version}"
            raise ValueError(msg)

        self.node_id = node_id
        self.version = version
        self.static_request = StaticRequest.VALUES_UNKNOWN
        self.bad_received_packets = 0
        self._sink = sink
        self._encoder = RequestEncoder(sink)
        self._legacy_lock_state = legacy_lock_state
        self._on_event_received = None

    def create_vars(self) -> None:
        """Register the values every alarm node exposes."""
        self._sink.register_value(ValueIndex.TYPE, "Alarm Type")
        self._sink.register_value(ValueIndex.LEVEL, "Alarm Level")
        if self._legacy_lock_state:
            self._sink.register_value(ValueIndex.LOCK_STATE, "Lock State")

    def request_state(self, flags: RequestFlag) -> list[Packet]:
        """
        Build the requests needed to refresh the requested kinds of state.

        Static state is the list of supported alarm types, which is only
        requested once. Version 1 nodes cannot be asked, so discovery is
        complete straight away.
        """
        if (
            RequestFlag.STATIC in flags
            and self.static_request == StaticRequest.VALUES_UNKNOWN
        ):
            if self.version > 1:
                packet = self._encoder.build_supported_get(self.version)
                _LOGGER.debug("Node %d sending %s", self.node_id, packet.name)
                self.static_request = StaticRequest.VALUES_REQUESTED
                return [packet]
            self.static_request = StaticRequest.VALUES_KNOWN

        if RequestFlag.DYNAMIC in flags:
            return self.request_value()

        return []

    def request_value(self) -> list[Packet]:
        """Build the Get requests that poll the node's current alarm state."""
        try:
            packets = self._encoder.build_gets(self.version)
        except NotSupportedError:
            _LOGGER.info(
                "Node %d AlarmCmd_Get Not Supported on this node", self.node_id
            )
            return []

        for packet in packets:
            _LOGGER.debug(
                "Node %d sending %s: %s", self.node_id, packet.name, packet.hex()
            )
        return packets

    def handle_msg(self, payload: bytes) -> bool:
        """
        Handle a payload received from the node.

        :param payload: The command class payload, starting at the command byte
        :return: True if the payload belongs to a command this class handles
        """
        if not payload or payload[0] not in (
            CommandType.REPORT.value,
            CommandType.SUPPORTED_REPORT.value,
        ):
            return False

        try:
            event = BaseEvent.decode(Packet.decode(payload), self.version)
        except DecodeError as e:
            self.bad_received_packets += 1
            _LOGGER.warning(
                "Node %d discarding alarm payload %s: %s",
                self.node_id,
                payload.hex(),
                e,
            )
            return True

        if isinstance(event, AlarmReport):
            self._handle_report(event)
        elif isinstance(event, SupportedReport):
            self._handle_supported_report(event)

        if self._on_event_received is not None:
            self._on_event_received(event)
        return True

    def _handle_report(self, report: AlarmReport) -> None:
        if report.is_extended:
            _LOGGER.info(
                "Node %d Received Alarm report: type=%d, level=%d, sensorSrcID=%d, "
                "type:%s event:%d, status=%d",
                self.node_id,
                report.alarm_type,
                report.level,
                report.source_node_id,
                report.event_type_name,
                report.event_parameter,
                report.status,
            )
        else:
            _LOGGER.info(
                "Node %d Received Alarm report: type=%d, level=%d",
                self.node_id,
                report.alarm_type,
                report.level,
            )

        self._sink.publish(ValueIndex.TYPE, report.alarm_type)
        self._sink.publish(ValueIndex.LEVEL, report.level)

        if report.lock_state is not None:
            _LOGGER.debug("Node %d lock state: %s", self.node_id, report.lock_state)
            self._sink.publish(ValueIndex.LOCK_STATE, report.lock_state)

        if report.source_node_id is not None:
            self._sink.publish(ValueIndex.SOURCE_NODE_ID, report.source_node_id)

        event_type = report.known_event_type
        if event_type is not None and report.event_parameter is not None:
            self._sink.publish(
                value_index_for_event_type(event_type), report.event_parameter
            )
        elif report.is_extended:
            _LOGGER.info(
                "Node %d ignoring event for unknown alarm type: %d",
                self.node_id,
                report.event_type,
            )

    def _handle_supported_report(self, report: SupportedReport) -> None:
        _LOGGER.info("Node %d Received supported alarm types", self.node_id)

        self._sink.register_value(ValueIndex.SOURCE_NODE_ID, "SourceNodeId")
        _LOGGER.info("    Added alarm SourceNodeId")

        for event_type in report.supported:
            self._sink.register_value(
                value_index_for_event_type(event_type), event_type.label
            )
            _LOGGER.info("    Added alarm type: %s", event_type.label)

        self.static_request = StaticRequest.VALUES_KNOWN

    def on_event_received(self, f: Callable[[BaseEvent], None] | None) -> None:
        """Set the callback that receives every decoded event."""
        self._on_event_received = f
