"""Test the API of the AlarmCommandClass handler."""

from unittest.mock import Mock, call

import pytest

from alarmcc import AlarmCommandClass, Node
from alarmcc.command_class import RequestFlag, StaticRequest
from alarmcc.event import AlarmReport, BaseEvent, EventType, SupportedReport
from alarmcc.values import ValueIndex


@pytest.fixture
def sink() -> Mock:
    """Mock value sink fixture within the AlarmCommandClass fixture."""
    sink = Mock()
    sink.has_get_capability.return_value = True
    sink.known_target_types.return_value = [(4, EventType.SMOKE)]
    return sink


def make_command_class(sink: Mock, version: int) -> AlarmCommandClass:
    return AlarmCommandClass(sink=sink, node_id=7, version=version)


def test_bad_version(sink: Mock) -> None:
    with pytest.raises(ValueError, match="must be 1 or greater"):
        AlarmCommandClass(sink=sink, version=0)


def test_create_vars(sink: Mock) -> None:
    make_command_class(sink, 1).create_vars()
    assert sink.register_value.call_args_list == [
        call(ValueIndex.TYPE, "Alarm Type"),
        call(ValueIndex.LEVEL, "Alarm Level"),
    ]


def test_create_vars_legacy_lock_state(sink: Mock) -> None:
    AlarmCommandClass(sink=sink, legacy_lock_state=True).create_vars()
    assert call(ValueIndex.LOCK_STATE, "Lock State") in sink.register_value.mock_calls


def test_handle_version_1_report(sink: Mock) -> None:
    command_class = make_command_class(sink, 1)
    assert command_class.handle_msg(bytes([0x05, 0x07, 0x01]))
    assert sink.publish.call_args_list == [
        call(ValueIndex.TYPE, 7),
        call(ValueIndex.LEVEL, 1),
    ]


def test_handle_version_2_report(sink: Mock) -> None:
    """Extended fields are routed to the source node and event type values."""
    command_class = make_command_class(sink, 2)
    assert command_class.handle_msg(bytes([0x05, 7, 1, 9, 0, 1, 1]))
    assert sink.publish.call_args_list == [
        call(ValueIndex.TYPE, 7),
        call(ValueIndex.LEVEL, 1),
        call(ValueIndex.SOURCE_NODE_ID, 9),
        call(4, 1),
    ]


def test_handle_version_2_short_report(sink: Mock) -> None:
    command_class = make_command_class(sink, 2)
    assert command_class.handle_msg(bytes([0x05, 7, 1, 9]))
    assert sink.publish.call_args_list == [
        call(ValueIndex.TYPE, 7),
        call(ValueIndex.LEVEL, 1),
    ]


def test_handle_report_unknown_event_type(sink: Mock) -> None:
    """Unknown event types are skipped, never routed."""
    command_class = make_command_class(sink, 2)
    assert command_class.handle_msg(bytes([0x05, 0, 0, 9, 0, 14, 1]))
    assert sink.publish.call_args_list == [
        call(ValueIndex.TYPE, 0),
        call(ValueIndex.LEVEL, 0),
        call(ValueIndex.SOURCE_NODE_ID, 9),
    ]


def test_handle_legacy_lock_report(sink: Mock) -> None:
    command_class = make_command_class(sink, 1)
    command_class.handle_msg(bytes([0x05, 24, 1]))
    assert call(ValueIndex.LOCK_STATE, "Secured by Controller") in (
        sink.publish.call_args_list
    )


def test_handle_too_short_report(sink: Mock) -> None:
    """Malformed payloads are discarded and counted."""
    command_class = make_command_class(sink, 2)
    assert command_class.handle_msg(bytes([0x05, 7]))
    assert command_class.bad_received_packets == 1
    sink.publish.assert_not_called()


def test_handle_other_commands(sink: Mock) -> None:
    command_class = make_command_class(sink, 2)
    assert not command_class.handle_msg(bytes([0x04]))
    assert not command_class.handle_msg(bytes([0x99, 0x00]))
    assert not command_class.handle_msg(b"")


def test_handle_supported_report(sink: Mock) -> None:
    """SourceNodeId first, then each supported type in ascending order."""
    command_class = make_command_class(sink, 2)
    command_class.request_state(RequestFlag.STATIC)
    assert command_class.handle_msg(bytes([0x08, 2, 0b00000011, 0b01000000]))
    assert sink.register_value.call_args_list == [
        call(ValueIndex.SOURCE_NODE_ID, "SourceNodeId"),
        call(3, "General"),
        call(4, "Smoke"),
    ]
    assert command_class.static_request == StaticRequest.VALUES_KNOWN


def test_on_event_received(sink: Mock) -> None:
    command_class = make_command_class(sink, 2)
    events: list[BaseEvent] = []
    command_class.on_event_received(events.append)
    command_class.handle_msg(bytes([0x08, 1, 0x01]))
    command_class.handle_msg(bytes([0x05, 7, 1]))
    assert isinstance(events[0], SupportedReport)
    assert isinstance(events[1], AlarmReport)


def test_request_state_static_version_2(sink: Mock) -> None:
    """Supported types are requested once."""
    command_class = make_command_class(sink, 2)
    assert command_class.static_request == StaticRequest.VALUES_UNKNOWN

    packets = command_class.request_state(RequestFlag.STATIC)
    assert [p.encode() for p in packets] == [bytes([0x07])]
    assert command_class.static_request == StaticRequest.VALUES_REQUESTED

    assert command_class.request_state(RequestFlag.STATIC) == []


def test_request_state_static_version_1(sink: Mock) -> None:
    """Version 1 nodes have nothing to discover."""
    command_class = make_command_class(sink, 1)
    assert command_class.request_state(RequestFlag.STATIC) == []
    assert command_class.static_request == StaticRequest.VALUES_KNOWN


def test_request_state_static_and_dynamic(sink: Mock) -> None:
    command_class = make_command_class(sink, 3)
    packets = command_class.request_state(RequestFlag.STATIC | RequestFlag.DYNAMIC)
    assert [p.encode() for p in packets] == [bytes([0x07])]

    packets = command_class.request_state(RequestFlag.STATIC | RequestFlag.DYNAMIC)
    assert [p.encode() for p in packets] == [bytes([0x04, 0x00, 1, 0x01])]


def test_request_value_version_1(sink: Mock) -> None:
    packets = make_command_class(sink, 1).request_value()
    assert [p.encode() for p in packets] == [bytes([0x04])]


def test_request_value_version_2(sink: Mock) -> None:
    packets = make_command_class(sink, 2).request_value()
    assert [p.encode() for p in packets] == [bytes([0x04, 0x00, 1])]


def test_request_value_not_supported(sink: Mock) -> None:
    sink.has_get_capability.return_value = False
    assert make_command_class(sink, 2).request_value() == []


def test_discovery_and_poll_with_node() -> None:
    """Supported types found by discovery are polled and updated."""
    node = Node(node_id=7)
    command_class = AlarmCommandClass(sink=node, node_id=7, version=2)
    command_class.create_vars()

    command_class.handle_msg(bytes([0x08, 1, 0b00100010]))
    assert node.value_names() == [
        "Alarm Type",
        "Alarm Level",
        "SourceNodeId",
        "Smoke",
        "Flood",
    ]

    packets = command_class.request_value()
    assert [p.encode() for p in packets] == [
        bytes([0x04, 0x00, 1]),
        bytes([0x04, 0x00, 5]),
    ]

    command_class.handle_msg(bytes([0x05, 0, 0, 9, 0, 5, 2]))
    assert node.get_value(ValueIndex.SOURCE_NODE_ID) == 9
    assert node.get_value(8) == 2
    assert node.get_value(4) is None
