"""Test the Get / Supported Get request builders."""

from unittest.mock import Mock

import pytest

from alarmcc.errors import NotSupportedError
from alarmcc.event import EventType
from alarmcc.request import RequestEncoder, encode_get, encode_supported_get


@pytest.fixture
def sink() -> Mock:
    """Mock value sink fixture with Get capability and two known types."""
    sink = Mock()
    sink.has_get_capability.return_value = True
    sink.known_target_types.return_value = [
        (8, EventType.FLOOD),
        (4, EventType.SMOKE),
    ]
    return sink


@pytest.fixture
def encoder(sink: Mock) -> RequestEncoder:
    """RequestEncoder object fixture for tests."""
    return RequestEncoder(sink)


def test_encode_get_version_1() -> None:
    """Version 1 Get carries no event type."""
    pkt = encode_get(1)
    assert pkt.encode() == bytes([0x04])
    assert pkt.length == 2


def test_encode_get_version_1_ignores_event_type() -> None:
    assert encode_get(1, EventType.SMOKE).encode() == bytes([0x04])


def test_encode_get_version_2() -> None:
    pkt = encode_get(2, EventType.SMOKE)
    assert pkt.encode() == bytes([0x04, 0x00, 1])
    assert pkt.length == 4


def test_encode_get_version_3() -> None:
    pkt = encode_get(3, EventType.SMOKE)
    assert pkt.encode() == bytes([0x04, 0x00, 1, 0x01])
    assert pkt.length == 5


def test_encode_get_later_versions_use_first_event_flag() -> None:
    assert encode_get(8, EventType.HOME_HEALTH).encode() == bytes(
        [0x04, 0x00, 13, 0x01]
    )


def test_encode_get_requires_event_type() -> None:
    with pytest.raises(ValueError, match="must select an event type"):
        encode_get(2)


def test_encode_get_bad_version() -> None:
    with pytest.raises(ValueError, match="must be 1 or greater"):
        encode_get(0)


def test_encode_supported_get() -> None:
    pkt = encode_supported_get(2)
    assert pkt.encode() == bytes([0x07])
    assert pkt.length == 2


def test_encode_supported_get_version_1() -> None:
    with pytest.raises(NotSupportedError, match="not defined for version 1"):
        encode_supported_get(1)


def test_build_get(encoder: RequestEncoder) -> None:
    assert encoder.build_get(2, EventType.SMOKE).encode() == bytes([0x04, 0x00, 1])


def test_build_get_without_capability(sink: Mock, encoder: RequestEncoder) -> None:
    sink.has_get_capability.return_value = False
    with pytest.raises(NotSupportedError, match="Not Supported on this node"):
        encoder.build_get(2, EventType.SMOKE)


def test_build_gets_version_1(sink: Mock, encoder: RequestEncoder) -> None:
    """Version 1 polls once, whatever types are known."""
    packets = encoder.build_gets(1)
    assert [p.encode() for p in packets] == [bytes([0x04])]
    sink.known_target_types.assert_not_called()


def test_build_gets_version_2(encoder: RequestEncoder) -> None:
    """One request per known type, in ascending type order."""
    packets = encoder.build_gets(2)
    assert [p.encode() for p in packets] == [
        bytes([0x04, 0x00, 1]),
        bytes([0x04, 0x00, 5]),
    ]


def test_build_gets_version_3(encoder: RequestEncoder) -> None:
    packets = encoder.build_gets(3)
    assert [p.encode() for p in packets] == [
        bytes([0x04, 0x00, 1, 0x01]),
        bytes([0x04, 0x00, 5, 0x01]),
    ]


def test_build_gets_no_known_types(sink: Mock, encoder: RequestEncoder) -> None:
    sink.known_target_types.return_value = []
    assert encoder.build_gets(2) == []


def test_build_gets_without_capability(sink: Mock, encoder: RequestEncoder) -> None:
    sink.has_get_capability.return_value = False
    with pytest.raises(NotSupportedError):
        encoder.build_gets(1)


def test_build_supported_get(encoder: RequestEncoder) -> None:
    assert encoder.build_supported_get(3).encode() == bytes([0x07])
