"""Module file for alarmcc."""

from .command_class import AlarmCommandClass, RequestFlag, StaticRequest
from .errors import (
    AlarmError,
    DecodeError,
    NotSupportedError,
    TooShortError,
    UnknownCommandError,
)
from .event import AlarmReport, BaseEvent, EventType, SupportedReport
from .node import Node
from .packet import CommandType, Packet
from .request import RequestEncoder, encode_get, encode_supported_get
from .values import ValueIndex, ValueSink

__all__ = [
    "AlarmCommandClass",
    "AlarmError",
    "AlarmReport",
    "BaseEvent",
    "CommandType",
    "DecodeError",
    "EventType",
    "Node",
    "NotSupportedError",
    "Packet",
    "RequestEncoder",
    "RequestFlag",
    "StaticRequest",
    "SupportedReport",
    "TooShortError",
    "UnknownCommandError",
    "ValueIndex",
    "ValueSink",
    "encode_get",
    "encode_supported_get",
]
__version__ = "0.0.0-dev"
