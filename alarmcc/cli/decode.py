"""Provide the 'decode' alarmcc CLI command."""

import logging

import click

from alarmcc.command_class import AlarmCommandClass
from alarmcc.event import BaseEvent
from alarmcc.node import Node
from alarmcc.packet import Packet

_LOGGER = logging.getLogger(__name__)


@click.command(help="Decode an Alarm command class payload given as hex")
@click.option("--version", "cc_version", type=click.IntRange(min=1), default=1)
@click.option("--legacy-lock-state/--no-legacy-lock-state", default=True)
@click.argument("payload")
def decode(*, cc_version: int, legacy_lock_state: bool, payload: str) -> None:
    """Add the 'decode' CLI command which prints a decoded payload."""
    _LOGGER.debug("decode %s version %d", payload, cc_version)
    try:
        packet = Packet.from_hex(payload)
        event = BaseEvent.decode(packet, cc_version)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="PAYLOAD") from e

    print(event)  # noqa: T201 # Valid CLI print

    # Run the payload through a node to show the values it would produce
    node = Node()
    command_class = AlarmCommandClass(
        sink=node, version=cc_version, legacy_lock_state=legacy_lock_state
    )
    command_class.create_vars()
    command_class.handle_msg(packet.encode())
    for entry in node.values.values():
        print(f"  {entry.index:>3} {entry.name}: {entry.value}")  # noqa: T201 # Valid CLI print
