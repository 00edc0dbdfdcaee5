"""Provide the 'request' alarmcc CLI command."""

import click

from alarmcc.errors import NotSupportedError
from alarmcc.event import EventType
from alarmcc.request import encode_get, encode_supported_get

EVENT_TYPE_NAMES = [e.name.lower() for e in EventType]


@click.command(help="Print the request payloads to send to a device")
@click.option("--version", "cc_version", type=click.IntRange(min=1), default=1)
@click.option(
    "--type",
    "event_types",
    type=click.Choice(EVENT_TYPE_NAMES, case_sensitive=False),
    multiple=True,
)
@click.option("--supported-get", is_flag=True, default=False)
def request(
    *, cc_version: int, event_types: tuple[str, ...], supported_get: bool
) -> None:
    """Add the 'request' CLI command which prints encoded request payloads."""
    try:
        if supported_get:
            packets = [encode_supported_get(cc_version)]
        elif cc_version == 1:
            packets = [encode_get(cc_version)]
        else:
            packets = [
                encode_get(cc_version, EventType.from_name(name))
                for name in event_types or EVENT_TYPE_NAMES
            ]
    except NotSupportedError as e:
        raise click.UsageError(str(e)) from e

    for packet in packets:
        print(f"{packet.name} length={packet.length}: {packet.hex()}")  # noqa: T201 # Valid CLI print
