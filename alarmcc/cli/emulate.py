"""Provide the 'emulate' alarmcc CLI command."""

import click

from alarmcc.event import EventType

from .device import DeviceEmulator


def _parse_event_types(
    _ctx: click.Context, _param: click.Parameter, value: str
) -> list[EventType]:
    try:
        return [EventType.from_name(name) for name in value.split(",") if name]
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.command(help="Run an emulated alarm device and poll it")
@click.option("--version", "cc_version", type=click.IntRange(min=1), default=2)
@click.option("--node-id", type=click.IntRange(1, 232), default=1)
@click.option(
    "--supported",
    type=str,
    default="smoke,flood,burglar",
    callback=_parse_event_types,
    help="Comma separated event types the device supports",
)
@click.option("--get-supported/--no-get-supported", default=True)
@click.option("--legacy-lock-state/--no-legacy-lock-state", default=False)
@click.option("--interactive/--no-interactive", default=True)
def emulate(  # noqa: PLR0913 # One argument per CLI option
    *,
    cc_version: int,
    node_id: int,
    supported: list[EventType],
    get_supported: bool,
    legacy_lock_state: bool,
    interactive: bool,
) -> None:
    """Add the 'emulate' CLI command which runs the device emulator."""
    emulator = DeviceEmulator(
        version=cc_version,
        supported=supported,
        node_id=node_id,
        get_supported=get_supported,
        legacy_lock_state=legacy_lock_state,
    )
    emulator.start(interactive=interactive)
