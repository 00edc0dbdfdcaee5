"""Example that discovers and polls an emulated alarm device."""

from alarmcc import EventType
from alarmcc.cli.device import DeviceEmulator

version = 3
supported = [EventType.SMOKE, EventType.CARBON_MONOXIDE, EventType.FLOOD]


def main() -> None:
    """Discover the device, poll it, then raise a smoke alarm."""
    emulator = DeviceEmulator(version=version, supported=supported, node_id=5)
    emulator.start(interactive=False)

    emulator.device.trigger(EventType.SMOKE, 2)
    emulator.poll()

    for entry in emulator.node.values.values():
        print(f"{entry.name}: {entry.value}")  # noqa: T201 # Valid CLI print


if __name__ == "__main__":
    main()
