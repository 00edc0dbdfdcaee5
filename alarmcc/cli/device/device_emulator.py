"""Implements an alarm device emulator with an interactive CLI UI."""

import logging

from alarmcc.command_class import AlarmCommandClass, RequestFlag, StaticRequest
from alarmcc.event import EventType
from alarmcc.node import Node
from alarmcc.packet import Packet

from .device import EmulatedDevice

_LOGGER = logging.getLogger(__name__)


class DeviceEmulator:
    """
    Connects an emulated device to an Alarm command class handler.

    Requests built by the handler are delivered straight to the device and
    the device's answers straight back, standing in for the transport.
    """

    device: EmulatedDevice
    node: Node
    command_class: AlarmCommandClass

    def __init__(  # noqa: PLR0913 # Emulator configuration
        self,
        *,
        version: int,
        supported: list[EventType],
        node_id: int = 1,
        get_supported: bool = True,
        legacy_lock_state: bool = False,
    ) -> None:
        """Create a new device emulator and the node that talks to it."""
        self.node = Node(node_id=node_id, get_supported=get_supported)
        self.command_class = AlarmCommandClass(
            sink=self.node,
            node_id=node_id,
            version=version,
            legacy_lock_state=legacy_lock_state,
        )
        self.device = EmulatedDevice(
            version=version,
            supported=supported,
            source_node_id=node_id,
            report_sent=self._deliver,
        )
        self.node.on_value_added(self._value_added)
        self.node.on_value_change(self._value_changed)
        self.command_class.create_vars()

    def start(self, *, interactive: bool = True) -> None:
        """Run the discovery and a first poll, then the interactive commands."""
        self.discover()
        self.poll()

        if interactive:
            while True:
                command = input("Command: ")
                if not self.interactive_command(command):
                    _LOGGER.debug("Stopping interactive commands")
                    break

    def discover(self) -> None:
        """Request the supported alarm types from the device."""
        self.command_class.static_request = StaticRequest.VALUES_UNKNOWN
        self._send(self.command_class.request_state(RequestFlag.STATIC))

    def poll(self) -> None:
        """Request the current alarm state from the device."""
        self._send(self.command_class.request_state(RequestFlag.DYNAMIC))

    def interactive_command(self, command: str) -> bool:
        """Handle a user CLI command."""
        print(f"Got command {command}")  # noqa: T201 # Valid CLI print

        args = command.upper().split()
        if not args:
            args = [""]
        try:
            if args[0] == "D":
                self.discover()
            elif args[0] == "P":
                self.poll()
            elif args[0] == "T" and len(args) == 3:  # noqa: PLR2004 # T <type> <param>
                self.device.trigger(EventType.from_name(args[1]), int(args[2], 0))
            elif args[0] == "L" and len(args) >= 2:  # noqa: PLR2004 # L <type> [level]
                level = int(args[2], 0) if len(args) > 2 else 1  # noqa: PLR2004
                self.device.lock(int(args[1], 0), level)
            elif args[0] == "V":
                self._print_values()
            elif args[0] == "Q":
                return False
            else:
                self._print_help()
        except ValueError as e:
            print(f"Error: {e}")  # noqa: T201 # Valid CLI print

        return True

    def _send(self, packets: list[Packet]) -> None:
        for packet in packets:
            _LOGGER.debug("Sending %s: %s", packet.name, packet.hex())
            for answer in self.device.handle_request(packet.encode()):
                self._deliver(answer)

    def _deliver(self, payload: bytes) -> None:
        if not self.command_class.handle_msg(payload):
            _LOGGER.warning("Unhandled payload from device: %s", payload.hex())

    def _value_added(self, index: int, name: str) -> None:
        print(f"Value added {index}: {name}")  # noqa: T201 # Valid CLI print

    def _value_changed(self, index: int, value: int | str) -> None:
        name = self.node.values[index].name
        print(f"Value {name} changed to {value}")  # noqa: T201 # Valid CLI print

    def _print_values(self) -> None:
        for entry in self.node.values.values():
            print(f"  {entry.index:>3} {entry.name}: {entry.value}")  # noqa: T201 # Valid CLI print

    @staticmethod
    def _print_help() -> None:
        print("Commands:")  # noqa: T201 # Valid CLI print
        print("  D               : Discover supported alarm types")  # noqa: T201 # Valid CLI print
        print("  P               : Poll current alarm state")  # noqa: T201 # Valid CLI print
        print("  T <type> <param>: Trigger an event, e.g. T SMOKE 2")  # noqa: T201 # Valid CLI print
        print("  L <17-25> [lvl] : Send a legacy lock report")  # noqa: T201 # Valid CLI print
        print("  V               : Show node values")  # noqa: T201 # Valid CLI print
        print("  Q               : Quit")  # noqa: T201 # Valid CLI print
