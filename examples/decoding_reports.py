"""
Example that decodes payloads received from an alarm device.

Prints the decoded events and the node values they produce.
"""

from alarmcc import AlarmCommandClass, BaseEvent, Node

version = 2

# Supported Report: General and Smoke, then a Smoke report from node 9
payloads = [
    bytes([0x08, 0x01, 0b00000011]),
    bytes([0x05, 0x07, 0x01, 0x09, 0x00, 0x01, 0x01]),
]


def main() -> None:
    """Register event handlers then feeds the payloads to the command class."""
    node = Node(node_id=9)
    command_class = AlarmCommandClass(sink=node, node_id=9, version=version)
    command_class.create_vars()

    @command_class.on_event_received
    def on_event_received(event: BaseEvent) -> None:
        print(f"Event received: {event}")  # noqa: T201 # Valid CLI print

    @node.on_value_change
    def on_value_change(index: int, value: int | str) -> None:
        print(f"Value {node.values[index].name} changed to {value}")  # noqa: T201 # Valid CLI print

    for payload in payloads:
        command_class.handle_msg(payload)


if __name__ == "__main__":
    main()
