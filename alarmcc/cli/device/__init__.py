"""Alarm device emulator used by the 'emulate' CLI command and the tests."""

from .device import EmulatedDevice
from .device_emulator import DeviceEmulator

__all__ = ["DeviceEmulator", "EmulatedDevice"]
