from __future__ import annotations

import pytest

from backlight_ctl.modes import HardwareRange
from backlight_ctl.system.base import Device


class FakeDevice(Device):
    name = "fake"

    def __init__(self, hw_min: int = 0, hw_max: int = 255, current: int = 0):
        self.range = HardwareRange(min=hw_min, max=hw_max)
        self.current = current
        self.reads = 0
        self.writes: list[int] = []

    def query_range(self) -> HardwareRange:
        return self.range

    def query_current(self) -> int:
        self.reads += 1
        return self.current

    def write(self, value: int) -> None:
        self.writes.append(value)
        self.current = value


@pytest.fixture
def make_device():
    return FakeDevice
