from __future__ import annotations

import abc

from backlight_ctl.modes import HardwareRange


class Device(abc.ABC):
    """A backlight the engine can read and write in hardware units."""

    name: str

    @abc.abstractmethod
    def query_range(self) -> HardwareRange:
        raise NotImplementedError

    @abc.abstractmethod
    def query_current(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, value: int) -> None:
        raise NotImplementedError
