from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from backlight_ctl.errors import CurrentValueUnavailable, RangeUnavailable, WriteRejected
from backlight_ctl.modes import HardwareRange
from backlight_ctl.system.base import Device

log = logging.getLogger("backlight_ctl.sysfs")

SYSFS_ROOT = Path("/sys/class/backlight")

UDEV_HINT = (
    "no permission to write {path}; either enable sysfs.use_logind in the config "
    'or add a udev rule such as ACTION=="add", SUBSYSTEM=="backlight", '
    'RUN+="/bin/chgrp video /sys/class/backlight/%k/brightness", '
    'RUN+="/bin/chmod g+w /sys/class/backlight/%k/brightness"'
)


def _read_int(path: Path) -> int:
    return int(path.read_text(encoding="utf-8").strip())


def find_device(root: str | Path = SYSFS_ROOT, name: str | None = None) -> Path:
    """Return the backlight class directory to drive.

    With no name the first device in sorted order is used.
    """

    root = Path(root)
    if name:
        p = Path(name)
        if p.is_absolute() or len(p.parts) != 1:
            raise RangeUnavailable(f"invalid backlight device name: {name}")
        candidate = root / p
        if not candidate.is_dir():
            raise RangeUnavailable(f"backlight device {name} not found in {root}")
        return candidate

    devices = sorted(p for p in root.iterdir() if p.is_dir()) if root.is_dir() else []
    if not devices:
        raise RangeUnavailable(f"no backlight device found in {root}")
    return devices[0]


@dataclass(frozen=True)
class SysfsBacklight(Device):
    sysfs_dir: Path
    use_logind: bool = False

    @property
    def name(self) -> str:
        return self.sysfs_dir.name

    @property
    def _max_brightness(self) -> Path:
        return self.sysfs_dir / "max_brightness"

    @property
    def _brightness(self) -> Path:
        return self.sysfs_dir / "brightness"

    @property
    def _actual_brightness(self) -> Path:
        return self.sysfs_dir / "actual_brightness"

    def query_range(self) -> HardwareRange:
        try:
            hw_max = _read_int(self._max_brightness)
        except (OSError, ValueError) as e:
            raise RangeUnavailable(str(e)) from e
        return HardwareRange(min=0, max=hw_max)

    def query_current(self) -> int:
        # actual_brightness reports what the hardware applied; not every driver has it.
        path = self._actual_brightness if self._actual_brightness.exists() else self._brightness
        try:
            return _read_int(path)
        except (OSError, ValueError) as e:
            raise CurrentValueUnavailable(str(e)) from e

    def write(self, value: int) -> None:
        if self.use_logind:
            from backlight_ctl.system.logind import set_brightness

            set_brightness("backlight", self.name, int(value))
            return

        log.debug("writing %d to %s", value, self._brightness)
        try:
            self._brightness.write_text(str(int(value)), encoding="utf-8")
        except PermissionError as e:
            raise WriteRejected(UDEV_HINT.format(path=self._brightness)) from e
        except OSError as e:
            raise WriteRejected(str(e)) from e
