from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass

from backlight_ctl.errors import (
    BacklightError,
    CurrentValueUnavailable,
    RangeUnavailable,
    WriteRejected,
)
from backlight_ctl.modes import HardwareRange
from backlight_ctl.system.base import Device

log = logging.getLogger("backlight_ctl.randr")

# Newer drivers expose the upper-case name; older ones the legacy spelling.
PROPERTY_NAMES = ("BACKLIGHT", "Backlight")

_OUTPUT_RE = re.compile(r"^(\S+) (?:connected|disconnected|unknown connection)\b")
_PROP_RE = re.compile(r"^\t([^\t:][^:]*):\s*(.*?)\s*$")
_RANGE_RE = re.compile(r"^\t\trange:\s*\((-?\d+),\s*(-?\d+)\)")


@dataclass
class BacklightProperty:
    output: str
    name: str
    raw_value: str
    range: tuple[int, int] | None = None


def parse_backlight_properties(text: str) -> list[BacklightProperty]:
    """Collect backlight properties from ``xrandr --prop`` output, in output order."""

    found: list[BacklightProperty] = []
    output: str | None = None
    last: BacklightProperty | None = None

    for line in text.splitlines():
        m = _OUTPUT_RE.match(line)
        if m:
            output = m.group(1)
            last = None
            continue

        m = _PROP_RE.match(line)
        if m:
            last = None
            if output and m.group(1) in PROPERTY_NAMES:
                last = BacklightProperty(output=output, name=m.group(1), raw_value=m.group(2))
                found.append(last)
            continue

        m = _RANGE_RE.match(line)
        if m and last is not None and last.range is None:
            last.range = (int(m.group(1)), int(m.group(2)))

    return found


def select_property(props: list[BacklightProperty]) -> BacklightProperty:
    """First output exposing a backlight property; BACKLIGHT wins over Backlight."""

    if not props:
        raise RangeUnavailable("no output exposes a backlight property")
    output = props[0].output
    candidates = [p for p in props if p.output == output]
    return min(candidates, key=lambda p: PROPERTY_NAMES.index(p.name))


class RandrBacklight(Device):
    """Backlight property of the first RandR output, driven through ``xrandr``."""

    def __init__(self, xrandr_bin: str = "xrandr"):
        self._bin = xrandr_bin
        self._prop: BacklightProperty | None = None

    @property
    def name(self) -> str:
        return self._prop.output if self._prop else "randr"

    def _run(self, *args: str, error: type[BacklightError]) -> str:
        cmd = [self._bin, *args]
        log.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=True)  # noqa: S603
        except FileNotFoundError as e:
            raise error(f"{self._bin} not found") from e
        except subprocess.CalledProcessError as e:
            raise error((e.stderr or "").strip() or str(e)) from e
        return proc.stdout

    def _probe(self, error: type[BacklightError]) -> BacklightProperty:
        text = self._run("--prop", error=error)
        self._prop = select_property(parse_backlight_properties(text))
        log.debug("using %s property of output %s", self._prop.name, self._prop.output)
        return self._prop

    def query_range(self) -> HardwareRange:
        prop = self._probe(RangeUnavailable)
        if prop.range is None:
            raise RangeUnavailable(f"{prop.name} on {prop.output} has no value range")
        lo, hi = prop.range
        if lo < 0 or lo > hi:
            raise RangeUnavailable(f"invalid range ({lo}, {hi}) on {prop.output}")
        return HardwareRange(min=lo, max=hi)

    def query_current(self) -> int:
        prop = self._probe(CurrentValueUnavailable)
        try:
            value = int(prop.raw_value)
        except ValueError as e:
            raise CurrentValueUnavailable(
                f"{prop.name} on {prop.output}: {prop.raw_value!r}"
            ) from e
        if value < 0:
            raise CurrentValueUnavailable(f"{prop.name} on {prop.output}: {value}")
        return value

    def write(self, value: int) -> None:
        prop = self._prop or self._probe(WriteRejected)
        self._run("--output", prop.output, "--set", prop.name, str(int(value)), error=WriteRejected)
