from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

from backlight_ctl.errors import ValueOutOfRange
from backlight_ctl.modes import (
    HardwareRange,
    ModeSpec,
    ResolvedMode,
    percentage,
    to_hardware_value,
    to_mode_value,
)
from backlight_ctl.system.base import Device

log = logging.getLogger("backlight_ctl.handler")

Notifier = Callable[[int, str], None]


class IntentKind(enum.Enum):
    IDLE = "idle"
    GET = "get"
    MIN = "min"
    MAX = "max"
    SET = "set"
    INC = "inc"
    DEC = "dec"

    @property
    def mutating(self) -> bool:
        return self in (IntentKind.SET, IntentKind.INC, IntentKind.DEC)


@dataclass(frozen=True)
class Intent:
    kind: IntentKind = IntentKind.IDLE
    value: int = 0


@dataclass(frozen=True)
class Outcome:
    kind: IntentKind
    mode: ResolvedMode
    value: int
    written: int | None = None


def icon_class(pct: int) -> str:
    return "high" if pct > 50 else "low"


def _to_hardware(hw: HardwareRange, mode: ResolvedMode, value: int) -> int:
    raw = to_hardware_value(hw.max, mode.span, value)
    return max(hw.min, min(hw.max, raw))


def _current(device: Device, hw: HardwareRange, mode: ResolvedMode) -> int:
    raw = device.query_current()
    value = mode.clamp(to_mode_value(hw.max, mode.span, raw))
    log.debug("current hardware value %d -> %s value %d", raw, mode.kind.value, value)
    return value


def _target(intent: Intent, device: Device, hw: HardwareRange, mode: ResolvedMode) -> int:
    if intent.kind is IntentKind.SET:
        if not mode.contains(intent.value):
            raise ValueOutOfRange(min=mode.min, max=mode.max, value=intent.value)
        return intent.value

    cur = _current(device, hw, mode)
    delta = intent.value if intent.kind is IntentKind.INC else -intent.value
    return mode.clamp(cur + delta)


def resolve(intent: Intent, mode: ResolvedMode, hw: HardwareRange, device: Device) -> Outcome:
    """Carry out one intent against an already validated range and mode.

    At most one write reaches the device, and only after every check passed.
    """

    if intent.kind is IntentKind.MIN:
        return Outcome(intent.kind, mode, mode.min)
    if intent.kind is IntentKind.MAX:
        return Outcome(intent.kind, mode, mode.max)
    if not intent.kind.mutating:
        return Outcome(intent.kind, mode, _current(device, hw, mode))

    value = _target(intent, device, hw, mode)
    raw = _to_hardware(hw, mode, value)
    log.info("writing hardware value %d (%s value %d)", raw, mode.kind.value, value)
    device.write(raw)
    return Outcome(intent.kind, mode, value, written=raw)


def handle(
    intent: Intent,
    mode_spec: ModeSpec,
    device: Device,
    notify: Notifier | None = None,
) -> Outcome:
    hw = device.query_range()
    log.debug("hardware range %d..%d", hw.min, hw.max)
    mode = mode_spec.resolve(hw)

    outcome = resolve(intent, mode, hw, device)

    if notify is not None and outcome.written is not None:
        pct = percentage(hw.max, outcome.written)
        try:
            notify(pct, icon_class(pct))
        except Exception as e:
            log.warning("notification failed: %s", e)

    return outcome
