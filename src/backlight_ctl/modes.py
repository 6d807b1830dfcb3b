from __future__ import annotations

import enum
from dataclasses import dataclass

from backlight_ctl.errors import RangeUnavailable, StepParameterOutOfRange

PERCENT_SPAN = 100


class Mode(str, enum.Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    STEP = "step"


@dataclass(frozen=True)
class HardwareRange:
    min: int
    max: int

    def validate(self) -> None:
        if self.min < 0 or self.min > self.max:
            raise RangeUnavailable(f"min {self.min} is not within [0, {self.max}]")
        if self.max == 0:
            raise RangeUnavailable("max is 0")


@dataclass(frozen=True)
class ResolvedMode:
    """A mode bound to a hardware range: values live in ``[min, max]``."""

    kind: Mode
    span: int
    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def clamp(self, value: int) -> int:
        return max(self.min, min(self.max, value))


@dataclass(frozen=True)
class ModeSpec:
    kind: Mode = Mode.ABSOLUTE
    steps: int | None = None

    def resolve(self, hw: HardwareRange) -> ResolvedMode:
        hw.validate()
        if self.kind is Mode.ABSOLUTE:
            return ResolvedMode(self.kind, span=hw.max, min=hw.min, max=hw.max)
        if self.kind is Mode.RELATIVE:
            return ResolvedMode(self.kind, span=PERCENT_SPAN, min=0, max=PERCENT_SPAN)

        steps = 0 if self.steps is None else self.steps
        if not 1 <= steps <= hw.max:
            raise StepParameterOutOfRange(max=hw.max, value=steps)
        return ResolvedMode(self.kind, span=steps, min=0, max=steps)


def _round_div(num: int, den: int) -> int:
    # Nearest integer to num/den, ties away from zero.
    q, r = divmod(abs(num), den)
    if 2 * r >= den:
        q += 1
    return q if num >= 0 else -q


def to_mode_value(hw_max: int, span: int, hw_value: int) -> int:
    """Map a hardware value onto ``[0, span]``.

    Exact rational arithmetic, so ``span == hw_max`` is the identity.
    """

    return _round_div(hw_value * span, hw_max)


def to_hardware_value(hw_max: int, span: int, mode_value: int) -> int:
    """Map a mode value on ``[0, span]`` back onto ``[0, hw_max]``.

    Lossy when ``span < hw_max``: a round trip may be off by up to
    ``ceil(hw_max / span)`` hardware units.
    """

    return _round_div(hw_max * mode_value, span)


def percentage(hw_max: int, hw_value: int) -> int:
    return to_mode_value(hw_max, PERCENT_SPAN, hw_value)
