from __future__ import annotations


class BacklightError(RuntimeError):
    """Base class for every failure that aborts a brightness request."""


class RangeUnavailable(BacklightError):
    def __init__(self, detail: str = "") -> None:
        msg = "did not receive a valid backlight value range"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class CurrentValueUnavailable(BacklightError):
    def __init__(self, detail: str = "") -> None:
        msg = "did not receive a valid current backlight value"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class WriteRejected(BacklightError):
    def __init__(self, detail: str = "") -> None:
        msg = "backlight write was rejected"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class ValueOutOfRange(BacklightError):
    def __init__(self, min: int, max: int, value: int) -> None:
        self.min = min
        self.max = max
        self.value = value
        super().__init__(
            f"backlight value is out of range - min: {min}, max: {max}, value: {value}"
        )


class StepParameterOutOfRange(BacklightError):
    def __init__(self, max: int, value: int) -> None:
        self.max = max
        self.value = value
        super().__init__(
            f"steps parameter is out of range - min: 1, max: {max}, steps value: {value}"
        )
