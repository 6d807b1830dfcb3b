from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from backlight_ctl.modes import Mode
from backlight_ctl.system.sysfs import SYSFS_ROOT

BACKENDS = ("randr", "sysfs")


class ConfigError(ValueError):
    pass


def defaults() -> dict[str, Any]:
    return {
        "backend": "randr",
        "sysfs": {"device": None, "root": str(SYSFS_ROOT), "use_logind": False},
        "defaults": {
            "mode": Mode.ABSOLUTE.value,
            "steps": None,
            "pretty_format": None,
            "notifications": False,
            "title": "Brightness",
        },
    }


def load(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {p}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    validate(data)
    normalize(data)
    return data


def _mapping(cfg: dict[str, Any], key: str) -> dict[str, Any]:
    section = cfg.get(key, {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"{key} must be a mapping")
    return section


def validate(cfg: dict[str, Any]) -> None:
    backend = cfg.get("backend", "randr")
    if backend not in BACKENDS:
        raise ConfigError(f"backend must be one of {', '.join(BACKENDS)}: {backend}")

    sysfs = _mapping(cfg, "sysfs")
    device = sysfs.get("device")
    if device is not None and (not isinstance(device, str) or not device.strip()):
        raise ConfigError("sysfs.device must be a non-empty string")
    if "use_logind" in sysfs and not isinstance(sysfs["use_logind"], bool):
        raise ConfigError("sysfs.use_logind must be true or false")

    dflt = _mapping(cfg, "defaults")
    mode = dflt.get("mode", Mode.ABSOLUTE.value)
    if mode not in [m.value for m in Mode]:
        raise ConfigError(f"defaults.mode must be absolute, relative or step: {mode}")

    steps = dflt.get("steps")
    if steps is not None and (isinstance(steps, bool) or not isinstance(steps, int) or steps < 0):
        raise ConfigError(f"defaults.steps must be a non-negative integer: {steps}")

    fmt = dflt.get("pretty_format")
    if fmt is not None and not isinstance(fmt, str):
        raise ConfigError("defaults.pretty_format must be a string")
    if "notifications" in dflt and not isinstance(dflt["notifications"], bool):
        raise ConfigError("defaults.notifications must be true or false")


def normalize(cfg: dict[str, Any]) -> None:
    """Fill in defaults for every key the file leaves out."""

    base = defaults()
    cfg.setdefault("backend", base["backend"])
    for section in ("sysfs", "defaults"):
        merged = dict(base[section])
        merged.update(cfg.get(section) or {})
        cfg[section] = merged

    device = cfg["sysfs"].get("device")
    if isinstance(device, str):
        cfg["sysfs"]["device"] = device.strip()
    cfg["sysfs"]["root"] = str(cfg["sysfs"]["root"]).strip()
    cfg["defaults"]["title"] = str(cfg["defaults"]["title"])
