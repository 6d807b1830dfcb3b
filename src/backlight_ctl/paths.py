from __future__ import annotations

import os
from pathlib import Path


def default_config_path(app_name: str = "backlight-ctl") -> Path:
    """Return the per-user config file location.

    Uses XDG_CONFIG_HOME when available, else ~/.config.
    """

    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        root = Path(base)
    else:
        root = Path.home() / ".config"
    return root / app_name / "config.yaml"
