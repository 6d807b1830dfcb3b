from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from backlight_ctl import __version__
from backlight_ctl.config import BACKENDS, ConfigError, defaults, load
from backlight_ctl.errors import BacklightError
from backlight_ctl.fmt import render
from backlight_ctl.handler import Intent, IntentKind, Notifier, Outcome, handle
from backlight_ctl.modes import Mode, ModeSpec
from backlight_ctl.paths import default_config_path
from backlight_ctl.system.base import Device

log = logging.getLogger("backlight_ctl.cli")

_INTENT_FLAGS = (
    ("get", IntentKind.GET),
    ("min", IntentKind.MIN),
    ("max", IntentKind.MAX),
    ("set", IntentKind.SET),
    ("inc", IntentKind.INC),
    ("dec", IntentKind.DEC),
)


def _uint(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0 or value > 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"must be an unsigned 32-bit integer: {text}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="backlight-ctl",
        description="Get or set the display backlight in absolute, percentage or step units.",
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-c", "--config", help="YAML config file with defaults")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    ap.add_argument("--backend", choices=BACKENDS, help="device backend (default randr)")
    ap.add_argument("--device", help="sysfs backlight device name, e.g. intel_backlight")

    act = ap.add_mutually_exclusive_group()
    act.add_argument("-g", "--get", action="store_true", help="Get current backlight value.")
    act.add_argument("--min", action="store_true", help="Print min backlight value.")
    act.add_argument("--max", action="store_true", help="Print max backlight value.")
    act.add_argument("-s", "--set", type=_uint, metavar="V", help="Set backlight to value.")
    act.add_argument("-i", "--inc", type=_uint, metavar="V", help="Increase backlight by value.")
    act.add_argument("-d", "--dec", type=_uint, metavar="V", help="Decrease backlight by value.")

    ap.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in Mode],
        help="value space: hardware units, percent or --steps steps (default absolute)",
    )
    ap.add_argument("--steps", type=_uint, metavar="N", help="number of steps for --mode step")
    ap.add_argument(
        "--pretty-format",
        metavar="TEMPLATE",
        help="output template; %%val, %%min and %%max are replaced, %%%% is a literal %%",
    )
    ap.add_argument(
        "--notifications",
        action="store_true",
        default=None,
        help="show a desktop notification after changing the backlight",
    )
    ap.add_argument("--title", help="notification title")

    return ap


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        stream=sys.stderr, level=level, format="%(name)s: %(levelname)s: %(message)s"
    )


def _load_config(path: str | None) -> dict[str, Any]:
    if path:
        return load(path)
    p = default_config_path()
    if p.is_file():
        log.debug("using config %s", p)
        return load(p)
    return defaults()


def intent_from_args(args: argparse.Namespace) -> Intent:
    for attr, kind in _INTENT_FLAGS:
        value = getattr(args, attr)
        if value is True:
            return Intent(kind)
        if value is not None and value is not False:
            return Intent(kind, value)
    return Intent(IntentKind.IDLE)


def mode_from_args(
    ap: argparse.ArgumentParser, args: argparse.Namespace, cfg: dict[str, Any]
) -> ModeSpec:
    mode = Mode(args.mode or cfg["defaults"]["mode"])
    if mode is not Mode.STEP:
        if args.steps is not None:
            ap.error("--steps is only valid with --mode step")
        return ModeSpec(mode)

    steps = args.steps if args.steps is not None else cfg["defaults"]["steps"]
    if steps is None:
        ap.error("--mode step requires --steps")
    return ModeSpec(mode, steps=int(steps))


def _open_device(cfg: dict[str, Any], args: argparse.Namespace) -> Device:
    backend = args.backend or cfg["backend"]
    if backend == "sysfs":
        from backlight_ctl.system.sysfs import SysfsBacklight, find_device

        sysfs = cfg["sysfs"]
        path = find_device(sysfs["root"], args.device or sysfs["device"])
        return SysfsBacklight(path, use_logind=bool(sysfs["use_logind"]))

    from backlight_ctl.system.randr import RandrBacklight

    return RandrBacklight()


def _notifier(args: argparse.Namespace, cfg: dict[str, Any]) -> Notifier | None:
    enabled = args.notifications
    if enabled is None:
        enabled = cfg["defaults"]["notifications"]
    if not enabled:
        return None

    from backlight_ctl.notify import notify

    title = args.title if args.title is not None else cfg["defaults"]["title"]
    return lambda pct, icon: notify(pct, icon, title)


def format_outcome(outcome: Outcome, template: str | None) -> str:
    if template is None:
        return str(outcome.value)
    return render(template, outcome.mode.min, outcome.mode.max, outcome.value)


def main(argv: list[str] | None = None) -> None:
    ap = _build_parser()
    args = ap.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        cfg = _load_config(args.config)
    except ConfigError as e:
        raise SystemExit(f"backlight-ctl: {e}") from e

    mode_spec = mode_from_args(ap, args, cfg)
    intent = intent_from_args(args)
    template = (
        args.pretty_format if args.pretty_format is not None else cfg["defaults"]["pretty_format"]
    )

    try:
        device = _open_device(cfg, args)
        outcome = handle(intent, mode_spec, device, notify=_notifier(args, cfg))
    except BacklightError as e:
        raise SystemExit(f"backlight-ctl: {e}") from e

    if outcome.written is None:
        print(format_outcome(outcome, template))
