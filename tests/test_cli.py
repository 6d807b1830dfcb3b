from __future__ import annotations

from pathlib import Path

import pytest

from backlight_ctl import cli
from backlight_ctl import notify as notify_mod
from backlight_ctl.modes import HardwareRange


@pytest.fixture
def device(monkeypatch, tmp_path: Path, make_device):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    dev = make_device(hw_max=255, current=128)
    monkeypatch.setattr(cli, "_open_device", lambda _cfg, _args: dev)
    return dev


def test_get_relative(device, capsys) -> None:
    cli.main(["--mode", "relative", "--get"])
    assert capsys.readouterr().out == "50\n"


def test_no_flags_prints_current(device, capsys) -> None:
    cli.main([])
    assert capsys.readouterr().out == "128\n"


def test_pretty_format(device, capsys) -> None:
    cli.main(["--mode", "relative", "--pretty-format", "%val%%-%min/%max"])
    assert capsys.readouterr().out == "50%-0/100\n"


def test_max_in_step_mode(device, capsys) -> None:
    cli.main(["--mode", "step", "--steps", "8", "--max"])
    assert capsys.readouterr().out == "8\n"
    assert device.reads == 0


def test_set_is_silent(device, capsys) -> None:
    cli.main(["--mode", "step", "--steps", "5", "--set", "3"])
    assert device.writes == [153]
    assert capsys.readouterr().out == ""


def test_steps_zero(device) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--mode", "step", "--steps", "0", "--inc", "1"])
    assert "steps parameter is out of range" in str(exc.value.code)
    assert "max: 255" in str(exc.value.code)
    assert device.writes == []


def test_set_out_of_range(device) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--set", "300"])
    assert str(exc.value.code) == (
        "backlight-ctl: backlight value is out of range - min: 0, max: 255, value: 300"
    )
    assert device.writes == []


@pytest.mark.parametrize(
    "argv",
    [
        ["--mode", "step"],
        ["--steps", "3"],
        ["--get", "--max"],
        ["--set", "1", "--inc", "2"],
        ["--set", "-1"],
        ["--inc", "ten"],
        ["--mode", "percent"],
    ],
)
def test_usage_errors(device, argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2


def test_increment_with_notification(monkeypatch, device) -> None:
    device.range = HardwareRange(min=0, max=100)
    device.current = 90
    sent: list[tuple[int, str, str]] = []
    monkeypatch.setattr(notify_mod, "notify", lambda p, i, t: sent.append((p, i, t)))

    cli.main(["--inc", "20", "--notifications", "--title", "Screen"])
    assert device.writes == [100]
    assert sent == [(100, "high", "Screen")]


def test_config_defaults_apply(device, tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(
        "defaults:\n  mode: step\n  steps: 10\n  pretty_format: '%val/%max'\n", encoding="utf-8"
    )
    cli.main(["-c", str(cfg)])
    assert capsys.readouterr().out == "5/10\n"

    cli.main(["-c", str(cfg), "--mode", "relative"])
    assert capsys.readouterr().out == "50/100\n"


def test_default_config_location(device, tmp_path: Path, capsys) -> None:
    p = tmp_path / "backlight-ctl" / "config.yaml"
    p.parent.mkdir()
    p.write_text("defaults:\n  mode: relative\n", encoding="utf-8")
    cli.main(["--get"])
    assert capsys.readouterr().out == "50\n"


def test_bad_config_exits(device, tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("backend: ddc\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main(["-c", str(cfg)])
    assert "backend must be one of" in str(exc.value.code)


def test_open_device_sysfs(tmp_path: Path) -> None:
    d = tmp_path / "acpi_video0"
    d.mkdir()
    cfg = {
        "backend": "sysfs",
        "sysfs": {"root": str(tmp_path), "device": None, "use_logind": True},
    }
    args = cli._build_parser().parse_args(["--get"])
    dev = cli._open_device(cfg, args)
    assert dev.name == "acpi_video0"
    assert dev.use_logind is True


def test_open_device_randr_by_flag() -> None:
    from backlight_ctl.system.randr import RandrBacklight

    cfg = {"backend": "sysfs", "sysfs": {}}
    args = cli._build_parser().parse_args(["--backend", "randr"])
    assert isinstance(cli._open_device(cfg, args), RandrBacklight)


def test_step_config_without_steps_uses_flag(device, tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("defaults:\n  mode: step\n", encoding="utf-8")
    cli.main(["-c", str(cfg), "--steps", "10"])
    assert capsys.readouterr().out == "5\n"

    with pytest.raises(SystemExit) as exc:
        cli.main(["-c", str(cfg)])
    assert exc.value.code == 2
