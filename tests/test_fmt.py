from __future__ import annotations

from backlight_ctl.fmt import render


def test_render_all_tokens() -> None:
    assert render("%val%%-%min/%max", min=0, max=100, val=42) == "42%-0/100"


def test_render_is_single_pass() -> None:
    assert render("%%val", min=0, max=1, val=9) == "%val"
    assert render("%%%val", min=0, max=1, val=9) == "%9"


def test_render_keeps_unknown_percent_sequences() -> None:
    assert render("50% %x %", min=0, max=1, val=0) == "50% %x %"


def test_render_plain_template() -> None:
    assert render("brightness", min=0, max=1, val=0) == "brightness"
