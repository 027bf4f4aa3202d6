from __future__ import annotations

import pytest

from confetti_burst.app import apply_config_file, build_cannon, build_parser, main, run_simulation
from confetti_burst.config_v2 import load_config_v2
from confetti_burst.engine.clock import RealtimeClock, VirtualClock

CONFIG = """
// test config
{
  "confetti": {
    "radius": 150,
    "particle_count": 7,
    "fades_out": false
  },
  "trigger": {"fire_count": 3}
}
"""


def _parse(argv):
    return build_parser().parse_args(argv)


def test_config_file_fills_unset_options(tmp_path):
    path = tmp_path / "c.jsonc"
    path.write_text(CONFIG, encoding="utf-8")
    argv = ["--config", str(path)]
    args = _parse(argv)
    apply_config_file(args, str(path), argv)
    assert args.radius == 150
    assert args.particle_count == 7
    assert args.fades_out is False
    assert args.fire_count == 3


def test_cli_flags_win_over_config_file(tmp_path):
    path = tmp_path / "c.jsonc"
    path.write_text(CONFIG.replace("false", "true"), encoding="utf-8")
    argv = ["--config", str(path), "--radius=200", "--no_fades_out"]
    args = _parse(argv)
    apply_config_file(args, str(path), argv)
    assert args.radius == 200
    assert args.fades_out is False
    assert args.particle_count == 7


def test_build_cannon_picks_clock():
    args = _parse(["--particle_count", "3", "--seed", "1"])
    assert isinstance(build_cannon(args, realtime=False).clock, VirtualClock)
    cannon = build_cannon(args, realtime=True)
    assert isinstance(cannon.clock, RealtimeClock)
    assert cannon.config.particle_count == 3


def test_run_simulation_reports_events():
    args = _parse(["--simulate", "10", "--fire_count", "2", "--fire_every", "1.5", "--seed", "3"])
    events = run_simulation(args, build_cannon(args, realtime=False))
    assert [(e["event"], e["burst"]) for e in events] == [
        ("started", 0), ("started", 1), ("finished", 0), ("finished", 1),
    ]
    assert [e["t"] for e in events] == pytest.approx([0.0, 1.5, 4.7, 6.2])
    assert [e["trigger"] for e in events] == [1, 2, 1, 2]


def test_main_simulate_returns_zero():
    assert main(["--simulate", "1", "--quiet"]) == 0


@pytest.mark.parametrize("argv", [
    ["--particle_count", "0"],
    ["--max_opacity", "2"],
    ["--colors", "not-a-color"],
    ["--bg_color", "nope"],
])
def test_main_rejects_bad_options(argv):
    assert main(argv + ["--simulate", "1", "--quiet"]) == 2


def test_main_reports_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "missing.jsonc"), "--simulate", "1"]) == 2


def test_main_saves_config(tmp_path):
    out = tmp_path / "saved.jsonc"
    assert main(["--simulate", "0", "--radius", "90", "--save_config", str(out)]) == 0
    cfg = load_config_v2(str(out))
    assert cfg["version"] == 2
    assert cfg["confetti"]["radius"] == 90.0


def test_main_rejects_bad_background_from_config_file(tmp_path):
    path = tmp_path / "c.jsonc"
    path.write_text('{"window": {"bg_color": "nope"}}', encoding="utf-8")
    assert main(["--config", str(path), "--simulate", "1", "--quiet"]) == 2


def test_main_normalizes_background_color(tmp_path):
    out = tmp_path / "saved.jsonc"
    assert main(["--simulate", "0", "--quiet", "--bg_color", "#fff", "--save_config", str(out)]) == 0
    assert load_config_v2(str(out))["window"]["bg_color"] == "#ffffff"


def test_abbreviated_flags_are_rejected(tmp_path):
    path = tmp_path / "c.jsonc"
    path.write_text('{"confetti": {"radius": 50}}', encoding="utf-8")
    with pytest.raises(SystemExit):
        _parse(["--radi", "400"])

    argv = ["--config", str(path), "--radius", "400"]
    args = _parse(argv)
    apply_config_file(args, str(path), argv)
    assert args.radius == 400
