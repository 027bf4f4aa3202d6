from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from .config.schema import BurstConfig
from .config_v2 import confetti_options_from_args, dump_config_v2, flatten_config_v2, load_config_v2
from .engine.cannon import ConfettiCannon
from .engine.clock import RealtimeClock, VirtualClock
from .errors import ConfigError
from .logging_setup import setup_logging
from .utils.colors import parse_color, to_hex


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="confetti_burst",
        description="Confetti burst effect demo and recorder",
        allow_abbrev=False,
    )

    g_cfg = ap.add_argument_group("Config")
    g_cfg.add_argument("--config", type=str, default=None, help="Config v2 (JSONC) path")
    g_cfg.add_argument("--save_config", type=str, default=None, help="Write config v2 (JSONC) to this path")

    g_win = ap.add_argument_group("Window")
    g_win.add_argument("--w", type=int, default=800)
    g_win.add_argument("--h", type=int, default=800)
    g_win.add_argument("--fps", type=float, default=60.0)
    g_win.add_argument("--bg_color", type=str, default="#101018")

    g_cf = ap.add_argument_group("Confetti")
    g_cf.add_argument("--particle_count", type=int, default=20, help="Particles per burst")
    g_cf.add_argument("--emojis", type=str, nargs="*", default=[], help="Text glyphs used as particles")
    g_cf.add_argument("--include_default_shapes", action="store_true", help="Also use squares/circles when emojis are given")
    g_cf.add_argument("--colors", type=str, nargs="*", default=None, help="Colors for the default shapes (#rrggbb or names)")
    g_cf.add_argument("--particle_size", type=float, default=10.0)
    g_cf.add_argument("--rain_height", type=float, default=600.0, help="Fall distance after the explosion")
    g_cf.add_argument("--no_fades_out", dest="fades_out", action="store_false", help="Keep full opacity while falling")
    g_cf.add_argument("--max_opacity", type=float, default=1.0)
    g_cf.add_argument("--opening_angle", type=float, default=60.0, help="Cone start in degrees")
    g_cf.add_argument("--closing_angle", type=float, default=120.0, help="Cone end in degrees")
    g_cf.add_argument("--radius", type=float, default=300.0, help="Explosion radius in px")
    g_cf.add_argument("--repetitions", type=int, default=0, help="Extra bursts per trigger")
    g_cf.add_argument("--repetition_interval", type=float, default=1.0, help="Seconds between repeated bursts")

    g_trg = ap.add_argument_group("Trigger")
    g_trg.add_argument("--origin_x", type=float, default=0.5, help="Burst origin as a fraction of the width")
    g_trg.add_argument("--origin_y", type=float, default=0.75, help="Burst origin as a fraction of the height")
    g_trg.add_argument("--fire_count", type=int, default=1, help="Automatic triggers after start")
    g_trg.add_argument("--fire_every", type=float, default=1.5, help="Seconds between automatic triggers")
    g_trg.add_argument("--seed", type=int, default=None)

    g_rec = ap.add_argument_group("Record")
    g_rec.add_argument("--record_dir", type=str, default=None, help="Write a PNG sequence here instead of opening a window")
    g_rec.add_argument("--record_fps", type=float, default=60.0)
    g_rec.add_argument("--record_seconds", type=float, default=None, help="Default: until the last burst finished")

    g_dbg = ap.add_argument_group("Debug")
    g_dbg.add_argument("--simulate", type=float, default=None, metavar="SECONDS", help="Run headless on a virtual clock and log burst events")
    g_dbg.add_argument("--quiet", action="store_true", help="Less console output")
    g_dbg.add_argument("--basic_debug", action="store_true")
    g_dbg.add_argument("--debug_bursts", action="store_true", help="Burst counters overlay")

    return ap


def _given_on_cli(argv: Sequence[str], key: str) -> bool:
    flags = ("--" + key, "--no_" + key)
    for a in argv:
        name = a.split("=", 1)[0]
        if name in flags:
            return True
    return False


def apply_config_file(args: argparse.Namespace, path: str, argv: Sequence[str]) -> None:
    """Copy config file values onto ``args`` unless the flag was given explicitly."""
    flat = flatten_config_v2(load_config_v2(path))
    for k, v in flat.items():
        if not hasattr(args, k):
            continue
        if _given_on_cli(argv, k):
            continue
        setattr(args, k, v)


def build_cannon(args: Any, *, realtime: bool) -> ConfettiCannon:
    config = BurstConfig.from_options(**confetti_options_from_args(args))
    clock = RealtimeClock() if realtime else VirtualClock()
    return ConfettiCannon(config, clock, seed=getattr(args, "seed", None))


def run_simulation(args: Any, cannon: ConfettiCannon) -> List[Dict[str, Any]]:
    """Drive ``cannon`` on its virtual clock for ``args.simulate`` seconds; returns the event log."""
    logger = logging.getLogger(__name__)
    events: List[Dict[str, Any]] = []

    def _on_event(event: str, burst: Any) -> None:
        t = cannon.clock.now()
        events.append({
            "t": t,
            "event": event,
            "burst": burst.burst_id,
            "trigger": burst.trigger_value,
            "repetition": burst.repetition,
        })
        logger.info(
            "t=%7.3f  %-8s burst=%s trigger=%s rep=%s  (finished=%s/%s)",
            t, event, burst.burst_id, burst.trigger_value, burst.repetition,
            cannon.finished_count, cannon.total_scheduled,
        )

    cannon.add_listener(_on_event)
    cannon.mount()
    cannon.schedule_fires(int(getattr(args, "fire_count", 1) or 0), float(getattr(args, "fire_every", 1.5) or 0.0))
    cannon.clock.advance_to(float(args.simulate))

    logger.info(
        "simulation done at t=%.3f: %s burst(s) started, %s finished",
        cannon.clock.now(),
        cannon.total_scheduled,
        cannon.finished_count,
    )
    return events


def main(argv: Optional[Sequence[str]] = None) -> int:
    logger = logging.getLogger(__name__)
    if argv is None:
        argv = sys.argv[1:]

    ap = build_parser()
    args = ap.parse_args(list(argv))

    setup_logging(args)
    logger.debug("CLI args parsed")

    try:
        if args.config:
            apply_config_file(args, str(args.config), argv)
        args.bg_color = to_hex(parse_color(args.bg_color))
        cannon = build_cannon(args, realtime=not (args.simulate is not None or args.record_dir))
    except ConfigError as e:
        logger.error("invalid configuration: %s", e)
        return 2

    if args.save_config:
        with open(args.save_config, "w", encoding="utf-8") as f:
            f.write(dump_config_v2(args))
        logger.info("config written to %s", args.save_config)

    cfg = cannon.config
    logger.info(
        "burst: %s particles, radius=%s, cone=%s..%s deg, explosion=%.3fs rain=%.3fs total=%.3fs",
        cfg.particle_count,
        cfg.radius,
        cfg.opening_angle_deg,
        cfg.closing_angle_deg,
        cfg.explosion_duration_sec,
        cfg.rain_duration_sec,
        cfg.total_duration_sec,
    )

    if args.simulate is not None:
        run_simulation(args, cannon)
        return 0

    from .renderer import run as run_renderer
    try:
        run_renderer(args, cannon, int(args.w), int(args.h))
    except KeyboardInterrupt:
        logger.info("[confetti_burst] Interrupted")
    return 0
