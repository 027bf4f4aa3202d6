from __future__ import annotations

import json
from typing import Any, Dict, List

from .errors import ConfigError
from .utils.colors import DEFAULT_COLORS, to_hex


def _strip_jsonc_comments(src: str) -> str:
    # Removes //, # and /* */ comments while preserving string literals.
    out: List[str] = []
    i = 0
    n = len(src)
    quote = ""
    escape = False

    while i < n:
        ch = src[i]
        nxt = src[i + 1] if i + 1 < n else ""

        if quote:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                quote = ""
            i += 1
            continue

        if ch in ("\"", "'"):
            quote = ch
            out.append(ch)
            i += 1
            continue

        if ch == "#" or (ch == "/" and nxt == "/"):
            j = src.find("\n", i)
            i = n if j < 0 else j
            continue

        if ch == "/" and nxt == "*":
            j = src.find("*/", i + 2)
            i = n if j < 0 else j + 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def load_config_v2(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    return parse_config_v2(raw)


def parse_config_v2(raw: str) -> Dict[str, Any]:
    raw = raw.lstrip("\ufeff")
    try:
        data = json.loads(_strip_jsonc_comments(raw))
    except json.JSONDecodeError as e:
        raise ConfigError(f"config is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be an object")
    return data


def _get_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    v = cfg.get(key)
    return v if isinstance(v, dict) else {}


# (flat key, section, key inside the section)
_CONFIG_KEYS = (
    ("w", "window", "w"),
    ("h", "window", "h"),
    ("fps", "window", "fps"),
    ("bg_color", "window", "bg_color"),

    ("particle_count", "confetti", "particle_count"),
    ("emojis", "confetti", "emojis"),
    ("include_default_shapes", "confetti", "include_default_shapes"),
    ("colors", "confetti", "colors"),
    ("particle_size", "confetti", "particle_size"),
    ("rain_height", "confetti", "rain_height"),
    ("fades_out", "confetti", "fades_out"),
    ("max_opacity", "confetti", "max_opacity"),
    ("opening_angle", "confetti", "opening_angle"),
    ("closing_angle", "confetti", "closing_angle"),
    ("radius", "confetti", "radius"),
    ("repetitions", "confetti", "repetitions"),
    ("repetition_interval", "confetti", "repetition_interval"),

    ("origin_x", "trigger", "origin_x"),
    ("origin_y", "trigger", "origin_y"),
    ("fire_count", "trigger", "fire_count"),
    ("fire_every", "trigger", "fire_every"),
    ("seed", "trigger", "seed"),

    ("record_dir", "record", "record_dir"),
    ("record_fps", "record", "record_fps"),
    ("record_seconds", "record", "record_seconds"),

    ("basic_debug", "debug", "basic_debug"),
    ("debug_bursts", "debug", "debug_bursts"),
)


def flatten_config_v2(cfg: Dict[str, Any]) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for dst_key, section, section_key in _CONFIG_KEYS:
        sec = _get_section(cfg, section)
        if section_key in sec:
            flat[dst_key] = sec.get(section_key)
    return flat


def confetti_options_from_args(args: Any) -> Dict[str, Any]:
    """Keyword arguments for ``BurstConfig.from_options`` from parsed CLI args."""
    opts: Dict[str, Any] = {
        "particle_count": getattr(args, "particle_count", 20),
        "emojis": tuple(getattr(args, "emojis", None) or ()),
        "include_default_shapes": bool(getattr(args, "include_default_shapes", False)),
        "colors": getattr(args, "colors", None) or None,
        "particle_size": getattr(args, "particle_size", 10.0),
        "rain_height": getattr(args, "rain_height", 600.0),
        "fades_out": bool(getattr(args, "fades_out", True)),
        "max_opacity": getattr(args, "max_opacity", 1.0),
        "opening_angle_deg": getattr(args, "opening_angle", 60.0),
        "closing_angle_deg": getattr(args, "closing_angle", 120.0),
        "radius": getattr(args, "radius", 300.0),
        "repetitions": getattr(args, "repetitions", 0),
        "repetition_interval_sec": getattr(args, "repetition_interval", 1.0),
    }
    return opts


def dump_config_v2(args: Any) -> str:
    colors = getattr(args, "colors", None)
    cfg: Dict[str, Any] = {
        "version": 2,
        "window": {
            "w": int(getattr(args, "w", 800)),
            "h": int(getattr(args, "h", 800)),
            "fps": float(getattr(args, "fps", 60.0)),
            "bg_color": getattr(args, "bg_color", "#101018"),
        },
        "confetti": {
            "particle_count": int(getattr(args, "particle_count", 20)),
            "emojis": list(getattr(args, "emojis", None) or []),
            "include_default_shapes": bool(getattr(args, "include_default_shapes", False)),
            "colors": list(colors) if colors else [to_hex(c) for c in DEFAULT_COLORS],
            "particle_size": float(getattr(args, "particle_size", 10.0)),
            "rain_height": float(getattr(args, "rain_height", 600.0)),
            "fades_out": bool(getattr(args, "fades_out", True)),
            "max_opacity": float(getattr(args, "max_opacity", 1.0)),
            "opening_angle": float(getattr(args, "opening_angle", 60.0)),
            "closing_angle": float(getattr(args, "closing_angle", 120.0)),
            "radius": float(getattr(args, "radius", 300.0)),
            "repetitions": int(getattr(args, "repetitions", 0)),
            "repetition_interval": float(getattr(args, "repetition_interval", 1.0)),
        },
        "trigger": {
            "origin_x": float(getattr(args, "origin_x", 0.5)),
            "origin_y": float(getattr(args, "origin_y", 0.75)),
            "fire_count": int(getattr(args, "fire_count", 1)),
            "fire_every": float(getattr(args, "fire_every", 1.5)),
            "seed": getattr(args, "seed", None),
        },
        "record": {
            "record_dir": getattr(args, "record_dir", None),
            "record_fps": float(getattr(args, "record_fps", 60.0)),
            "record_seconds": getattr(args, "record_seconds", None),
        },
        "debug": {
            "basic_debug": bool(getattr(args, "basic_debug", False)),
            "debug_bursts": bool(getattr(args, "debug_bursts", False)),
        },
    }

    header_lines = [
        "// confetti_burst config v2 (JSON with comments)",
        "//",
        "// Basic usage:",
        "//   python3 -m confetti_burst --config <this_file>",
        "//   python3 -m confetti_burst --save_config config.jsonc",
        "//",
        "// Notes:",
        "// - Lines starting with // or # are comments.",
        "// - CLI args override config values.",
        "// - colors accept \"#rrggbb\", preset names or [r, g, b].",
        "",
    ]
    header = "\n".join(header_lines)
    body = json.dumps(cfg, ensure_ascii=False, indent=2)
    return header + body + "\n"
