from __future__ import annotations

import math
import time

def clamp(x, a, b):
    return a if x < a else b if x > b else x

def lerp(a, b, t):
    return a + (b - a) * t

def now_sec():
    return time.perf_counter()

def deg2rad(deg):
    return deg * math.pi / 180.0

def progress(t, t0, dur):
    # 0..1 position of t inside [t0, t0+dur]; zero-length spans are complete once reached
    if t >= t0 + dur:
        return 1.0
    if dur <= 0.0:
        return 0.0
    return clamp((t - t0) / dur, 0.0, 1.0)
