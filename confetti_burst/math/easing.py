from __future__ import annotations

from dataclasses import dataclass

def linear(t):  return t

def cubic_bezier_y_for_x(x1, y1, x2, y2, x, iters=18):
    # Solve u s.t. Bx(u)=x by binary search, then return By(u).
    # Control points: (0,0), (x1,y1), (x2,y2), (1,1)
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0

    def bx(u):
        a = 1-u
        return 3*a*a*u*x1 + 3*a*u*u*x2 + u*u*u
    def by(u):
        a = 1-u
        return 3*a*a*u*y1 + 3*a*u*u*y2 + u*u*u

    lo, hi = 0.0, 1.0
    for _ in range(iters):
        mid = (lo + hi) * 0.5
        if bx(mid) < x:
            lo = mid
        else:
            hi = mid
    return by((lo + hi) * 0.5)


@dataclass(frozen=True)
class TimingCurve:
    """CSS-style cubic-bezier timing function with fixed end points."""

    x1: float
    y1: float
    x2: float
    y2: float

    def __call__(self, t: float) -> float:
        return cubic_bezier_y_for_x(self.x1, self.y1, self.x2, self.y2, t)


# fast start, soft landing at the burst endpoint
EXPLOSION_CURVE = TimingCurve(0.61, 1.0, 0.88, 1.0)
# slow start, accelerating fall
RAIN_CURVE = TimingCurve(0.12, 0.0, 0.39, 0.0)
