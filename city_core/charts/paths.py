from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]


def _sign(x: float) -> float:
    return -1.0 if x < 0 else 1.0


def monotone_tangents(xs: Sequence[float], ys: Sequence[float]) -> np.ndarray:
    """
    Steffen-style tangents for a cubic that is monotone in x between points
    (the "monotoneX" curve). xs must be ascending.
    scipy's PchipInterpolator uses Fritsch-Carlson tangents and another end
    rule, so its curve and its Bezier control points would not match these.
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    n = len(x)
    if n != len(y):
        raise ValueError("xs and ys must have the same length")
    t = np.zeros(n, dtype=float)
    if n < 2:
        return t

    h = np.diff(x)
    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(h != 0, np.diff(y) / h, 0.0)

    if n == 2:
        t[:] = s[0]
        return t

    for i in range(1, n - 1):
        h0, h1 = h[i - 1], h[i]
        s0, s1 = s[i - 1], s[i]
        p = (s0 * h1 + s1 * h0) / (h0 + h1) if (h0 + h1) else 0.0
        t[i] = (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))

    # end points: one-sided, matching the neighbour's tangent
    t[0] = (3 * s[0] - t[1]) / 2 if h[0] else t[1]
    t[-1] = (3 * s[-1] - t[-2]) / 2 if h[-1] else t[-2]
    return t


def _segments(points: Sequence[Point]):
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    t = monotone_tangents(xs, ys)
    for i in range(len(points) - 1):
        x0, y0, x1, y1 = xs[i], ys[i], xs[i + 1], ys[i + 1]
        dx = (x1 - x0) / 3.0
        yield (x0, y0), (x0 + dx, y0 + dx * t[i]), (x1 - dx, y1 - dx * t[i + 1]), (x1, y1)


def _fmt(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def monotone_path(points: Sequence[Point]) -> str:
    """SVG path data for a monotone cubic through points (ascending x)."""
    if not points:
        return ""
    x0, y0 = points[0]
    d = f"M{_fmt(x0)},{_fmt(y0)}"
    if len(points) == 2:
        x1, y1 = points[1]
        return d + f"L{_fmt(x1)},{_fmt(y1)}"
    for _, c1, c2, end in _segments(points):
        d += "C" + ",".join(_fmt(v) for v in (*c1, *c2, *end))
    return d


def monotone_samples(points: Sequence[Point], per_segment: int = 12) -> List[Point]:
    """
    Densified polyline along the same curve, for drawing libraries that only
    draw straight segments or generic splines.
    """
    if len(points) < 3:
        return [(float(x), float(y)) for x, y in points]
    u = np.linspace(0.0, 1.0, max(2, int(per_segment)) + 1)
    out: List[Point] = [(float(points[0][0]), float(points[0][1]))]
    for p0, p1, p2, p3 in _segments(points):
        w0, w1, w2, w3 = (1 - u) ** 3, 3 * (1 - u) ** 2 * u, 3 * (1 - u) * u ** 2, u ** 3
        bx = w0 * p0[0] + w1 * p1[0] + w2 * p2[0] + w3 * p3[0]
        by = w0 * p0[1] + w1 * p1[1] + w2 * p2[1] + w3 * p3[1]
        out.extend(zip(bx[1:].tolist(), by[1:].tolist()))
    return out
