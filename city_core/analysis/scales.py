from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from city_core.analysis.series import CitySeries
from city_core.config import Padding
from city_core.loaders.city_csv import Observation

Domain = Tuple[float, float]

_E10, _E5, _E2 = math.sqrt(50), math.sqrt(10), math.sqrt(2)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1, i2 = round(start * inc), round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1, i2 = round(start / inc), round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = 10) -> List[float]:
    """
    Roughly `count` evenly spaced "nice" values (1, 2 or 5 x 10^k steps)
    inside [start, stop].
    """
    if count <= 0:
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []
    if inc < 0:
        ticks = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        ticks = [float((i1 + i) * inc) for i in range(i2 - i1 + 1)]
    return ticks[::-1] if reverse else ticks


@dataclass(frozen=True)
class LinearScale:
    domain: Domain
    range: Domain

    def __call__(self, v: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2.0
        return r0 + (float(v) - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, px: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return (d0 + d1) / 2.0
        return d0 + (float(px) - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> List[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)


def x_domain(observations: Iterable[Observation]) -> Optional[Domain]:
    """[min(year), max(year)] across all loaded data."""
    years = [o.year for o in observations]
    if not years:
        return None
    return float(min(years)), float(max(years))


def y_domain(values: Iterable[float], min_factor: float = 0.9, max_factor: float = 1.1) -> Optional[Domain]:
    """[max(0, min * min_factor), max * max_factor]; None for no values."""
    vals = [float(v) for v in values]
    if not vals:
        return None
    return max(0.0, min(vals) * min_factor), max(vals) * max_factor


def y_domains(
    series: Sequence[CitySeries],
    metrics: Sequence[str],
    padding: Padding = Padding(),
) -> Dict[str, Optional[Domain]]:
    """Per-metric domain over the (already filtered) series."""
    return {
        m: y_domain(
            (v for s in series for v in s.values(m)),
            min_factor=padding.min_factor,
            max_factor=padding.max_factor,
        )
        for m in metrics
    }


def x_tick_count(n_years: int) -> int:
    return n_years if n_years <= 10 else 10


def color_mapping(cities: Sequence[str], palette: Sequence[str]) -> Dict[str, str]:
    """First-seen city gets the first palette colour; the palette repeats."""
    if not palette:
        raise ValueError("palette must not be empty")
    return {c: palette[i % len(palette)] for i, c in enumerate(dict.fromkeys(cities))}


def darker(color: str, k: float = 1.0) -> str:
    """Scale RGB channels by 0.7**k (hex in, hex out)."""
    h = color.lstrip("#")
    if len(h) == 3:
        h = "".join(ch * 2 for ch in h)
    if len(h) != 6:
        raise ValueError(f"expected a hex colour, got {color!r}")
    f = 0.7 ** k
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return "#{:02x}{:02x}{:02x}".format(*(max(0, min(255, round(c * f))) for c in (r, g, b)))
