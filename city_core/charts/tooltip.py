from __future__ import annotations

import math
from dataclasses import dataclass
from html import escape
from typing import Optional, Sequence, Tuple

from city_core.config import MetricDef
from city_core.loaders.city_csv import Observation


@dataclass(frozen=True)
class TooltipLine:
    label: str
    color: str
    text: str


@dataclass(frozen=True)
class TooltipContent:
    title: str
    color: str
    lines: Tuple[TooltipLine, ...]

    def as_text(self) -> str:
        return "\n".join([self.title, *(f"{ln.label}: {ln.text}" for ln in self.lines)])


@dataclass(frozen=True)
class MarkerStyle:
    radius: float
    stroke: str
    stroke_width: float


NORMAL_MARKER = MarkerStyle(radius=6, stroke="#fff", stroke_width=1.5)
HOVER_MARKER = MarkerStyle(radius=9, stroke="#000", stroke_width=2)


def marker_style(hovered: bool) -> MarkerStyle:
    return HOVER_MARKER if hovered else NORMAL_MARKER


def tooltip_content(obs: Observation, city_color: str, metrics: Sequence[MetricDef]) -> TooltipContent:
    """City + year heading, then every metric of the row with one decimal."""
    lines = tuple(
        TooltipLine(label=m.label, color=m.color, text=f"{obs.value(m.key):.1f}")
        for m in metrics
        if m.key in obs.values
    )
    return TooltipContent(title=f"{obs.city} ({obs.year})", color=city_color, lines=lines)


def tooltip_html(content: TooltipContent) -> str:
    """Hover-label HTML (the subset Plotly hover labels understand: b, span, br)."""
    head = f'<b><span style="color:{content.color}">{escape(content.title)}</span></b>'
    body = [
        f'<span style="color:{ln.color}"><b>{escape(ln.label)}:</b> {escape(ln.text)}</span>'
        for ln in content.lines
    ]
    return "<br>".join([head, *body])


def nearest_point(markers: Sequence, x: float, y: float):
    """
    Marker closest to a pointer position in pixels, or None.
    Markers only need `.x` and `.y` attributes.
    """
    best: Optional[object] = None
    best_d = math.inf
    for mk in markers:
        d = math.hypot(mk.x - x, mk.y - y)
        if d < best_d:
            best, best_d = mk, d
    return best
