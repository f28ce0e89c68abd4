"""
Pure chart layout: everything the drawing adapters need, in pixel space,
with no dependency on a drawing library.

Coordinates of grid lines, axes, lines and markers are relative to the plot
area (origin at the top-left corner inside the margins). Legend positions
are relative to the legend origin, right of the plot area.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from city_core.analysis.scales import (
    Domain,
    LinearScale,
    color_mapping,
    darker,
    x_domain,
    x_tick_count,
    y_domains,
)
from city_core.analysis.selection import Selection
from city_core.analysis.series import CitySeries, all_cities, filter_series
from city_core.charts.paths import Point, monotone_path
from city_core.charts.tooltip import TooltipContent, tooltip_content
from city_core.config import DashboardProfile, Margin
from city_core.loaders.city_csv import Observation

logger = logging.getLogger(__name__)

Y_TICKS = 5
LINE_OPACITY = 0.8
LEGEND_ROW = 30
LEGEND_GAP = 20


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float
    margin: Margin = field(default_factory=Margin)

    @property
    def chart_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def chart_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    @classmethod
    def for_profile(cls, profile: DashboardProfile, width: Optional[float] = None) -> "Dimensions":
        return cls(width=profile.width if width is None else width, height=profile.height, margin=profile.margin)


@dataclass(frozen=True)
class GridLine:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    side: str  # "bottom" | "left" | "right"
    label: str
    color: str
    ticks: Tuple[Tick, ...]
    domain: Domain
    metric: Optional[str] = None


@dataclass(frozen=True)
class LineLayout:
    city: str
    metric: str
    color: str
    dash: str
    stroke_width: float
    opacity: float
    points: Tuple[Point, ...]
    path: str


@dataclass(frozen=True)
class MarkerLayout:
    city: str
    metric: str
    year: int
    value: float
    x: float
    y: float
    fill: str
    tooltip: TooltipContent


@dataclass(frozen=True)
class LegendEntry:
    kind: str  # "city" | "metric"
    key: str
    label: str
    color: str
    x: float
    y: float
    dash: str = "none"

    def apply(self, selection: Selection) -> Selection:
        """The selection after clicking this entry."""
        if self.kind == "city":
            return selection.toggle_city(self.key)
        return selection.toggle_metric(self.key)


@dataclass(frozen=True)
class ChartLayout:
    title: str
    dimensions: Dimensions
    selection: Selection
    x_scale: LinearScale
    y_scales: Dict[str, LinearScale]
    x_grid: Tuple[GridLine, ...]
    y_grid: Tuple[GridLine, ...]
    axes: Tuple[Axis, ...]
    lines: Tuple[LineLayout, ...]
    markers: Tuple[MarkerLayout, ...]
    legend: Tuple[LegendEntry, ...]
    colors: Dict[str, str]

    def markers_for(self, city: str, metric: str) -> List[MarkerLayout]:
        return [m for m in self.markers if m.city == city and m.metric == metric]

    def axis_for(self, metric: str) -> Optional[Axis]:
        for a in self.axes:
            if a.metric == metric:
                return a
        return None


def _num_label(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else f"{v:g}"


def drawn_metrics(selection: Selection, profile: DashboardProfile) -> List[str]:
    """Selected metrics in profile order; unknown keys raise ValueError."""
    for m in selection.metrics:
        profile.metric(m)
    return [k for k in profile.metric_keys if selection.has_metric(k)]


def _line_color(city_color: str, metric: str, profile: DashboardProfile) -> str:
    return city_color if metric == profile.primary_metric else darker(city_color)


def build_layout(
    observations: Sequence[Observation],
    selection: Selection,
    profile: DashboardProfile,
    dimensions: Dimensions,
) -> Optional[ChartLayout]:
    """
    Compute scales, grid, axes, lines, markers and legend for one render.
    Returns None when there is nothing to draw yet (no data, no room).
    """
    if not observations:
        logger.debug("No data yet; skipping render")
        return None
    if dimensions.chart_width <= 0 or dimensions.chart_height <= 0:
        logger.debug("Chart area %sx%s is empty; skipping render", dimensions.chart_width, dimensions.chart_height)
        return None

    metrics = drawn_metrics(selection, profile)
    cw, ch = dimensions.chart_width, dimensions.chart_height

    xd = x_domain(observations)
    x_scale = LinearScale(xd, (0.0, cw))
    n_years = len({o.year for o in observations})
    x_ticks = x_scale.ticks(x_tick_count(n_years))

    series: List[CitySeries] = filter_series(observations, selection)
    domains = y_domains(series, profile.metric_keys, profile.padding)
    y_scales = {m: LinearScale(d, (ch, 0.0)) for m, d in domains.items() if d is not None}
    colors = color_mapping(all_cities(observations), profile.palette)

    x_grid = tuple(GridLine(x_scale(t), 0.0, x_scale(t), ch) for t in x_ticks)
    shown = [m for m in metrics if m in y_scales]
    y_grid: Tuple[GridLine, ...] = ()
    if shown:
        ys = y_scales[shown[0]]
        y_grid = tuple(GridLine(0.0, ys(t), cw, ys(t)) for t in ys.ticks(Y_TICKS))

    axes: List[Axis] = [
        Axis(
            side="bottom",
            label="Year",
            color="#000",
            ticks=tuple(Tick(t, x_scale(t), _num_label(t)) for t in x_ticks),
            domain=xd,
        )
    ]
    for i, m in enumerate(shown):
        md = profile.metric(m)
        ys = y_scales[m]
        axes.append(
            Axis(
                side="left" if i == 0 else "right",
                label=md.axis_label,
                color=md.color,
                ticks=tuple(Tick(t, ys(t), _num_label(t)) for t in ys.ticks(Y_TICKS)),
                domain=ys.domain,
                metric=m,
            )
        )

    lines: List[LineLayout] = []
    markers: List[MarkerLayout] = []
    for s in series:
        city_color = colors.get(s.city, profile.palette[0])
        for m in shown:
            md = profile.metric(m)
            ys = y_scales[m]
            color = _line_color(city_color, m, profile)
            pts = tuple((x_scale(o.year), ys(o.value(m))) for o in s.observations)
            lines.append(
                LineLayout(
                    city=s.city,
                    metric=m,
                    color=color,
                    dash=md.dash,
                    stroke_width=md.stroke_width,
                    opacity=LINE_OPACITY,
                    points=pts,
                    path=monotone_path(pts),
                )
            )
            for o, (px, py) in zip(s.observations, pts):
                markers.append(
                    MarkerLayout(
                        city=s.city,
                        metric=m,
                        year=o.year,
                        value=o.value(m),
                        x=px,
                        y=py,
                        fill=color,
                        tooltip=tooltip_content(o, city_color, profile.metrics),
                    )
                )

    # only cities with data get a legend row
    legend: List[LegendEntry] = [
        LegendEntry("city", s.city, s.city, colors.get(s.city, profile.palette[0]), 0.0, float(i * LEGEND_ROW))
        for i, s in enumerate(series)
    ]
    metric_top = len(series) * LEGEND_ROW + LEGEND_GAP
    for j, m in enumerate(metrics):
        md = profile.metric(m)
        legend.append(LegendEntry("metric", m, md.label, md.color, 0.0, float(metric_top + 10 + j * LEGEND_ROW), md.dash))

    return ChartLayout(
        title=profile.title,
        dimensions=dimensions,
        selection=selection,
        x_scale=x_scale,
        y_scales=y_scales,
        x_grid=x_grid,
        y_grid=y_grid,
        axes=tuple(axes),
        lines=tuple(lines),
        markers=tuple(markers),
        legend=tuple(legend),
        colors=colors,
    )
