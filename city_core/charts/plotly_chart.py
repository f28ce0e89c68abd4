from __future__ import annotations

from typing import Dict, Mapping, Optional

import pandas as pd
import plotly.graph_objects as go

from city_core.charts.layout import ChartLayout, MarkerLayout
from city_core.charts.paths import monotone_samples
from city_core.charts.tooltip import marker_style, nearest_point, tooltip_html
from city_core.loaders.events_csv import major_events

GRID_COLOR = "#e0e0e0"


def plotly_dash(dash: str) -> str:
    """SVG dasharray ("5,5") -> Plotly dash ("5px,5px")."""
    if not dash or dash == "none":
        return "solid"
    return ",".join(f"{p.strip()}px" for p in dash.split(","))


def _axis_refs(layout: ChartLayout) -> Dict[str, str]:
    """metric -> Plotly y-axis reference ("y", "y2", ...), in axis order."""
    metric_axes = [a for a in layout.axes if a.metric is not None]
    return {a.metric: ("y" if i == 0 else f"y{i + 1}") for i, a in enumerate(metric_axes)}


def layout_figure(layout: ChartLayout) -> go.Figure:
    """
    Draw a ChartLayout with Plotly, in data coordinates.
    Lines are the densified monotone curve; hover shows the tooltip content.
    """
    refs = _axis_refs(layout)
    style = marker_style(hovered=False)
    xs = layout.x_scale
    fig = go.Figure()

    for ln in layout.lines:
        ys = layout.y_scales[ln.metric]
        samples = monotone_samples(ln.points)
        fig.add_trace(
            go.Scatter(
                x=[xs.invert(px) for px, _ in samples],
                y=[ys.invert(py) for _, py in samples],
                mode="lines",
                line=dict(color=ln.color, width=ln.stroke_width, dash=plotly_dash(ln.dash)),
                opacity=ln.opacity,
                yaxis=refs[ln.metric],
                hoverinfo="skip",
                showlegend=False,
                name=f"{ln.city} – {ln.metric}",
            )
        )

    for ln in layout.lines:
        pts = layout.markers_for(ln.city, ln.metric)
        fig.add_trace(
            go.Scatter(
                x=[m.year for m in pts],
                y=[m.value for m in pts],
                mode="markers",
                marker=dict(
                    size=style.radius * 2,
                    color=ln.color,
                    line=dict(color=style.stroke, width=style.stroke_width),
                ),
                hovertext=[tooltip_html(m.tooltip) for m in pts],
                hovertemplate="%{hovertext}<extra></extra>",
                yaxis=refs[ln.metric],
                showlegend=False,
                name=f"{ln.city} – {ln.metric}",
            )
        )

    dims = layout.dimensions
    fig.update_layout(
        title=dict(text=layout.title, x=0.5, xanchor="center"),
        height=dims.height,
        margin=dict(t=dims.margin.top, r=dims.margin.right, b=dims.margin.bottom, l=dims.margin.left),
        showlegend=False,
        hovermode="closest",
        hoverlabel=dict(bgcolor="white", bordercolor="#ddd", font=dict(family="sans-serif")),
        plot_bgcolor="white",
    )

    x_axis = next(a for a in layout.axes if a.side == "bottom")
    fig.update_xaxes(
        range=list(x_axis.domain),
        tickvals=[t.value for t in x_axis.ticks],
        ticktext=[t.label for t in x_axis.ticks],
        title_text=x_axis.label,
        showgrid=True,
        gridcolor=GRID_COLOR,
        zeroline=False,
    )

    for a in layout.axes:
        if a.metric is None:
            continue
        ref = refs[a.metric]
        spec = dict(
            range=list(a.domain),
            tickvals=[t.value for t in a.ticks],
            ticktext=[t.label for t in a.ticks],
            title=dict(text=a.label, font=dict(color=a.color)),
            tickfont=dict(color=a.color),
            side=a.side,
            zeroline=False,
        )
        if ref == "y":
            spec.update(showgrid=True, gridcolor=GRID_COLOR)
        else:
            spec.update(overlaying="y", showgrid=False)
            if ref != "y2":
                spec.update(anchor="free", autoshift=True)
        fig.update_layout({"yaxis" if ref == "y" else f"yaxis{ref[1:]}": spec})

    return fig


def picked_marker(layout: ChartLayout, point: Mapping) -> Optional[MarkerLayout]:
    """
    Marker under a Plotly selection point (keys x, y, curve_number), or None.
    Line and marker traces share the order of layout.lines, so the curve
    number gives the metric; the nearest marker of that metric in pixel
    space wins.
    """
    if not layout.lines or point.get("curve_number") is None:
        return None
    metric = layout.lines[int(point["curve_number"]) % len(layout.lines)].metric
    px = layout.x_scale(float(point["x"]))
    py = layout.y_scales[metric](float(point["y"]))
    return nearest_point([m for m in layout.markers if m.metric == metric], px, py)


def events_figure(df: pd.DataFrame, *, title: str = "Time Series") -> go.Figure:
    """Value line over time with red reference dots + labels at major events."""
    fig = go.Figure()
    if df is None or df.empty:
        fig.update_layout(title=title, annotations=[dict(text="No data available", showarrow=False)])
        return fig

    fig.add_trace(
        go.Scatter(
            x=df["date"], y=df["value"], mode="lines",
            line=dict(color="#8884d8", width=2, shape="spline"),
            name="value",
        )
    )
    ev = major_events(df)
    if not ev.empty:
        fig.add_trace(
            go.Scatter(
                x=ev["date"], y=ev["value"], mode="markers+text",
                marker=dict(size=10, color="red"),
                text=ev["event"].str.strip(),
                textposition="top center",
                textfont=dict(color="red", size=12),
                name="events",
            )
        )
    fig.update_layout(
        title=title,
        height=400,
        margin=dict(l=10, r=10, t=40, b=10),
        hovermode="x",
        showlegend=False,
        xaxis=dict(range=[df["date"].min(), df["date"].max()], griddash="dash"),
        yaxis=dict(griddash="dash"),
    )
    return fig
