from __future__ import annotations

from html import escape
from typing import List

from city_core.charts.layout import ChartLayout
from city_core.charts.tooltip import marker_style

_HOVER = marker_style(hovered=True)
_NORMAL = marker_style(hovered=False)

_STYLE = f"""
.marker {{ cursor: pointer; }}
.marker:hover {{ r: {_HOVER.radius}px; stroke: {_HOVER.stroke}; stroke-width: {_HOVER.stroke_width}; }}
text {{ font-family: sans-serif; }}
"""


def _n(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def _css_class(s: str) -> str:
    return s.replace(" ", "_").replace("-", "_")


def render_svg(layout: ChartLayout) -> str:
    """Standalone SVG document for a ChartLayout (grid, axes, lines, markers, legend)."""
    d = layout.dimensions
    m = d.margin
    cw, ch = d.chart_width, d.chart_height
    out: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_n(d.width)}" height="{_n(d.height)}" '
        f'viewBox="0 0 {_n(d.width)} {_n(d.height)}" preserveAspectRatio="xMidYMid meet">',
        f"<style>{_STYLE}</style>",
        f'<g transform="translate({m.left}, {m.top})">',
        f'<rect width="{_n(cw)}" height="{_n(ch)}" fill="none" pointer-events="all"/>',
    ]

    out.append('<g class="grid-lines">')
    for g in (*layout.x_grid, *layout.y_grid):
        out.append(
            f'<line x1="{_n(g.x1)}" y1="{_n(g.y1)}" x2="{_n(g.x2)}" y2="{_n(g.y2)}" stroke="#e0e0e0" stroke-width="1"/>'
        )
    out.append("</g>")

    for a in layout.axes:
        if a.side == "bottom":
            out.append(f'<g class="x-axis" transform="translate(0, {_n(ch)})">')
            out.append(f'<line x1="0" y1="0" x2="{_n(cw)}" y2="0" stroke="#000"/>')
            for t in a.ticks:
                out.append(
                    f'<line x1="{_n(t.position)}" y1="0" x2="{_n(t.position)}" y2="6" stroke="#000"/>'
                    f'<text x="{_n(t.position)}" y="20" text-anchor="middle" font-size="12px">{escape(t.label)}</text>'
                )
            out.append("</g>")
            out.append(
                f'<text class="x-axis-label" text-anchor="middle" x="{_n(cw / 2)}" y="{_n(ch + 40)}" '
                f'font-size="14px">{escape(a.label)}</text>'
            )
            continue

        left = a.side == "left"
        x0 = 0.0 if left else cw
        tick = -6 if left else 6
        anchor = "end" if left else "start"
        out.append(f'<g class="y-axis-{_css_class(a.metric or "")}" transform="translate({_n(x0)}, 0)">')
        out.append(f'<line x1="0" y1="0" x2="0" y2="{_n(ch)}" stroke="#000"/>')
        for t in a.ticks:
            out.append(
                f'<line x1="0" y1="{_n(t.position)}" x2="{tick}" y2="{_n(t.position)}" stroke="#000"/>'
                f'<text x="{tick * 1.5}" y="{_n(t.position)}" dy="0.32em" text-anchor="{anchor}" '
                f'font-size="12px" fill="{a.color}">{escape(t.label)}</text>'
            )
        out.append("</g>")
        if left:
            out.append(
                f'<text transform="rotate(-90)" y="-60" x="{_n(-ch / 2)}" dy="1em" text-anchor="middle" '
                f'fill="{a.color}" font-weight="bold" font-size="14px">{escape(a.label)}</text>'
            )
        else:
            out.append(
                f'<text transform="rotate(90)" y="{_n(-cw - 60)}" x="{_n(ch / 2)}" dy="1em" text-anchor="middle" '
                f'fill="{a.color}" font-weight="bold" font-size="14px">{escape(a.label)}</text>'
            )

    for city in layout.selection.cities:
        city_lines = [ln for ln in layout.lines if ln.city == city]
        if not city_lines:
            continue
        out.append(f'<g class="city-{escape(_css_class(city))}">')
        for ln in city_lines:
            out.append(
                f'<path d="{ln.path}" fill="none" stroke="{ln.color}" stroke-width="{_n(ln.stroke_width)}" '
                f'stroke-dasharray="{ln.dash}" opacity="{ln.opacity}"/>'
            )
            for mk in layout.markers_for(ln.city, ln.metric):
                out.append(
                    f'<circle class="marker dot-{escape(_css_class(city))}-{ln.metric}" cx="{_n(mk.x)}" cy="{_n(mk.y)}" '
                    f'r="{_NORMAL.radius}" fill="{mk.fill}" stroke="{_NORMAL.stroke}" '
                    f'stroke-width="{_NORMAL.stroke_width}"><title>{escape(mk.tooltip.as_text())}</title></circle>'
                )
        out.append("</g>")
    out.append("</g>")

    out.append(
        f'<text x="{_n(d.width / 2)}" y="20" text-anchor="middle" font-size="18px" font-weight="bold">'
        f"{escape(layout.title)}</text>"
    )

    out.append(f'<g class="legend" transform="translate({_n(d.width - m.right + 20)}, {m.top})">')
    out.append('<text x="0" y="-20" font-size="14px" font-weight="bold">Legend</text>')
    metric_header = False
    for e in layout.legend:
        if e.kind == "city":
            out.append(
                f'<g transform="translate({_n(e.x)}, {_n(e.y)})">'
                f'<rect width="15" height="15" rx="2" ry="2" fill="{e.color}"/>'
                f'<text x="25" y="12" font-size="13px">{escape(e.label)}</text></g>'
            )
            continue
        if not metric_header:
            out.append(
                f'<text x="0" y="{_n(e.y - 20)}" font-size="13px" font-weight="bold">Metrics</text>'
            )
            metric_header = True
        out.append(
            f'<g transform="translate({_n(e.x)}, {_n(e.y)})">'
            f'<line x1="0" y1="0" x2="15" y2="0" stroke="{e.color}" stroke-width="3" stroke-dasharray="{e.dash}"/>'
            f'<text x="25" y="5" font-size="13px">{escape(e.label)}</text></g>'
        )
    out.append("</g>")
    out.append("</svg>")
    return "\n".join(out)
