import pandas as pd
import pytest

from city_core.analysis.selection import Selection
from city_core.charts.layout import Dimensions, build_layout
from city_core.charts.plotly_chart import events_figure, layout_figure, picked_marker, plotly_dash
from city_core.config import get_profile
from city_core.loaders.city_csv import Observation

PROFILE = get_profile("crime")
ROWS = [
    Observation(city, year, {"costOfLiving": base + k, "crimeRate": 3000.0 - 50 * k})
    for city, base in [("A", 100.0), ("B", 80.0)]
    for k, year in enumerate(range(2020, 2024))
]


def _layout(metrics=("costOfLiving", "crimeRate")):
    sel = Selection(cities=("A", "B"), metrics=metrics)
    return build_layout(ROWS, sel, PROFILE, Dimensions.for_profile(PROFILE))


def test_plotly_dash():
    assert plotly_dash("none") == "solid"
    assert plotly_dash("5,5") == "5px,5px"


def test_layout_figure_has_line_and_marker_trace_per_pair():
    lay = _layout()
    fig = layout_figure(lay)

    assert len(fig.data) == 2 * len(lay.lines)
    lines = [t for t in fig.data if t.mode == "lines"]
    markers = [t for t in fig.data if t.mode == "markers"]
    assert len(lines) == len(markers) == 4

    # dual axes
    assert {t.yaxis for t in fig.data} == {"y", "y2"}
    assert fig.layout.yaxis2.overlaying == "y"
    assert fig.layout.yaxis2.side == "right"
    assert fig.layout.yaxis.side == "left"
    assert tuple(fig.layout.yaxis.range) == pytest.approx(lay.y_scales["costOfLiving"].domain)
    assert tuple(fig.layout.xaxis.range) == (2020.0, 2023.0)
    assert fig.layout.showlegend is False


def test_layout_figure_line_samples_pass_through_data_points():
    lay = _layout(metrics=("costOfLiving",))
    fig = layout_figure(lay)
    line = fig.data[0]
    assert line.x[0] == pytest.approx(2020.0)
    assert line.y[0] == pytest.approx(100.0)
    assert line.x[-1] == pytest.approx(2023.0)
    assert line.y[-1] == pytest.approx(103.0)


def test_layout_figure_markers_have_tooltips():
    fig = layout_figure(_layout(metrics=("costOfLiving",)))
    markers = [t for t in fig.data if t.mode == "markers"]
    assert list(markers[0].y) == [100.0, 101.0, 102.0, 103.0]
    assert "A (2020)" in markers[0].hovertext[0]
    assert "Crime Rate" in markers[0].hovertext[0]


def test_layout_figure_markers_use_normal_marker_style():
    fig = layout_figure(_layout(metrics=("costOfLiving",)))
    mk = next(t for t in fig.data if t.mode == "markers").marker
    assert mk.size == 12
    assert (mk.line.color, mk.line.width) == ("#fff", 1.5)


def test_picked_marker_maps_selection_point_to_nearest_marker():
    lay = _layout(metrics=("costOfLiving",))
    # traces: lines A, B then markers A, B
    mk = picked_marker(lay, {"x": 2021.1, "y": 101.3, "curve_number": 2})
    assert (mk.city, mk.year, mk.value) == ("A", 2021, 101.0)
    mk = picked_marker(lay, {"x": 2022, "y": 82.0, "curve_number": 1})
    assert (mk.city, mk.year) == ("B", 2022)
    assert mk.tooltip.title == "B (2022)"
    assert picked_marker(lay, {"x": 2022, "y": 82.0}) is None


def test_events_figure_adds_event_markers():
    df = pd.DataFrame(
        {
            "date": pd.to_datetime(["2020-01-01", "2020-02-01", "2020-03-01"]),
            "value": [1.0, 2.0, 3.0],
            "event": ["", "Launch", ""],
        }
    )
    fig = events_figure(df)
    assert len(fig.data) == 2
    assert list(fig.data[1].text) == ["Launch"]
    assert fig.data[1].marker.color == "red"


def test_events_figure_empty_frame():
    fig = events_figure(pd.DataFrame(columns=["date", "value", "event"]))
    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "No data available"
