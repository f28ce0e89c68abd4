import pytest

from city_core.analysis.scales import darker
from city_core.analysis.selection import Selection
from city_core.charts.layout import Dimensions, build_layout, drawn_metrics
from city_core.config import Margin, get_profile
from city_core.loaders.city_csv import Observation

PROFILE = get_profile("violent")
DIMS = Dimensions(width=1000, height=500, margin=Margin(top=50, right=150, bottom=50, left=80))


def _rows():
    out = []
    for city, base, crime in [("New York City", 100.0, 580.0), ("Houston", 74.0, 1040.0), ("Chicago", 78.0, 880.0)]:
        for k, year in enumerate(range(2014, 2019)):
            out.append(
                Observation(city, year, {"costOfLiving": base + k, "violentCrimeRate": crime - 10 * k})
            )
    return out


ROWS = _rows()
BOTH = Selection(cities=("New York City", "Houston"), metrics=("costOfLiving", "violentCrimeRate"))


def test_no_data_or_no_room_skips_render():
    assert build_layout([], BOTH, PROFILE, DIMS) is None
    assert build_layout(ROWS, BOTH, PROFILE, Dimensions(width=0, height=500, margin=PROFILE.margin)) is None
    assert build_layout(ROWS, BOTH, PROFILE, Dimensions(width=1000, height=90, margin=PROFILE.margin)) is None


def test_dimensions_chart_area():
    assert DIMS.chart_width == 770
    assert DIMS.chart_height == 400
    d = Dimensions.for_profile(get_profile("crime"))
    assert (d.width, d.height) == (800, 400)


def test_axes_first_metric_left_rest_right():
    lay = build_layout(ROWS, BOTH, PROFILE, DIMS)
    sides = [(a.side, a.metric) for a in lay.axes]
    assert sides == [("bottom", None), ("left", "costOfLiving"), ("right", "violentCrimeRate")]

    only_crime = build_layout(ROWS, BOTH.toggle_metric("costOfLiving"), PROFILE, DIMS)
    assert [(a.side, a.metric) for a in only_crime.axes] == [("bottom", None), ("left", "violentCrimeRate")]


def test_x_axis_spans_all_data_and_labels_years():
    lay = build_layout(ROWS, Selection(cities=("Houston",), metrics=("costOfLiving",)), PROFILE, DIMS)
    x_axis = lay.axes[0]
    assert x_axis.domain == (2014.0, 2018.0)
    assert [t.label for t in x_axis.ticks] == ["2014", "2015", "2016", "2017", "2018"]
    assert x_axis.ticks[0].position == 0.0
    assert x_axis.ticks[-1].position == pytest.approx(DIMS.chart_width)
    assert len(lay.x_grid) == 5


def test_y_domain_follows_filtered_cities():
    nyc = build_layout(ROWS, Selection(cities=("New York City",), metrics=("costOfLiving",)), PROFILE, DIMS)
    assert nyc.y_scales["costOfLiving"].domain == pytest.approx((90.0, 104 * 1.1))

    with_houston = build_layout(ROWS, BOTH, PROFILE, DIMS)
    assert with_houston.y_scales["costOfLiving"].domain == pytest.approx((74 * 0.9, 104 * 1.1))
    # metric selection does not move the domain
    cost_only = build_layout(ROWS, BOTH.toggle_metric("violentCrimeRate"), PROFILE, DIMS)
    assert cost_only.y_scales == with_houston.y_scales


def test_one_line_per_city_metric_pair_with_styles():
    lay = build_layout(ROWS, BOTH, PROFILE, DIMS)
    assert [(ln.city, ln.metric) for ln in lay.lines] == [
        ("New York City", "costOfLiving"),
        ("New York City", "violentCrimeRate"),
        ("Houston", "costOfLiving"),
        ("Houston", "violentCrimeRate"),
    ]
    nyc_color = lay.colors["New York City"]
    assert nyc_color == PROFILE.palette[0]
    assert lay.lines[0].color == nyc_color
    assert lay.lines[1].color == darker(nyc_color)
    assert lay.lines[0].dash == "none"
    assert lay.lines[1].dash == "5,5"
    assert all(ln.path.startswith("M") for ln in lay.lines)
    assert all(ln.opacity == 0.8 for ln in lay.lines)


def test_colors_are_stable_across_city_selection():
    a = build_layout(ROWS, BOTH, PROFILE, DIMS)
    b = build_layout(ROWS, Selection(cities=("Houston",), metrics=("costOfLiving",)), PROFILE, DIMS)
    assert a.colors == b.colors
    assert list(a.colors) == ["New York City", "Houston", "Chicago"]


def test_markers_carry_tooltips_and_pixel_positions():
    lay = build_layout(ROWS, BOTH, PROFILE, DIMS)
    assert len(lay.markers) == 2 * 2 * 5
    mk = lay.markers_for("Houston", "costOfLiving")[0]
    assert mk.year == 2014
    assert mk.value == 74.0
    assert mk.x == 0.0
    assert mk.y == pytest.approx(lay.y_scales["costOfLiving"](74.0))
    assert mk.tooltip.title == "Houston (2014)"
    assert len(mk.tooltip.lines) == 2


def test_legend_entries_and_click_actions():
    lay = build_layout(ROWS, BOTH, PROFILE, DIMS)
    assert [(e.kind, e.key) for e in lay.legend] == [
        ("city", "New York City"),
        ("city", "Houston"),
        ("metric", "costOfLiving"),
        ("metric", "violentCrimeRate"),
    ]
    assert [e.y for e in lay.legend] == [0.0, 30.0, 90.0, 120.0]

    houston = lay.legend[1]
    assert houston.apply(BOTH).cities == ("New York City",)
    crime = lay.legend[3]
    assert crime.apply(BOTH).metrics == ("costOfLiving",)


def test_unknown_cities_render_no_lines_and_no_y_axis():
    lay = build_layout(ROWS, Selection(cities=("Atlantis",), metrics=("costOfLiving",)), PROFILE, DIMS)
    assert lay is not None
    assert lay.lines == ()
    assert [a.side for a in lay.axes] == ["bottom"]
    assert lay.y_grid == ()


def test_unknown_metric_raises():
    with pytest.raises(ValueError):
        drawn_metrics(Selection(cities=("Houston",), metrics=("crimeRate",)), PROFILE)


def test_legend_skips_selected_cities_without_data():
    sel = Selection(cities=("Atlantis", "Houston"), metrics=("costOfLiving",))
    lay = build_layout(ROWS, sel, PROFILE, DIMS)
    assert [(e.kind, e.key) for e in lay.legend] == [("city", "Houston"), ("metric", "costOfLiving")]
    assert [e.y for e in lay.legend] == [0.0, 60.0]

    only_unknown = build_layout(ROWS, Selection(cities=("Atlantis",), metrics=("costOfLiving",)), PROFILE, DIMS)
    assert [e.kind for e in only_unknown.legend] == ["metric"]
