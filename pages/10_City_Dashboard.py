# pages/10_City_Dashboard.py
import streamlit as st

from city_core.analysis.selection import Selection
from city_core.analysis.series import all_cities
from city_core.charts.layout import Dimensions, build_layout
from city_core.charts.plotly_chart import layout_figure, picked_marker
from city_core.charts.svg import render_svg
from city_core.charts.tooltip import tooltip_html
from city_core.config import DEFAULT_PROFILE, PROFILES, data_source, get_profile
from city_core.loaders.city_csv import load_city_observations

st.title("Cost of Living & Crime Rates")
st.caption("Pick cities and metrics; the chart redraws on every change. Hover a point for its values.")


# load & cache
@st.cache_data(show_spinner=False)
def get_observations(source: str, profile_name: str) -> list:
    return load_city_observations(source, get_profile(profile_name))


# sidebar: profile + width
with st.sidebar:
    profile_name = st.selectbox(
        "Dataset variant",
        options=list(PROFILES),
        index=list(PROFILES).index(DEFAULT_PROFILE),
        format_func=lambda k: PROFILES[k].title,
        key="dashboard_profile",
    )
    profile = get_profile(profile_name)
    width = st.number_input("Chart width (px)", min_value=0, max_value=2400, value=profile.width, step=50)

obs = get_observations(str(data_source()), profile.name)
if not obs:
    st.info("Loading data...")
    st.stop()

cities = all_cities(obs)
state_key = f"city_selection_{profile.name}"
if state_key not in st.session_state:
    st.session_state[state_key] = Selection.initial(profile, cities)


def _toggle_city(city: str):
    st.session_state[state_key] = st.session_state[state_key].toggle_city(city)


def _toggle_metric(metric: str):
    st.session_state[state_key] = st.session_state[state_key].toggle_metric(metric)


def _legend_click(entry):
    st.session_state[state_key] = entry.apply(st.session_state[state_key])


selection: Selection = st.session_state[state_key]

# controls
left, right = st.columns([1, 1])
with left:
    st.subheader("Cities")
    cols = st.columns(min(len(cities), 4) or 1)
    for i, city in enumerate(cities):
        cols[i % len(cols)].button(
            city,
            key=f"btn_city_{profile.name}_{city}",
            type="primary" if selection.has_city(city) else "secondary",
            on_click=_toggle_city,
            args=(city,),
            use_container_width=True,
        )
with right:
    st.subheader("Metrics")
    cols = st.columns(len(profile.metrics))
    for col, m in zip(cols, profile.metrics):
        col.button(
            m.label,
            key=f"btn_metric_{profile.name}_{m.key}",
            type="primary" if selection.has_metric(m.key) else "secondary",
            on_click=_toggle_metric,
            args=(m.key,),
            use_container_width=True,
        )

layout = build_layout(obs, selection, profile, Dimensions.for_profile(profile, width=width))
if layout is None:
    st.info("Loading data...")
    st.stop()

chart_col, legend_col = st.columns([5, 1])
with chart_col:
    event = st.plotly_chart(
        layout_figure(layout),
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key=f"chart_{profile.name}",
    )
    # click a point to pin its values below the chart
    points = event.selection.points if event else []
    picked = picked_marker(layout, points[0]) if points else None
    if picked is not None:
        st.markdown(tooltip_html(picked.tooltip), unsafe_allow_html=True)

# legend: click an entry to toggle it
def _swatch_html(kind: str, color: str, dash: str) -> str:
    if kind == "city":
        return f'<div style="width:15px;height:15px;border-radius:2px;background:{color};margin-top:10px"></div>'
    style = "dashed" if dash != "none" else "solid"
    return f'<div style="width:15px;border-top:3px {style} {color};margin-top:18px"></div>'


with legend_col:
    st.markdown("**Legend**")
    metric_header = False
    for e in layout.legend:
        if e.kind == "metric" and not metric_header:
            st.markdown("**Metrics**")
            metric_header = True
        sw, btn = st.columns([1, 5])
        sw.markdown(_swatch_html(e.kind, e.color, e.dash), unsafe_allow_html=True)
        btn.button(
            e.label,
            key=f"legend_{profile.name}_{e.kind}_{e.key}",
            help=f"Click to toggle {e.label}",
            on_click=_legend_click,
            args=(e,),
        )

st.download_button(
    "Download chart (SVG)",
    data=render_svg(layout),
    file_name=f"city_metrics_{profile.name}.svg",
    mime="image/svg+xml",
)

with st.expander("Notes"):
    st.markdown(
        """
- **Violent Crime Rate** / **Crime Rate** are per 100,000 population.
- New York City is the reference city staying at 100; every other city shows its cost of living relative to NYC.
- The Y axes rescale to the selected cities; the year axis always spans the whole dataset.
- At least one city and one metric stay selected.
        """
    )
