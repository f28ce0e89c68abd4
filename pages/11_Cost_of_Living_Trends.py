# pages/11_Cost_of_Living_Trends.py
from dataclasses import replace

import streamlit as st

from city_core.analysis.selection import Selection
from city_core.analysis.series import all_cities
from city_core.charts.layout import Dimensions, build_layout
from city_core.charts.plotly_chart import layout_figure
from city_core.config import COST_OF_LIVING, Padding, data_source, get_profile
from city_core.loaders.city_csv import load_city_observations

st.title("The Cost of Living Alongside Crime Rates")
st.caption("Cost of living per city over time, every city at once. Y axis starts at zero.")

# single-metric variant of the crime profile: y in [0, max * 1.1]
profile = replace(
    get_profile("crime"),
    metrics=(COST_OF_LIVING,),
    default_metrics=(COST_OF_LIVING.key,),
    padding=Padding(min_factor=0.0, max_factor=1.1),
)


@st.cache_data(show_spinner=False)
def get_observations(source: str) -> list:
    return load_city_observations(source, get_profile("crime"))


obs = get_observations(str(data_source()))
if not obs:
    st.info("Loading data...")
    st.stop()

cities = all_cities(obs)
selection = Selection(cities=tuple(cities), metrics=(COST_OF_LIVING.key,))
layout = build_layout(obs, selection, profile, Dimensions.for_profile(profile))
if layout is None:
    st.info("Loading data...")
    st.stop()

fig = layout_figure(layout)
st.plotly_chart(fig, use_container_width=True)

st.markdown(" · ".join(f'<span style="color:{layout.colors[c]}">■</span> {c}' for c in cities), unsafe_allow_html=True)
