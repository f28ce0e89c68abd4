# pages/99_About.py
import streamlit as st

st.title("About this app")

st.markdown(
    """
This app charts **cost of living** and **crime rates** per city over time.
The data is a plain CSV file served alongside the app; every chart is recomputed from it on each interaction.
"""
)

st.divider()

st.subheader("Quick links")
st.page_link("pages/01_Home.py", label="Home", icon=":material/home:")
st.page_link("pages/10_City_Dashboard.py", label="City Dashboard", icon=":material/multiline_chart:")
st.page_link("pages/11_Cost_of_Living_Trends.py", label="Cost of Living Trends", icon=":material/show_chart:")
st.page_link("pages/12_Event_Timeline.py", label="Event Timeline", icon=":material/timeline:")

st.divider()

st.subheader("Data sources")
st.markdown(
    """
- **City metrics**: `data/data.csv` (override with `CITY_DATA_CSV` under Settings → Secrets; a URL works too).
- **Event timeline**: `data/events.csv` (override with `EVENTS_CSV`).
- Cost of living is an index with **New York City = 100**. Crime rates are per 100,000 population.
- Axes: the first selected metric (in the order the metric buttons are listed) gets the left Y axis, the others the right. With cost of living hidden, the crime rate axis therefore moves to the left.

> Tip: If a view looks stale after replacing the CSV, clear the cache and use **Rerun** (⌘/Ctrl-R).
"""
)

st.caption("Built with Streamlit + Plotly.")
