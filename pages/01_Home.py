# pages/01_Home.py
import os
import streamlit as st


st.title("City Metrics Dashboard")
st.caption("Cost of living and crime rates per city, year by year, from a CSV file.")


# Primary CTA
st.divider()
st.page_link(
    "pages/10_City_Dashboard.py",
    label="Open the City Dashboard (recommended first step)",
    icon=":material/multiline_chart:",
)
st.divider()

# small helpers for robust links
def safe_link(path, label, icon=""):
    if os.path.exists(path):
        st.page_link(path, label=label, icon=icon)


st.markdown(
    """
### What this app helps you do
- **Compare** cost of living and (violent) crime rates across cities on one chart with two Y axes.
- **Toggle** cities and metrics; at least one of each always stays selected.
- **Hover** any point to see the city, year and every metric for that year.
- **Export** the current chart as a standalone SVG.
"""
)

st.subheader("📈 Charts")
safe_link("pages/10_City_Dashboard.py", "City Dashboard - cost of living & crime", icon=":material/multiline_chart:")
safe_link("pages/11_Cost_of_Living_Trends.py", "Cost of Living Trends - all cities", icon=":material/show_chart:")
safe_link("pages/12_Event_Timeline.py", "Event Timeline - dated series with events", icon=":material/timeline:")

st.divider()
safe_link("pages/99_About.py", "About", icon=":material/info:")

st.markdown(
    """
### Data & assumptions
- **Input:** `data/data.csv` with columns `City`, `Year` and the metric columns (`Cost of Living`, `Crime Rate`, `Violent Crime Rate`).
- **Bad rows:** rows with a missing/invalid year or a non-numeric metric are skipped (see the app log).
- **Scales:** the year axis spans the whole file; each metric's Y axis spans the selected cities (min × 0.9 … max × 1.1, never below 0).
"""
)
