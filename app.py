# app.py
import logging
from pathlib import Path

import streamlit as st

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

st.set_page_config(page_title="City Metrics – Cost of Living & Crime", page_icon="📈", layout="wide")

pages: dict[str, list] = {}

# Helper to add pages
def add(section: str, path: str, title: str, icon: str):
    if Path(path).exists():
        pages.setdefault(section, []).append(st.Page(path, title=title, icon=icon))


# Overview
add("Overview", "pages/01_Home.py", "Home", ":material/home:")
add("Overview", "pages/99_About.py", "About", ":material/info:")


# Charts
add("Charts", "pages/10_City_Dashboard.py", "City Dashboard", ":material/multiline_chart:")
add("Charts", "pages/11_Cost_of_Living_Trends.py", "Cost of Living Trends", ":material/show_chart:")
add("Charts", "pages/12_Event_Timeline.py", "Event Timeline", ":material/timeline:")


pg = st.navigation(pages, position="sidebar", expanded=True)
pg.run()
