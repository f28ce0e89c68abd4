# pages/12_Event_Timeline.py
import streamlit as st

from city_core.charts.plotly_chart import events_figure
from city_core.config import events_source
from city_core.loaders.events_csv import load_event_series, major_events

st.title("Time Series Dashboard")
st.caption("A dated value series; red dots mark rows that carry an event description.")


@st.cache_data(show_spinner=False)
def get_events(source: str):
    return load_event_series(source)


df = get_events(str(events_source()))
if df.empty:
    st.info("Loading data...")
    st.stop()

st.plotly_chart(events_figure(df, title="Time Series"), use_container_width=True)

ev = major_events(df)
if not ev.empty:
    with st.expander(f"Events ({len(ev)})"):
        st.dataframe(
            ev.assign(date=ev["date"].dt.date),
            hide_index=True,
            use_container_width=True,
            column_config={
                "date": st.column_config.DateColumn("Date"),
                "value": st.column_config.NumberColumn("Value", format="%.2f"),
                "event": st.column_config.TextColumn("Event"),
            },
        )
