# Streamlit dashboard for covid-19

'''
  Live snapshot of the pandemic from the disease.sh API.

  Views:
  - Headline totals (cases, deaths, recovered, active)
  - World map coloured by confirmed cases (log scale)
  - Top 10 countries by confirmed cases, as a table and a bar chart
  - Active / Recovered / Deaths split of the global totals

  Every run fetches fresh data; the sidebar button reruns the page.
  Run with:  streamlit run app.py
'''
import logging

import streamlit as st

from config import PAGE_TITLE, TOP_COUNTRIES
from dashboard import Dashboard, DashboardState, Surfaces

logging.basicConfig(
  level=logging.INFO,
  format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title=PAGE_TITLE, layout="wide")


def build_layout() -> Surfaces:
  st.title(PAGE_TITLE)
  metrics = st.container()
  st.divider()

  st.subheader("Confirmed cases by country")
  world_map = st.container()

  st.subheader(f"Top {TOP_COUNTRIES} countries")
  table = st.empty()

  col_bar, col_pie = st.columns(2)
  col_bar.subheader("Cases by country")
  col_pie.subheader("Global case status")
  bar_chart = col_bar.container()
  pie_chart = col_pie.container()

  return Surfaces(
    metrics=metrics,
    world_map=world_map,
    table=table,
    bar_chart=bar_chart,
    pie_chart=pie_chart,
    timestamp=st.container(),
  )


st.sidebar.title("Covid-19 Pandemic")
st.sidebar.caption("Data: disease.sh · Map: D3 graph gallery world.geojson")
# any widget interaction reruns the script, which refetches everything
st.sidebar.button("Refresh data", help="Fetch the latest statistics.")

with st.spinner("Loading COVID-19 data..."):
  dashboard = Dashboard(build_layout(), notify=st.error)
  state = dashboard.run()

if state is DashboardState.FAILED:
  st.stop()
