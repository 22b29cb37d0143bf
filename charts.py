'''
The four dashboard views: choropleth map, top-10 table, bar chart, pie chart.

Each view has a pure builder (`build_*`) returning a pydeck / Altair /
pandas object, and a `render_*` function that draws the result onto a
Streamlit surface (the `st` module, a column, or a placeholder).
'''
import copy
import math
from datetime import datetime
from typing import List, Sequence

import altair as alt
import numpy as np
import pandas as pd
import pydeck as pdk

from config import (
  ACTIVE_COLOR,
  BAR_COLOR,
  BAR_TICKS,
  CASE_BREAKS,
  CASE_PALETTE,
  CHART_HEIGHT,
  DEATHS_COLOR,
  MAP_HEIGHT,
  NO_DATA_COLOR,
  RECOVERED_COLOR,
  STROKE_COLOR,
  TOP_COUNTRIES,
)
from formatting import format_number
from models import CountryRecord, GlobalSummary, ParseError, records_frame
from ranking import match, top_n

NO_DATA = "No data"
PIE_RADIUS = CHART_HEIGHT / 2 - 40
TABLE_COLUMNS = ['Rank', 'Country', 'Cases', 'Deaths', 'Recovered', 'Active']


def hex_to_rgb(color: str) -> List[int]:
  color = color.lstrip('#')
  return [int(color[i:i + 2], 16) for i in (0, 2, 4)]


_LOG_BREAKS = np.log10(np.array(CASE_BREAKS, dtype=float))
_PALETTE_RGB = np.array([hex_to_rgb(c) for c in CASE_PALETTE], dtype=float)


def case_color(cases) -> List[int]:
  '''
  RGB fill for a case count on the log scale 1 / 1e3 / 1e5 / 1e7.

  Interpolation is linear in log10 space between neighbouring break-points;
  anything outside [1, 1e7] is clamped to the end colors.
  '''
  value = np.log10(max(float(cases), 1.0))
  return [int(round(np.interp(value, _LOG_BREAKS, _PALETTE_RGB[:, i]))) for i in range(3)]


# ---------------------------------------------------------------- map

def build_map_geojson(geojson: dict, records: Sequence[CountryRecord]) -> dict:
  data = copy.deepcopy(geojson)
  no_data_rgb = hex_to_rgb(NO_DATA_COLOR)

  for feature in data['features']:
    if not isinstance(feature, dict):
      raise ParseError(f"map feature is not an object: {feature!r}")
    properties = feature.get('properties') or {}
    if not isinstance(properties, dict):
      raise ParseError(f"map feature properties are not an object: {properties!r}")
    feature['properties'] = properties
    info = match(properties.get('name'), records)
    if info is None:
      properties['fill_color'] = no_data_rgb
      properties['cases_label'] = NO_DATA
      properties['deaths_label'] = NO_DATA
      continue

    properties['fill_color'] = case_color(info.cases)
    properties['cases_label'] = format_number(info.cases)
    properties['deaths_label'] = format_number(info.deaths)

  return data


def build_world_map(geojson: dict, records: Sequence[CountryRecord]) -> pdk.Deck:
  cases_layer = pdk.Layer(
    "GeoJsonLayer",
    data=build_map_geojson(geojson, records),
    pickable=True,
    stroked=True,
    get_line_color=STROKE_COLOR,
    line_width_min_pixels=0.5,
    get_fill_color='properties.fill_color',
    auto_highlight=True,
  )
  return pdk.Deck(
    layers=[cases_layer],
    initial_view_state=pdk.ViewState(latitude=20, longitude=0, zoom=0.8),
    map_style=None,
    height=MAP_HEIGHT,
    tooltip={
      "html": "<b>{name}</b><br/>Cases: {cases_label}<br/>Deaths: {deaths_label}",
      "style": {"color": "white"},
    },
  )


def render_world_map(geojson: dict, records: Sequence[CountryRecord], surface) -> None:
  surface.pydeck_chart(build_world_map(geojson, records), use_container_width=True)


# ---------------------------------------------------------------- table

def build_table_frame(records: Sequence[CountryRecord]) -> pd.DataFrame:
  rows = [
    [
      position,
      record.country,
      format_number(record.cases),
      format_number(record.deaths),
      format_number(record.recovered),
      format_number(record.active),
    ]
    for position, record in enumerate(top_n(records, TOP_COUNTRIES), start=1)
  ]
  return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def render_table(records: Sequence[CountryRecord], surface) -> None:
  surface.dataframe(build_table_frame(records), use_container_width=True, hide_index=True)


# ---------------------------------------------------------------- bar chart

def _tick_step(stop: float, count: int) -> float:
  step = stop / count
  power = math.floor(math.log10(step))
  error = step / 10 ** power
  if error >= math.sqrt(50):
    factor = 10
  elif error >= math.sqrt(10):
    factor = 5
  elif error >= math.sqrt(2):
    factor = 2
  else:
    factor = 1
  return factor * 10 ** power


def _clean(value: float):
  value = round(value, 10)
  return int(value) if float(value).is_integer() else value


def nice_upper_bound(maximum: float, count: int = 10):
  '''Round `maximum` up to a multiple of a 1/2/5 x 10^k tick step.'''
  if not maximum or maximum <= 0:
    return 0
  upper = float(maximum)
  previous = None
  for _ in range(10):
    step = _tick_step(upper, count)
    if step == previous:
      break
    upper = math.ceil(round(upper / step, 10)) * step
    previous = step
  return _clean(upper)


def axis_ticks(upper: float, count: int = BAR_TICKS) -> list:
  if not upper or upper <= 0:
    return [0]
  step = _tick_step(upper, count)
  ticks = np.arange(0, math.floor(round(upper / step, 10)) + 1) * step
  return [_clean(t) for t in ticks]


def build_bar_chart(records: Sequence[CountryRecord]) -> alt.Chart:
  top = records_frame(top_n(records, TOP_COUNTRIES))
  upper = nice_upper_bound(top['cases'].max() if not top.empty else 0)
  order = top['country'].tolist()

  return alt.Chart(top).mark_bar(color=BAR_COLOR, opacity=0.8).encode(
    x=alt.X('country:N', sort=order, title=None, axis=alt.Axis(labelAngle=-45)),
    y=alt.Y(
      'cases:Q',
      title='Cases',
      scale=alt.Scale(domain=[0, upper or 1], nice=False),
      axis=alt.Axis(values=axis_ticks(upper), format=','),
    ),
    tooltip=[
      alt.Tooltip('country:N', title='Country'),
      alt.Tooltip('cases:Q', title='Cases', format=','),
      alt.Tooltip('deaths:Q', title='Deaths', format=','),
    ],
  ).properties(height=CHART_HEIGHT)


def render_bar_chart(records: Sequence[CountryRecord], surface) -> None:
  surface.altair_chart(build_bar_chart(records), use_container_width=True)


# ---------------------------------------------------------------- pie chart

def pie_wedges(summary: GlobalSummary) -> pd.DataFrame:
  '''
  Active / Recovered / Deaths wedges with start, end and middle angles in
  radians. `cases` is not part of the pie.

  Rows stay in Active / Recovered / Deaths order, but wedges are laid out
  clockwise from 0 largest first, ties in row order.
  An all-zero summary is split evenly so the wedges still close the circle.
  '''
  labels = ['Active', 'Recovered', 'Deaths']
  colors = [ACTIVE_COLOR, RECOVERED_COLOR, DEATHS_COLOR]
  values = np.clip(
    np.array([summary.active, summary.recovered, summary.deaths], dtype=float), 0, None
  )
  total = values.sum()
  shares = values / total if total > 0 else np.full(len(values), 1 / len(values))

  layout = np.argsort(-values, kind='stable')
  laid_ends = np.cumsum(shares[layout]) * 2 * np.pi
  laid_ends[-1] = 2 * np.pi
  laid_starts = np.concatenate(([0.0], laid_ends[:-1]))

  starts = np.empty(len(values))
  ends = np.empty(len(values))
  starts[layout] = laid_starts
  ends[layout] = laid_ends
  return pd.DataFrame({
    'label': labels,
    'value': values.astype(int),
    'color': colors,
    'theta': starts,
    'theta2': ends,
    'theta_mid': (starts + ends) / 2,
  })


def build_pie_chart(summary: GlobalSummary) -> alt.LayerChart:
  wedges = pie_wedges(summary)
  color = alt.Color(
    'label:N',
    scale=alt.Scale(domain=wedges['label'].tolist(), range=wedges['color'].tolist()),
    legend=None,
  )
  arcs = alt.Chart(wedges).mark_arc(
    outerRadius=PIE_RADIUS, opacity=0.8, stroke='#fff', strokeWidth=2
  ).encode(
    theta=alt.Theta('theta:Q', scale=None),
    theta2='theta2',
    color=color,
    tooltip=[alt.Tooltip('label:N', title='Status'), alt.Tooltip('value:Q', title='People', format=',')],
  )
  labels = alt.Chart(wedges).mark_text(
    radius=PIE_RADIUS / 2, color='#fff', fontWeight='bold'
  ).encode(
    theta=alt.Theta('theta_mid:Q', scale=None),
    text='label:N',
  )
  return alt.layer(arcs, labels).properties(height=CHART_HEIGHT)


def render_pie_chart(summary: GlobalSummary, surface) -> None:
  surface.altair_chart(build_pie_chart(summary), use_container_width=True)


# ---------------------------------------------------------------- headline

def render_summary_metrics(summary: GlobalSummary, surface) -> None:
  metric_cols = surface.columns(4)
  metric_cols[0].metric("Total cases", format_number(summary.cases))
  metric_cols[1].metric("Deaths", format_number(summary.deaths))
  metric_cols[2].metric("Recovered", format_number(summary.recovered))
  metric_cols[3].metric("Active", format_number(summary.active))


def render_last_updated(now: datetime, surface) -> None:
  surface.caption(f"Last updated: {now:%b %d, %Y %H:%M:%S}")
