'''
Load-and-draw sequence for one page run.

  IDLE -> LOADING -> RENDERING -> READY
              \\           \\
               +-> FAILED <-+

The summary is fetched before the country list; if it fails the country
request is never sent. The world geometry is fetched before the first
view is drawn, so a failed load leaves the page empty apart from the
failure notice.
'''
import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional

import charts
from config import FAILURE_MESSAGE
from models import CountryRecord, GlobalSummary, StatsError
from ranking import rank
from stats_client import fetch_country_records, fetch_global_summary, fetch_world_geojson

logger = logging.getLogger(__name__)


class DashboardState(enum.Enum):
  IDLE = 'idle'
  LOADING = 'loading'
  RENDERING = 'rendering'
  READY = 'ready'
  FAILED = 'failed'


@dataclass
class Surfaces:
  """Where each view is drawn; any object with the Streamlit element API."""
  metrics: Any
  world_map: Any
  table: Any
  bar_chart: Any
  pie_chart: Any
  timestamp: Any


class Dashboard:

  def __init__(
    self,
    surfaces: Surfaces,
    fetch_summary: Callable[[], GlobalSummary] = fetch_global_summary,
    fetch_countries: Callable[[], List[CountryRecord]] = fetch_country_records,
    fetch_geojson: Callable[[], dict] = fetch_world_geojson,
    notify: Optional[Callable[[str], Any]] = None,
    clock: Callable[[], datetime] = datetime.now,
  ):
    self.surfaces = surfaces
    self.fetch_summary = fetch_summary
    self.fetch_countries = fetch_countries
    self.fetch_geojson = fetch_geojson
    self.notify = notify or (lambda message: None)
    self.clock = clock

    self.state = DashboardState.IDLE
    self.summary: Optional[GlobalSummary] = None
    self.records: List[CountryRecord] = []
    self.error: Optional[Exception] = None

  def _enter(self, state: DashboardState) -> None:
    logger.info("dashboard %s -> %s", self.state.value, state.value)
    self.state = state

  def _fail(self, error: Exception) -> DashboardState:
    self.error = error
    self._enter(DashboardState.FAILED)
    self.notify(FAILURE_MESSAGE)
    return self.state

  def load(self) -> None:
    self._enter(DashboardState.LOADING)
    self.summary = self.fetch_summary()
    self.records = rank(self.fetch_countries())
    logger.info("loaded %d country records", len(self.records))

  def render(self) -> None:
    self._enter(DashboardState.RENDERING)
    geojson = self.fetch_geojson()

    surfaces = self.surfaces
    charts.render_world_map(geojson, self.records, surfaces.world_map)
    charts.render_summary_metrics(self.summary, surfaces.metrics)
    charts.render_table(self.records, surfaces.table)
    charts.render_bar_chart(self.records, surfaces.bar_chart)
    charts.render_pie_chart(self.summary, surfaces.pie_chart)
    charts.render_last_updated(self.clock(), surfaces.timestamp)

  def run(self) -> DashboardState:
    if self.state is not DashboardState.IDLE:
      raise RuntimeError(f"dashboard already ran (state={self.state.value})")

    try:
      self.load()
    except StatsError as exc:
      logger.warning("loading dashboard data failed: %s", exc)
      return self._fail(exc)

    try:
      self.render()
    except (StatsError, AttributeError, KeyError, TypeError, ValueError) as exc:
      logger.exception("rendering dashboard failed")
      return self._fail(exc)

    self._enter(DashboardState.READY)
    return self.state
