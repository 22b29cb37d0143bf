import pytest

from models import CountryRecord, GlobalSummary


class FakeSurface:
  """Records every Streamlit-style call made on it."""

  def __init__(self):
    self.calls = []
    self.children = []

  def columns(self, spec):
    count = spec if isinstance(spec, int) else len(spec)
    self.children = [FakeSurface() for _ in range(count)]
    return self.children

  def __getattr__(self, name):
    if name.startswith('_'):
      raise AttributeError(name)

    def record(*args, **kwargs):
      self.calls.append((name, args, kwargs))
    return record

  def names(self):
    return [name for name, _, _ in self.calls]


def country(name, cases, deaths=0, recovered=0, active=0):
  return CountryRecord(country=name, cases=cases, deaths=deaths, recovered=recovered, active=active)


@pytest.fixture
def summary():
  return GlobalSummary(cases=100, deaths=10, recovered=80, active=10)


@pytest.fixture
def records():
  return [country("A", 50, deaths=5), country("B", 70, deaths=7)]


@pytest.fixture
def world():
  return {
    'type': 'FeatureCollection',
    'features': [
      {'type': 'Feature', 'properties': {'name': 'a'}, 'geometry': {'type': 'Polygon', 'coordinates': []}},
      {'type': 'Feature', 'properties': {'name': 'Atlantis'}, 'geometry': {'type': 'Polygon', 'coordinates': []}},
    ],
  }
