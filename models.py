'''
Records returned by the disease.sh statistics API.

Both types are frozen: they are written once by the stats client and only
read afterwards by the ranker and the renderers.
'''
from dataclasses import asdict, dataclass, fields
from typing import Iterable

import pandas as pd


class StatsError(Exception):
  """Any failure while loading dashboard data."""


class NetworkError(StatsError):
  """Transport failure or a non-success HTTP status."""


class ParseError(StatsError):
  """Response body is not JSON, or not the expected shape."""


COUNT_FIELDS = ('cases', 'deaths', 'recovered', 'active')


def _count(payload: dict, key: str, allow_null: bool = False) -> int:
  if key not in payload:
    raise ParseError(f"missing field '{key}'")
  value = payload[key]
  if value is None and allow_null:
    return 0
  if isinstance(value, bool) or not isinstance(value, (int, float)):
    raise ParseError(f"field '{key}' is not a number: {value!r}")
  return int(value)


@dataclass(frozen=True)
class GlobalSummary:
  cases: int
  deaths: int
  recovered: int
  active: int

  @classmethod
  def from_json(cls, payload) -> 'GlobalSummary':
    if not isinstance(payload, dict):
      raise ParseError(f"expected an object, got {type(payload).__name__}")
    return cls(**{key: _count(payload, key) for key in COUNT_FIELDS})


@dataclass(frozen=True)
class CountryRecord:
  country: str
  cases: int
  deaths: int
  recovered: int
  active: int

  @classmethod
  def from_json(cls, payload) -> 'CountryRecord':
    """Build one record; null counts (common for recovered/active) read as 0."""
    if not isinstance(payload, dict):
      raise ParseError(f"expected an object, got {type(payload).__name__}")
    country = payload.get('country')
    if not isinstance(country, str):
      raise ParseError(f"field 'country' is not a string: {country!r}")
    counts = {key: _count(payload, key, allow_null=True) for key in COUNT_FIELDS}
    return cls(country=country, **counts)


RECORD_COLUMNS = [f.name for f in fields(CountryRecord)]


def records_frame(records: Iterable[CountryRecord]) -> pd.DataFrame:
  return pd.DataFrame([asdict(r) for r in records], columns=RECORD_COLUMNS)
