'''
Thin client for the disease.sh COVID-19 API and the world geometry file.

Every call is a single GET with no retry. Failures surface as
NetworkError (transport or HTTP status) or ParseError (body), both
subclasses of StatsError.
'''
import json
import logging
from typing import List
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from config import API_BASE, REQUEST_TIMEOUT, USER_AGENT, WORLD_GEOJSON_URL
from models import (
  CountryRecord,
  GlobalSummary,
  NetworkError,
  ParseError,
  StatsError,
)

logger = logging.getLogger(__name__)

__all__ = [
  'NetworkError',
  'ParseError',
  'StatsError',
  'fetch_country_records',
  'fetch_global_summary',
  'fetch_json',
  'fetch_world_geojson',
]


def fetch_json(url: str):
  logger.debug("GET %s", url)
  request = Request(url, headers={'User-Agent': USER_AGENT, 'Accept': 'application/json'})
  try:
    with urlopen(request, timeout=REQUEST_TIMEOUT) as response:
      body = response.read()
  except HTTPError as exc:
    logger.warning("GET %s returned HTTP %s", url, exc.code)
    raise NetworkError(f"{url} returned HTTP {exc.code}") from exc
  except (URLError, OSError) as exc:
    logger.warning("GET %s failed: %s", url, exc)
    raise NetworkError(f"could not reach {url}: {exc}") from exc

  try:
    return json.loads(body)
  except (UnicodeDecodeError, ValueError) as exc:
    logger.warning("GET %s returned a malformed body", url)
    raise ParseError(f"{url} did not return valid JSON") from exc


def fetch_global_summary(base_url: str = API_BASE) -> GlobalSummary:
  return GlobalSummary.from_json(fetch_json(f"{base_url}/all"))


def fetch_country_records(base_url: str = API_BASE) -> List[CountryRecord]:
  payload = fetch_json(f"{base_url}/countries")
  if not isinstance(payload, list):
    raise ParseError(f"expected a list of countries, got {type(payload).__name__}")
  return [CountryRecord.from_json(item) for item in payload]


def fetch_world_geojson(url: str = WORLD_GEOJSON_URL) -> dict:
  """Feature collection whose features carry a `name` property."""
  geojson = fetch_json(url)
  if not isinstance(geojson, dict) or not isinstance(geojson.get('features'), list):
    raise ParseError(f"{url} is not a GeoJSON feature collection")
  for position, feature in enumerate(geojson['features']):
    if not isinstance(feature, dict):
      raise ParseError(f"{url} feature {position} is not an object")
    properties = feature.get('properties')
    if properties is not None and not isinstance(properties, dict):
      raise ParseError(f"{url} feature {position} has malformed properties")
    name = (properties or {}).get('name')
    if name is not None and not isinstance(name, str):
      raise ParseError(f"{url} feature {position} has a non-text name: {name!r}")
  return geojson
