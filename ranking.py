from typing import List, Optional, Sequence

from models import CountryRecord


def rank(records: Sequence[CountryRecord]) -> List[CountryRecord]:
  # sorted() is stable with reverse=True, equal case counts keep API order
  return sorted(records, key=lambda r: r.cases, reverse=True)


def top_n(records: Sequence[CountryRecord], n: int) -> List[CountryRecord]:
  if n <= 0:
    return []
  return list(records[:n])


def match(feature_name: Optional[str], records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
  '''
  Case-insensitive exact join between a map feature and a country record.

  No alias resolution: "United States of America" does not match "USA".
  '''
  if not feature_name or not isinstance(feature_name, str):
    return None
  key = feature_name.casefold()
  for record in records:
    if record.country.casefold() == key:
      return record
  return None
