import math


def format_number(value) -> str:
  '''Locale-style display string: 1234567 -> "1,234,567".'''
  if value is None:
    return 'n/a'
  if isinstance(value, float):
    if math.isnan(value):
      return 'n/a'
    if not value.is_integer():
      text = f"{value:,.3f}".rstrip('0').rstrip('.')
      return '0' if text in ('-0', '') else text
  return f"{int(value):,}"
