# Fixed settings for the covid pulse dashboard

API_BASE = 'https://disease.sh/v3/covid-19'
WORLD_GEOJSON_URL = (
  'https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson'
)
REQUEST_TIMEOUT = 30
USER_AGENT = 'covid-pulse/0.1'

PAGE_TITLE = "COVID-19 Global Dashboard"
FAILURE_MESSAGE = 'Failed to load COVID-19 data. Please refresh the page.'

TOP_COUNTRIES = 10
MAP_HEIGHT = 500
CHART_HEIGHT = 400
BAR_TICKS = 5

# Log-scale break-points for the choropleth, lightest to darkest
CASE_BREAKS = (1, 1_000, 100_000, 10_000_000)
CASE_PALETTE = ('#ffffcc', '#ffeda0', '#feb24c', '#f03b20')
NO_DATA_COLOR = '#cccccc'
STROKE_COLOR = [255, 255, 255]

BAR_COLOR = '#3498db'
ACTIVE_COLOR = '#f39c12'
RECOVERED_COLOR = '#2ecc71'
DEATHS_COLOR = '#e74c3c'
