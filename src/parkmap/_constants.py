"""Internal constants shared across the library."""

USER_AGENT = "parkmap/0.1"

#: Guard used by the projector so a zero-width/zero-height envelope never divides by zero.
EPSILON = 1e-9

# ------------------------------------------------------------------
# Drawing surface  (logical SVG viewBox units)
# ------------------------------------------------------------------

CANVAS_WIDTH = 1200.0
CANVAS_HEIGHT = 520.0
CANVAS_MARGIN = 20.0

# ------------------------------------------------------------------
# Status classification  (status string -> fill colour)
# ------------------------------------------------------------------

STATUS_UNKNOWN = "unknown"

FILL_OCCUPIED = "#d93025"
FILL_VACANT = "#1a7f37"
FILL_DEFAULT = "#9e9e9e"
FILL_OPACITY = 0.55
STROKE_COLOR = "#333"
STROKE_WIDTH = 1.0
LABEL_FONT_SIZE = 12

DEFAULT_POLL_INTERVAL = 15.0
DEFAULT_REQUEST_TIMEOUT = 10.0

# Amazon Location Service style/tile host.
LOCATION_HOST_TEMPLATE = "https://maps.geo.{region}.amazonaws.com/"
STYLE_PATH_TEMPLATE = "maps/v0/maps/{map_name}/style-descriptor"
