"""Constants used throughout the U-plan volume generator.

This module centralizes the magic numbers of the volume pipeline. The values
come from the error budgets and conventions agreed with the authorization
service, so they must not drift between modules.

Categories:
- Earth Model: WGS84 ellipsoid and the sphere used for fallbacks
- Degenerate Geometry: Substitutes for zero distances
- Volume Defaults: Error budgets, dominance thresholds and buffers
- Time Handling: Absolute/relative threshold and output format
- Altitude: Reference, units and regulatory floor
- Validation Ranges: Min/max bounds for waypoint validation
- Trajectory CSV: Column names expected in simulator output
"""

# === Earth Model ===
WGS84_ELLIPSOID = "WGS84"

# Mean Earth radius used by the spherical fallback formulas
EARTH_MEAN_RADIUS_M = 6371008.8

# === Degenerate Geometry ===
COINCIDENT_DISTANCE_M = 0.01  # Returned instead of 0 to avoid divide-by-zero
LEGACY_MIN_DISTANCE_M = 1.0  # Legacy generator treats shorter segments as coincident

# === Volume Defaults ===
DEFAULT_TSE_H = 15.0  # Horizontal total system error (m)
DEFAULT_TSE_V = 10.0  # Vertical total system error (m)
DEFAULT_ALPHA_H = 7.0  # Horizontal dominance threshold
DEFAULT_ALPHA_V = 1.0  # Vertical dominance threshold
DEFAULT_TBUF = 5.0  # Temporal buffer (s)
DEFAULT_COMPRESSION_FACTOR = 20  # Waypoint decimation stride

# === Time Handling ===
# Waypoint times at or above this value are POSIX timestamps, not offsets
ABSOLUTE_TIME_THRESHOLD_S = 1_000_000
ISO_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
ISO_TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$"
SECONDS_PER_HOUR = 3600

# === Altitude ===
ALTITUDE_REFERENCE = "AGL"
ALTITUDE_UOM = "M"
ALTITUDE_UOMS = ("M", "FT")
MIN_ALTITUDE_AGL_M = 10.0  # Regulatory floor for minAltitude

# === Polygon ===
POLYGON_POINT_COUNT = 5  # Four corners plus the closing point

# === Validation Ranges ===
LAT_MIN = -90.0
LAT_MAX = 90.0
LON_MIN = -180.0
LON_MAX = 180.0
ALT_MIN_M = -1000.0
ALT_MAX_M = 50000.0

# === Trajectory CSV ===
CSV_TIME_COLUMN = "SimTime"
CSV_LAT_COLUMN = "Lat"
CSV_LON_COLUMN = "Lon"
CSV_ALT_COLUMN = "Alt"
CSV_REQUIRED_COLUMNS = (CSV_TIME_COLUMN, CSV_LAT_COLUMN, CSV_LON_COLUMN, CSV_ALT_COLUMN)
CSV_COMMENT_PREFIX = "//"

# === U-plan Document ===
DEFAULT_UPLAN_STATE = "SENT"
DEFAULT_GCS_COORDINATES = [-0.337337, 39.479984]

# === File Size Limits ===
LARGE_FILE_WARNING_MB = 100  # Warn if the trajectory CSV exceeds this size
