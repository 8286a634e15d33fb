"""
Sanitary Map AI - Constants and Reference Data
Static values used throughout the application.
"""

from typing import Dict, FrozenSet, Tuple

# =============================================================================
# SEVERITY CLASSIFICATION
# =============================================================================

# Any hit here makes a report high severity, regardless of medium hits
HIGH_SEVERITY_KEYWORDS: FrozenSet[str] = frozenset({
    "urgent",
    "severe",
    "critical",
    "emergency",
    "overflow",
    "blocked",
    "dangerous",
})

MEDIUM_SEVERITY_KEYWORDS: FrozenSet[str] = frozenset({
    "dirty",
    "unclean",
    "smell",
    "garbage",
    "waste",
    "broken",
})

# Indicator color name -> hex code used by the map and dashboard
INDICATOR_HEX: Dict[str, str] = {
    "red": "#ef4444",
    "yellow": "#eab308",
    "green": "#22c55e",
}

# =============================================================================
# STORAGE
# =============================================================================

REPORT_KEY_PREFIX: str = "report:"
REPORT_ID_PREFIX: str = "report_"

# =============================================================================
# GEOGRAPHY
# =============================================================================

EARTH_RADIUS_KM = 6371.0

LATITUDE_RANGE: Tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: Tuple[float, float] = (-180.0, 180.0)

# Used when the reporter denies location access
DEFAULT_FALLBACK_LOCATION: Tuple[float, float] = (15.9129, 79.74)

# India center, initial board view
DEFAULT_MAP_CENTER: Tuple[float, float] = (20.5937, 78.9629)
