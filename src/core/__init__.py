"""
Sanitary Map AI - Core Utilities
Central configuration, logging, and utility functions.
"""

from src.core.config import settings, get_settings
from src.core.constants import (
    HIGH_SEVERITY_KEYWORDS,
    MEDIUM_SEVERITY_KEYWORDS,
    INDICATOR_HEX,
    REPORT_KEY_PREFIX,
)
from src.core.geo_utils import (
    BoundingBox,
    is_valid_coordinate,
    calculate_centroid,
)

__all__ = [
    "settings",
    "get_settings",
    "HIGH_SEVERITY_KEYWORDS",
    "MEDIUM_SEVERITY_KEYWORDS",
    "INDICATOR_HEX",
    "REPORT_KEY_PREFIX",
    "BoundingBox",
    "is_valid_coordinate",
    "calculate_centroid",
]
