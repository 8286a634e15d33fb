"""
Geolocation resolver.

Turns whatever coordinates a client captured into a report location,
substituting a fixed fallback when the reporter denied location access.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from src.core.config import settings
from src.core.geo_utils import is_valid_latitude, is_valid_longitude
from src.reports.exceptions import ValidationError
from src.reports.models import Location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedLocation:
    """A resolved coordinate pair and whether it is the fallback."""
    location: Location
    is_fallback: bool = False


class GeolocationResolver:
    """Resolves client coordinates or supplies the configured fallback."""

    def __init__(
        self,
        fallback: Optional[Tuple[float, float]] = None,
        use_fallback: Optional[bool] = None
    ):
        """
        Args:
            fallback: (lat, lng) used when no coordinates are supplied
            use_fallback: Whether missing coordinates may resolve to the fallback
        """
        lat, lng = fallback or (settings.fallback_latitude, settings.fallback_longitude)
        self.fallback = Location(lat=lat, lng=lng)
        self.use_fallback = settings.use_fallback_location if use_fallback is None else use_fallback

    def resolve(
        self,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        allow_fallback: Optional[bool] = None
    ) -> ResolvedLocation:
        """
        Resolve a coordinate pair.

        Args:
            lat: Captured latitude, or None
            lng: Captured longitude, or None
            allow_fallback: Per-call override of ``use_fallback``

        Returns:
            ResolvedLocation

        Raises:
            ValidationError: If coordinates are out of range, or missing
                while the fallback is disabled
        """
        fallback_enabled = self.use_fallback if allow_fallback is None else allow_fallback

        if lat is None or lng is None:
            if not fallback_enabled:
                raise ValidationError(["location"], "Location has not been captured")
            logger.info(
                f"Location unavailable, using fallback ({self.fallback.lat}, {self.fallback.lng})"
            )
            return ResolvedLocation(location=self.fallback, is_fallback=True)

        invalid = []
        if not is_valid_latitude(lat):
            invalid.append("location.lat")
        if not is_valid_longitude(lng):
            invalid.append("location.lng")
        if invalid:
            raise ValidationError(invalid)

        return ResolvedLocation(location=Location(lat=float(lat), lng=float(lng)))
