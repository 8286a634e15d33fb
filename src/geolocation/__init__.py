"""
Sanitary Map AI - Geolocation Module
"""

from src.geolocation.resolver import GeolocationResolver, ResolvedLocation

__all__ = [
    "GeolocationResolver",
    "ResolvedLocation",
]
