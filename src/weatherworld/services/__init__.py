"""Service-layer adapters around the upstream providers."""

from weatherworld.services.geocoding import fallback_place, forward_geocode, reverse_geocode

__all__ = ["fallback_place", "forward_geocode", "reverse_geocode"]
