"""
Google Maps Geocoding Service

Resolves a "city, state" pair to a coordinate with a single call to the
Google Geocoding API. The provider payload is validated against the expected
shape before use; anything else is reported as a GeocodeFailure.
"""
import logging
from typing import Optional

import httpx
import pydantic
from pydantic import BaseModel

from app.config import Settings, get_settings
from app.models.schemas import Coordinate
from app.services.exceptions import ConfigurationError, GeocodeFailure

logger = logging.getLogger(__name__)


# =============================================================================
# Provider payload
# =============================================================================

class _GeocodeLocation(BaseModel):
    lat: float
    lng: float


class _GeocodeGeometry(BaseModel):
    location: _GeocodeLocation


class _GeocodeCandidate(BaseModel):
    geometry: _GeocodeGeometry


class GeocodeResponse(BaseModel):
    """The subset of the Google Geocoding response the estimator relies on."""
    status: str
    results: list[_GeocodeCandidate] = []
    error_message: Optional[str] = None


# =============================================================================
# Client
# =============================================================================

class GoogleGeocoder:
    """Async client for the Google Maps Geocoding API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def geocode(self, city: str, state: str) -> Coordinate:
        """
        Geocode a city using the Google Geocoding service.

        Args:
            city: City name (e.g., "Springfield")
            state: Two-letter state code (e.g., "IL")

        Returns:
            Coordinate of the first result returned by the provider

        Raises:
            ConfigurationError: If no API key is configured
            GeocodeFailure: If the provider errors or returns no usable result
        """
        if not self.api_key:
            raise ConfigurationError("API keys not configured")

        query = f"{city}, {state}"
        params = {"address": query, "key": self.api_key}
        logger.debug(f"Geocoding '{query}'")

        async with self._client() as client:
            try:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as e:
                logger.warning(f"Geocoding error for '{query}': {e}")
                raise GeocodeFailure(query, str(e)) from e
            except ValueError as e:
                logger.warning(f"Geocoding returned a non-JSON body for '{query}'")
                raise GeocodeFailure(query, "provider returned malformed JSON") from e

        return _parse_geocode_response(query, data)


def _parse_geocode_response(query: str, data: object) -> Coordinate:
    """Validate a provider payload and extract the first coordinate."""
    try:
        payload = GeocodeResponse.model_validate(data)
    except pydantic.ValidationError as e:
        logger.warning(f"Unexpected geocoding payload for '{query}': {e.error_count()} errors")
        raise GeocodeFailure(query, "unexpected provider response") from e

    if payload.status != "OK":
        reason = f"provider status {payload.status}"
        if payload.error_message:
            reason = f"{reason} ({payload.error_message})"
        logger.warning(f"Geocoding failed for '{query}': {reason}")
        raise GeocodeFailure(query, reason)

    if not payload.results:
        raise GeocodeFailure(query, "no results")

    location = payload.results[0].geometry.location
    return Coordinate(lat=location.lat, lng=location.lng)


def get_geocoder() -> GoogleGeocoder:
    """FastAPI dependency returning a geocoder configured from settings."""
    settings: Settings = get_settings()
    return GoogleGeocoder(
        api_key=settings.google_maps_api_key,
        base_url=settings.geocode_base_url,
        timeout=settings.geocode_timeout_seconds,
    )
