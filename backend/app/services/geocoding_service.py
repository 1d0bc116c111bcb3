"""
Reverse geocoding service (OpenStreetMap Nominatim).

Enrichment is best-effort: every failure of the remote service is logged and
replaced by the "Unknown location" sentinel, so shop writes never fail on it.
"""

import logging
from typing import Optional

import httpx

from app.config import settings
from app.models.shop import UNKNOWN_LOCATION

logger = logging.getLogger(__name__)


class GeocodingService:
    """Resolves coordinates to a human-readable place name."""

    def __init__(
        self,
        url: str = settings.GEOCODER_URL,
        timeout: float = settings.GEOCODER_TIMEOUT,
        user_agent: str = settings.GEOCODER_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    async def resolve_place_name(self, latitude: str, longitude: str) -> str:
        """
        Look up the place name for a coordinate pair.

        Args:
            latitude: Latitude as sent by the client
            longitude: Longitude as sent by the client

        Returns:
            The geocoder's display name, or "Unknown location" on any failure
        """
        params = {"lat": latitude, "lon": longitude, "format": "json", "zoom": 10}
        headers = {"User-Agent": self.user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.get(self.url, params=params, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException:
            logger.warning(f"Reverse geocoding timed out for ({latitude}, {longitude})")
            return UNKNOWN_LOCATION
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Reverse geocoding failed for ({latitude}, {longitude}): {e}")
            return UNKNOWN_LOCATION
        except Exception as e:
            # InvalidURL (oversized query) and anything else outside HTTPError
            logger.warning(
                f"Reverse geocoding request could not be made for "
                f"({latitude[:32]}, {longitude[:32]}): {e}"
            )
            return UNKNOWN_LOCATION

        place_name = data.get("display_name") if isinstance(data, dict) else None
        if not isinstance(place_name, str) or not place_name.strip():
            logger.warning(
                f"Reverse geocoding returned no place name for ({latitude}, {longitude})"
            )
            return UNKNOWN_LOCATION

        return place_name
