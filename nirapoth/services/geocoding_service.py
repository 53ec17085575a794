# services/geocoding_service.py
import logging
from typing import Optional

import httpx

from nirapoth.core.config import settings
from nirapoth.schemas.common import LocationData

logger = logging.getLogger(__name__)


def _address_from_payload(latitude: float, longitude: float, data: dict) -> LocationData:
    address = data.get("address") or {}
    return LocationData(
        latitude=latitude,
        longitude=longitude,
        address=data.get("display_name") or "",
        city=address.get("city") or address.get("town") or "",
        district=address.get("state_district") or "",
        division=address.get("state") or "",
    )


async def reverse_geocode(
    latitude: float,
    longitude: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LocationData:
    """Resolve coordinates to an address.

    Never raises: on any failure the coordinates come back with blank
    address fields so the caller can still submit.
    """
    params = {"format": "json", "lat": latitude, "lon": longitude}
    headers = {"User-Agent": settings.GEOCODING_USER_AGENT}

    try:
        async with httpx.AsyncClient(transport=transport, timeout=settings.GEOCODING_TIMEOUT_SECONDS) as client:
            response = await client.get(settings.GEOCODING_URL, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[GEOCODE] Could not get address details for %s,%s: %s", latitude, longitude, e)
        return LocationData(latitude=latitude, longitude=longitude)

    if not isinstance(data, dict) or "error" in data:
        logger.warning("[GEOCODE] No address for %s,%s", latitude, longitude)
        return LocationData(latitude=latitude, longitude=longitude)

    return _address_from_payload(latitude, longitude, data)
