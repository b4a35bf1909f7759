import logging
from typing import Any, Optional

import httpx

from .schemas import Coordinate
from .settings import settings

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Resolve free-form addresses with the OpenStreetMap Nominatim search API.

    Parameters
    ----------
    base_url : Optional[str]
        Nominatim root URL. Defaults to `settings.geocoding_base_url`.
    user_agent : Optional[str]
        Value of the `User-Agent` header; Nominatim's usage policy requires one.
    transport : Optional[httpx.AsyncBaseTransport]
        Alternative transport, e.g. `httpx.MockTransport` in tests.

    Notes
    -----
    - One request per lookup, no retries.
    - Provider errors are logged and reported as "no match", so callers only
      ever see a coordinate or `None`.
    """

    def __init__(self, base_url: Optional[str] = None, user_agent: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.geocoding_base_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoding_user_agent
        self._transport = transport

    async def _search(self, address: str) -> Any:
        params = {"q": address, "format": "json", "limit": 1}
        headers = {"User-Agent": self.user_agent}
        async with httpx.AsyncClient(timeout=settings.http_timeout, transport=self._transport) as client:
            r = await client.get(f"{self.base_url}/search", params=params, headers=headers)
            r.raise_for_status()
            return r.json()

    async def coordinates(self, address: str) -> Optional[Coordinate]:
        """Return the best match for `address`, or `None` if there is none.

        Parameters
        ----------
        address : str
            Free-form address: city name, postal code, or full street address.

        Returns
        -------
        Optional[Coordinate]
            Latitude/longitude of the first result.
        """

        try:
            data = await self._search(address)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoding lookup for %r failed: %s", address, exc)
            return None
        if not data:
            return None
        try:
            return Coordinate(latitude=float(data[0]["lat"]), longitude=float(data[0]["lon"]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Unexpected geocoding payload for %r: %s", address, exc)
            return None
