import logging
import re
from typing import NamedTuple, Optional

from .cache import TTLCache
from .geocoding import NominatimGeocoder
from .normalizer import normalize
from .openweather_client import OpenWeatherClient
from .schemas import ErrorKind, ErrorResult, ForecastResult
from .settings import settings

logger = logging.getLogger(__name__)

PROCESSING_FAILED = "Error processing weather data. Please try again later."

_WHITESPACE = re.compile(r"\s+")


def cache_key(address: str) -> str:
    """Cache key for an address: case-folded, trimmed, whitespace runs as `_`."""

    return "weather_" + _WHITESPACE.sub("_", address.strip().casefold())


def location_not_found(address: str) -> ErrorResult:
    return ErrorResult(
        kind=ErrorKind.NOT_FOUND,
        message=f"Could not find location: {address}. Please check the address and try again.",
    )


class CachedForecast(NamedTuple):
    result: ForecastResult
    from_cache: bool


class ForecastService:
    """Address → weather pipeline behind a short-lived cache.

    Parameters
    ----------
    geocoder : Optional[NominatimGeocoder]
        Coordinate resolver.
    client : Optional[OpenWeatherClient]
        Weather fetcher.
    cache : Optional[TTLCache]
        Record store; defaults to a fresh cache with `settings.cache_ttl_forecast`.

    Notes
    -----
    - Only successful records are cached. A failed computation deletes the
      key, so the next request runs the whole pipeline again.
    """

    def __init__(self, geocoder: Optional[NominatimGeocoder] = None, client: Optional[OpenWeatherClient] = None,
                 cache: Optional[TTLCache] = None):
        self.geocoder = geocoder or NominatimGeocoder()
        self.client = client or OpenWeatherClient()
        self.cache = cache if cache is not None else TTLCache(settings.cache_ttl_forecast)

    async def compute(self, address: str) -> ForecastResult:
        """Run geocoding, both upstream calls and normalization, uncached."""

        coordinate = await self.geocoder.coordinates(address)
        if coordinate is None:
            return location_not_found(address)

        upstream = await self.client.fetch(coordinate)
        if isinstance(upstream, ErrorResult):
            return upstream

        try:
            return normalize(upstream.current.json(), upstream.forecast.json(), address)
        except Exception:  # noqa: BLE001 - any malformed payload is reported the same way
            logger.exception("Error processing weather data for %r", address)
            return ErrorResult(kind=ErrorKind.PROCESSING_FAILURE, message=PROCESSING_FAILED)

    async def get_forecast(self, address: str, refresh: bool = False) -> CachedForecast:
        """Return the record for `address`, from cache when possible.

        Parameters
        ----------
        address : str
            Non-empty address as typed by the caller.
        refresh : bool
            Skip the cache read and recompute. The result still updates the
            cache: a record replaces the entry, an error removes it.

        Returns
        -------
        CachedForecast
            The result and whether it was served from cache.
        """

        key = cache_key(address)
        if not refresh:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s", key)
                return CachedForecast(result=cached, from_cache=True)

        logger.debug("Cache miss for %s", key)
        result = await self.compute(address)
        if isinstance(result, ErrorResult):
            self.cache.delete(key)
        else:
            self.cache.set(key, result)
        return CachedForecast(result=result, from_cache=False)
