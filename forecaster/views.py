from typing import Optional

from .schemas import ErrorResult, ForecastView, RedirectView, ViewResult
from .service import ForecastService

EMPTY_ADDRESS = "Please enter an address."


async def handle_forecast(address: Optional[str], service: ForecastService, refresh: bool = False) -> ViewResult:
    """Decide what the caller sees for a forecast request.

    Parameters
    ----------
    address : Optional[str]
        Raw `address` parameter. Blank or missing values never reach the service.
    service : ForecastService
        Cached weather pipeline.
    refresh : bool
        Passed through to `ForecastService.get_forecast`.

    Returns
    -------
    ViewResult
        `ForecastView` with the record and cache flag, or `RedirectView` to the
        index page carrying the alert text.
    """

    if not address or not address.strip():
        return RedirectView(alert=EMPTY_ADDRESS)

    outcome = await service.get_forecast(address, refresh=refresh)
    if isinstance(outcome.result, ErrorResult):
        return RedirectView(alert=outcome.result.message)
    return ForecastView(data=outcome.result, from_cache=outcome.from_cache)
