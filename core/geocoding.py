# =============================================================================
# core/geocoding.py  —  Geocoding Resolver (alerts only)
# =============================================================================
#
# WHY IS THIS NEEDED?
#   /weather and /forecast accept "City,CC" directly.  One Call 3.0 (alerts)
#   only accepts coordinates.  So the alerts operation first asks the
#   direct-geocoding endpoint "where is Miami,US?" and then fetches alerts
#   for the answer.
#
# THE THREE WAYS THIS CAN END:
#   Success(GeocodeResult)        → go on to the alerts call
#   Failure(not_found=True)       → the provider has never heard of the place
#   Failure(not_found=False)      → anything else (auth, network, bad JSON…)
#
#   The alerts operation words the first failure as "City not found: …" and
#   everything else as a generic "Unable to resolve location".
# =============================================================================

import logging

from core import transport
from core.config import WeatherSettings
from core.errors import CITY_NOT_FOUND, HINT_GEOCODING
from core.models import Failure, Location, ProviderOutcome, Success
from core.parsing import parse_geocode
from core.urls import geocode_url

logger = logging.getLogger(__name__)


def resolve_location(location: Location, api_key: str, settings: WeatherSettings) -> ProviderOutcome:
    """Resolve a free-text location to coordinates and the provider's own name.

    The resolved name ("Miami,US") comes from the provider's normalized
    values, not the caller's input ("miami , us").
    """
    outcome = transport.send(geocode_url(location, api_key, settings), hint=HINT_GEOCODING)
    if isinstance(outcome, Failure):
        return Failure(
            outcome.message,
            status_code=outcome.status_code,
            not_found=outcome.message == CITY_NOT_FOUND,
        )

    parsed = parse_geocode(outcome.value)
    if isinstance(parsed, Failure):
        logger.warning("Unexpected geocoding response for %s: %s", location, parsed.message)
        return parsed
    if parsed.value is None:
        return Failure(f"Location not found: {location}", not_found=True)

    logger.info("Resolved %s to %s (%s, %s)", location, parsed.value.resolved_name,
                parsed.value.latitude, parsed.value.longitude)
    return Success(parsed.value)
