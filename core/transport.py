# =============================================================================
# core/transport.py  —  Transport Adapter (one GET, one outcome)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues a single HTTP GET to the provider and turns WHATEVER happens into
#   a Success (decoded JSON) or a Failure (user-facing message).  It never
#   raises for a bad status, a timeout, or a dead network.  The caller only
#   ever has to check which of the two it got.
#
# HOW IT WORKS:
#   1. Log the URL, with the API key masked (see redact()).
#   2. GET with a fixed 10-second timeout.  No retries: a transient failure
#      is reported, not hidden.
#   3. Non-2xx → read the body, hand (status, body, hint) to the normalizer.
#   4. 2xx → decode the JSON with Decimal floats, so "12.50" stays "12.50".
#
# RESOURCE RULE:
#   The response (or the HTTPError, which carries its own open body) is
#   closed on every exit path.
# =============================================================================

import json
import logging
import re
from decimal import Decimal
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from core.errors import (
    NETWORK_ERROR,
    PROVIDER_TIMEOUT,
    UNEXPECTED_ERROR,
    UNREADABLE_RESPONSE,
    map_provider_error,
)
from core.models import Failure, ProviderOutcome, Success

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = 10
USER_AGENT = "openweather-mcp/0.1"

_KEY_VALUE = re.compile(r"(appid=)[^&]*", re.IGNORECASE)
_MASK = "****"


def redact(url: str) -> str:
    """Mask the API key in a URL so it can be logged.

    "…?q=Oslo&appid=SECRET123&units=metric" → "…?q=Oslo&appid=****&units=metric"
    Everything from the next "&" onwards is kept untouched.
    """
    return _KEY_VALUE.sub(lambda match: match.group(1) + _MASK, url, count=1)


def send(url: str, hint: Optional[str] = None) -> ProviderOutcome:
    """GET `url` and return the decoded document or a normalized failure.

    Args:
        url: Fully built provider URL (including the API key).
        hint: Which endpoint this is ("current", "forecast", "geocoding",
              "onecall").  The normalizer uses it to word 401/403 errors.
    """
    label = hint or "request"
    try:
        logger.debug("HTTP GET %s", redact(url))
        status, raw = _fetch(url)
    except URLError as err:
        # urlopen wraps connect-phase timeouts in URLError
        if isinstance(err.reason, TimeoutError):
            logger.warning("Timeout calling provider for %s", label)
            return Failure(PROVIDER_TIMEOUT)
        logger.warning("Network error calling provider for %s: %s", label, err.reason)
        return Failure(NETWORK_ERROR)
    except TimeoutError:
        logger.warning("Timeout calling provider for %s", label)
        return Failure(PROVIDER_TIMEOUT)
    except OSError as err:
        logger.warning("Network error calling provider for %s: %s", label, err)
        return Failure(NETWORK_ERROR)
    except Exception:
        logger.exception("Unexpected error calling provider for %s", label)
        return Failure(UNEXPECTED_ERROR)

    if status is not None:
        body = raw.decode("utf-8", errors="replace")
        message = map_provider_error(status, body, hint)
        logger.info("Provider returned %s for %s: %s", status, label, message)
        return Failure(message, status_code=status)

    try:
        document = json.loads(raw.decode("utf-8"), parse_float=Decimal)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        logger.warning("Provider sent a body that is not JSON for %s", label)
        return Failure(UNREADABLE_RESPONSE)
    return Success(document)


def _fetch(url: str) -> tuple[Optional[int], bytes]:
    """GET `url` and return (error status or None, body bytes).

    A non-2xx answer comes back as its status and body rather than an
    HTTPError, so that a timeout or reset while reading the error body is
    raised here, inside send()'s own try block.
    """
    request = Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urlopen(request, timeout=TIMEOUT_SECONDS) as response:
            return None, response.read()
    except HTTPError as err:
        try:
            return err.code, err.read()
        finally:
            err.close()
