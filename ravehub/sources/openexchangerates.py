"""Open Exchange Rates source (primary).

API Docs: https://docs.openexchangerates.org/reference/latest-json
Free plan is USD-based only, which is all we need.
Get an App ID: https://openexchangerates.org/signup
"""

import logging
import time

import requests

from ..models import ExchangeRates, ProviderResult
from ..config import OPENEXCHANGE_APP_ID, REQUEST_TIMEOUT, SUPPORTED_CURRENCIES

logger = logging.getLogger("ravehub.sources.openexchangerates")

SOURCE_NAME = "OpenExchangeRates"
BASE_URL = "https://openexchangerates.org/api/latest.json"


def fetch(base_currency: str = "USD") -> ProviderResult:
    """Fetch latest rates from Open Exchange Rates.

    base_currency is accepted for a uniform provider signature; the free
    plan always answers relative to USD.
    """
    result = ProviderResult(provider_name=SOURCE_NAME)

    if not OPENEXCHANGE_APP_ID:
        result.success = False
        result.error_message = "No API key configured (set OPENEXCHANGE_APP_ID)"
        logger.warning(result.error_message)
        return result

    try:
        params = {
            "app_id": OPENEXCHANGE_APP_ID,
            "symbols": ",".join(SUPPORTED_CURRENCIES),
        }
        response = requests.get(
            BASE_URL,
            params=params,
            headers={"Accept": "application/json"},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        result.rates = _parse_rates(response.json())

    except requests.exceptions.RequestException as e:
        result.success = False
        result.error_message = f"API request failed: {type(e).__name__}"
    except (KeyError, ValueError, TypeError) as e:
        result.success = False
        result.error_message = f"Invalid response: {str(e)[:100]}"

    if not result.success:
        logger.warning("Open Exchange Rates failed: %s", result.error_message)
    return result


def _parse_rates(data: dict) -> ExchangeRates:
    rates = data.get("rates")
    if not rates:
        raise ValueError("no rates data")

    timestamp = data.get("timestamp")
    return ExchangeRates(
        base=data.get("base") or "USD",
        rates={code: float(rate) for code, rate in rates.items()},
        timestamp=float(timestamp) if timestamp else time.time(),
        provider=SOURCE_NAME,
    )
