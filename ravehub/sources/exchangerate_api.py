"""ExchangeRate-API source (secondary).

API Docs: https://www.exchangerate-api.com/docs/standard-requests
Free tier: 1,500 requests/month. Answers for any base currency.
"""

import logging

import requests

from ..models import ExchangeRates, ProviderResult
from ..config import EXCHANGERATE_KEY, REQUEST_TIMEOUT, SUPPORTED_CURRENCIES

logger = logging.getLogger("ravehub.sources.exchangerate_api")

SOURCE_NAME = "ExchangeRate-API"
BASE_URL = "https://v6.exchangerate-api.com/v6"


def fetch(base_currency: str = "USD") -> ProviderResult:
    """Fetch latest rates for base_currency from ExchangeRate-API."""
    result = ProviderResult(provider_name=SOURCE_NAME)

    if not EXCHANGERATE_KEY:
        result.success = False
        result.error_message = "No API key configured (set EXCHANGERATE_KEY)"
        logger.warning(result.error_message)
        return result

    try:
        response = requests.get(
            f"{BASE_URL}/{EXCHANGERATE_KEY}/latest/{base_currency}",
            headers={"Accept": "application/json"},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        result.rates = _parse_rates(response.json())

    except requests.exceptions.RequestException as e:
        # The key is part of the URL; keep it out of the message
        result.success = False
        result.error_message = f"API request failed: {type(e).__name__}"
    except (KeyError, ValueError, TypeError) as e:
        result.success = False
        result.error_message = f"Invalid response: {str(e)[:100]}"

    if not result.success:
        logger.warning("ExchangeRate-API failed: %s", result.error_message)
    return result


def _parse_rates(data: dict) -> ExchangeRates:
    if data.get("result") != "success" or not data.get("conversion_rates"):
        raise ValueError(f"result={data.get('result')!r}")

    # Only keep the currencies we sell in
    conversion_rates = data["conversion_rates"]
    rates = {
        code: float(conversion_rates[code])
        for code in SUPPORTED_CURRENCIES
        if conversion_rates.get(code)
    }

    return ExchangeRates(
        base=data["base_code"],
        rates=rates,
        timestamp=float(data.get("time_last_update_unix") or 0),
        provider=SOURCE_NAME,
    )
