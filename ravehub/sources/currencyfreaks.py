"""CurrencyFreaks source (tertiary).

API Docs: https://currencyfreaks.com/documentation.html
Rates come back as strings; dates look like "2024-05-02 00:00:00+00".
"""

import logging
import re
import time

import requests

from ..date_utils import to_datetime
from ..models import ExchangeRates, ProviderResult
from ..config import CURRENCYFREAKS_KEY, REQUEST_TIMEOUT, SUPPORTED_CURRENCIES

logger = logging.getLogger("ravehub.sources.currencyfreaks")

SOURCE_NAME = "CurrencyFreaks"
BASE_URL = "https://api.currencyfreaks.com/latest"

# Hour-only UTC offset after a time of day, e.g. "00:00:00+00"
_SHORT_OFFSET = re.compile(r"\d:\d{2}[+-]\d{2}$")


def fetch(base_currency: str = "USD") -> ProviderResult:
    """Fetch latest rates from CurrencyFreaks (USD based)."""
    result = ProviderResult(provider_name=SOURCE_NAME)

    if not CURRENCYFREAKS_KEY:
        result.success = False
        result.error_message = "No API key configured (set CURRENCYFREAKS_KEY)"
        logger.warning(result.error_message)
        return result

    try:
        params = {
            "apikey": CURRENCYFREAKS_KEY,
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
        logger.warning("CurrencyFreaks failed: %s", result.error_message)
    return result


def _parse_rates(data: dict) -> ExchangeRates:
    rates = data.get("rates")
    if not rates:
        raise ValueError("no rates data")

    timestamp = time.time()
    raw_date = data.get("date")
    if raw_date:
        parsed = to_datetime(_fix_offset(raw_date))
        if parsed:
            timestamp = parsed.timestamp()

    return ExchangeRates(
        base=data.get("base") or "USD",
        rates={code: float(rate) for code, rate in rates.items()},
        timestamp=timestamp,
        provider=SOURCE_NAME,
    )


def _fix_offset(text: str) -> str:
    """'2024-05-02 00:00:00+00' -> '2024-05-02 00:00:00+00:00'."""
    text = text.strip()
    if _SHORT_OFFSET.search(text):
        return text + ":00"
    return text
