"""Currency conversion with multiple rate providers and a time-based cache.

Rates are looked up in this order:
    1. in-memory cache (younger than CACHE_DURATION_SECONDS)
    2. on-disk cache at RATES_CACHE_PATH, when configured
    3. each provider in sources.PROVIDERS, first acceptable answer wins
    4. default 1:1 rates, never cached

A provider answer (cached or fresh) is only acceptable if it covers every
currency in CRITICAL_LATAM_CURRENCIES.
"""

import json
import logging
import math
import time
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import List, Optional

from .config import (
    CACHE_DURATION_SECONDS,
    CRITICAL_LATAM_CURRENCIES,
    RATES_CACHE_PATH,
    SUPPORTED_CURRENCIES,
)
from .models import CachedRates, ConversionResult, ExchangeRates
from .sources import PROVIDERS

logger = logging.getLogger("ravehub.currency")

DEFAULT_PROVIDER = "default"

_rates_cache: Optional[CachedRates] = None


# ---------------------------------------------------------------------------
# Cache helpers
# ---------------------------------------------------------------------------

def _cache_path() -> Optional[Path]:
    return Path(RATES_CACHE_PATH) if RATES_CACHE_PATH else None


def _load_disk_cache() -> Optional[CachedRates]:
    """Load the rates cache file. Returns None when missing or unreadable."""
    path = _cache_path()
    if path is None or not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return CachedRates.from_dict(json.load(f))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, OSError) as e:
        logger.warning("Rates cache file corrupt or unreadable (%s), ignoring", e)
        return None


def _save_disk_cache(cached: CachedRates) -> None:
    path = _cache_path()
    if path is None:
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cached.to_dict(), f, indent=2)
    except OSError as e:
        logger.warning("Could not write rates cache %s: %s", path, e)


def _remove_disk_cache() -> None:
    path = _cache_path()
    if path is not None and path.exists():
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Could not remove rates cache %s: %s", path, e)


def clear_exchange_rates_cache() -> None:
    """Forget cached rates, in memory and on disk."""
    global _rates_cache
    _rates_cache = None
    _remove_disk_cache()


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

def validate_latam_support(rates: ExchangeRates) -> bool:
    """True if every critical LATAM currency has a rate (or is the base)."""
    missing = [
        currency for currency in CRITICAL_LATAM_CURRENCIES
        if not rates.rates.get(currency) and currency != rates.base
    ]
    if missing:
        logger.error(
            "Provider %s does not support critical LATAM currencies: %s",
            rates.provider, ", ".join(missing),
        )
        return False
    return True


def default_rates(now: Optional[float] = None) -> ExchangeRates:
    """1:1 rates for every supported currency."""
    return ExchangeRates(
        base="USD",
        rates={currency: 1.0 for currency in SUPPORTED_CURRENCIES},
        timestamp=time.time() if now is None else now,
        provider=DEFAULT_PROVIDER,
    )


def get_exchange_rates(base_currency: str = "USD", now: Optional[float] = None) -> ExchangeRates:
    """Return current exchange rates, falling back across providers."""
    global _rates_cache
    now = time.time() if now is None else now

    # ---- Memory cache ----
    if _rates_cache is not None and _rates_cache.age(now) < CACHE_DURATION_SECONDS:
        if validate_latam_support(_rates_cache.rates):
            logger.info("Using cached exchange rates from %s", _rates_cache.rates.provider)
            return _rates_cache.rates
        logger.warning("Cached provider lacks LATAM support, fetching new rates")
        _rates_cache = None

    # ---- Disk cache ----
    disk = _load_disk_cache()
    if disk is not None and disk.age(now) < CACHE_DURATION_SECONDS:
        if validate_latam_support(disk.rates):
            logger.info("Using disk cached exchange rates from %s", disk.rates.provider)
            _rates_cache = disk
            return disk.rates
        logger.warning("Disk cached provider lacks LATAM support, clearing cache")
        _remove_disk_cache()

    # ---- Providers, in order ----
    for provider in PROVIDERS:
        logger.info("Trying provider: %s", provider.SOURCE_NAME)
        result = provider.fetch(base_currency)
        if not result.success or not result.rates_found:
            logger.info("Skipping %s", result.status_line)
            continue

        rates = result.rates
        if not validate_latam_support(rates):
            logger.warning("%s rejected, skipping to next provider", provider.SOURCE_NAME)
            continue

        logger.info(
            "Loaded %d rates from %s (base %s)",
            result.rates_found, provider.SOURCE_NAME, rates.base,
        )
        missing = [
            currency for currency in SUPPORTED_CURRENCIES
            if not rates.rates.get(currency)
            and currency != rates.base
            and currency not in CRITICAL_LATAM_CURRENCIES
        ]
        if missing:
            logger.warning(
                "%s is missing optional currencies: %s",
                provider.SOURCE_NAME, ", ".join(missing),
            )

        _rates_cache = CachedRates(rates=rates, fetched_at=now)
        _save_disk_cache(_rates_cache)
        return rates

    logger.warning("All exchange rate providers failed, using default rates")
    return default_rates(now)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def convert_currency(
    amount: float,
    from_currency: str,
    to_currency: str,
    now: Optional[float] = None,
) -> ConversionResult:
    """Convert amount between currencies through the rates' base currency.

    A leg whose rate is missing falls back to 1:1 and is logged as an error;
    the conversion itself never fails.
    """
    from_currency = from_currency.upper()
    to_currency = to_currency.upper()
    timestamp = time.time() if now is None else now

    if from_currency == to_currency:
        return ConversionResult(
            amount=amount,
            from_currency=from_currency,
            to_currency=to_currency,
            original_amount=amount,
            rate=1.0,
            timestamp=timestamp,
        )

    rates = get_exchange_rates(now=now)

    rate = 1.0
    if rates.base != from_currency:
        from_rate = rates.rates.get(from_currency)
        if from_rate:
            rate /= from_rate
        else:
            _log_missing_rate(from_currency, rates)

    if rates.base != to_currency:
        to_rate = rates.rates.get(to_currency)
        if to_rate:
            rate *= to_rate
        else:
            _log_missing_rate(to_currency, rates)

    converted = amount * rate
    logger.info(
        "%s %s -> %.2f %s (rate %.6f, %s)",
        amount, from_currency, converted, to_currency, rate, rates.provider,
    )

    return ConversionResult(
        amount=converted,
        from_currency=from_currency,
        to_currency=to_currency,
        original_amount=amount,
        rate=rate,
        timestamp=timestamp,
        provider=rates.provider,
    )


def _log_missing_rate(currency: str, rates: ExchangeRates) -> None:
    logger.error(
        "No rate for %s from %s (available: %s); falling back to 1:1",
        currency, rates.provider, ", ".join(sorted(rates.rates)),
    )


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def format_price(amount: float, currency: str) -> str:
    """Format a price the way the storefront shows it, e.g. 'S/1234,50 PEN'."""
    info = SUPPORTED_CURRENCIES.get(currency)
    if not math.isfinite(amount):
        return f"{amount} {currency}"
    if not info:
        return f"{amount:.2f} {currency}"
    return f"{info['symbol']}{_format_number_es(amount, info['decimals'])} {currency}"


def _format_number_es(amount: float, decimals: int) -> str:
    """es-ES number format: ',' decimals, '.' thousands from five digits up."""
    quantum = Decimal(1).scaleb(-decimals)
    value = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):.{decimals}f}".partition(".")
    if len(integer) >= 5:
        integer = f"{int(integer):,}".replace(",", ".")
    return sign + integer + (f",{fraction}" if fraction else "")


def get_currency_symbol(currency: str) -> str:
    info = SUPPORTED_CURRENCIES.get(currency)
    return info["symbol"] if info else currency


def get_currency_name(currency: str) -> str:
    info = SUPPORTED_CURRENCIES.get(currency)
    return info["name"] if info else currency


def get_supported_currencies() -> List[dict]:
    return [
        {"code": code, "name": info["name"], "symbol": info["symbol"], "decimals": info["decimals"]}
        for code, info in SUPPORTED_CURRENCIES.items()
    ]
