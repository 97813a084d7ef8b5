"""Configuration for Ravehub core services."""

import os
from zoneinfo import ZoneInfo

# ---------------------------------------------------------------------------
# Public site
# ---------------------------------------------------------------------------
BASE_URL = os.environ.get("RAVEHUB_BASE_URL", "https://www.weareravehub.com").rstrip("/")
PREVIEW_BASE_URL = os.environ.get("RAVEHUB_PREVIEW_BASE_URL", "https://www.ravehublatam.com").rstrip("/")

SITE_NAME = "Ravehub"
SITE_ALTERNATE_NAMES = ["Ravehub", "www.weareravehub.com"]
LOGO_PATH = "/icons/logo.png"
LOGO_WIDTH = 600
LOGO_HEIGHT = 60

# Event and product pages link the regional profiles; blog pages link all three
EVENT_SAME_AS = [
    "https://www.instagram.com/ravehub.pe",
    "https://www.facebook.com/ravehub",
]
BLOG_SAME_AS = [
    "https://www.instagram.com/ravehub",
    "https://www.facebook.com/ravehub",
    "https://twitter.com/ravehub",
]

DEFAULT_COUNTRY = "CL"
DEFAULT_CURRENCY = "CLP"

# ---------------------------------------------------------------------------
# API Keys: set as environment variables
# ---------------------------------------------------------------------------
OPENEXCHANGE_APP_ID = os.environ.get("OPENEXCHANGE_APP_ID", "")
EXCHANGERATE_KEY = os.environ.get("EXCHANGERATE_KEY", "")
CURRENCYFREAKS_KEY = os.environ.get("CURRENCYFREAKS_KEY", "")

# ---------------------------------------------------------------------------
# Exchange rate caching
# RATES_CACHE_PATH persists rates between runs; leave empty for memory only
# ---------------------------------------------------------------------------
RATES_CACHE_PATH = os.environ.get("RAVEHUB_RATES_CACHE", "")
CACHE_DURATION_SECONDS = 60 * 60
REQUEST_TIMEOUT = 5  # seconds

LOCAL_TZ = ZoneInfo(os.environ.get("RAVEHUB_TIMEZONE", "America/Lima"))
LOG_LEVEL = os.environ.get("RAVEHUB_LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Supported currencies
# decimals follows how the storefront displays each currency
# ---------------------------------------------------------------------------
SUPPORTED_CURRENCIES = {
    "USD": {"name": "Dólar estadounidense", "symbol": "$", "decimals": 2, "countries": ["US", "EC", "SV"]},
    "EUR": {"name": "Euro", "symbol": "€", "decimals": 2, "countries": ["ES", "DE", "FR", "IT"]},
    "MXN": {"name": "Peso mexicano", "symbol": "$", "decimals": 2, "countries": ["MX"]},
    "BRL": {"name": "Real brasileño", "symbol": "R$", "decimals": 2, "countries": ["BR"]},
    "CLP": {"name": "Peso chileno", "symbol": "$", "decimals": 0, "countries": ["CL"]},
    "COP": {"name": "Peso colombiano", "symbol": "$", "decimals": 0, "countries": ["CO"]},
    "ARS": {"name": "Peso argentino", "symbol": "$", "decimals": 2, "countries": ["AR"]},
    "PEN": {"name": "Sol peruano", "symbol": "S/", "decimals": 2, "countries": ["PE"]},
    "PYG": {"name": "Guaraní paraguayo", "symbol": "₲", "decimals": 0, "countries": ["PY"]},
    "UYU": {"name": "Peso uruguayo", "symbol": "$U", "decimals": 2, "countries": ["UY"]},
}

# A provider that lacks any of these is rejected outright
CRITICAL_LATAM_CURRENCIES = ["PEN", "CLP", "COP", "ARS", "BRL", "MXN"]


def currency_for_country(country_code: str) -> str:
    """Return the supported currency used in a country, defaulting to USD."""
    code = (country_code or "").upper().strip()
    for currency, info in SUPPORTED_CURRENCIES.items():
        if code in info["countries"]:
            return currency
    return "USD"
