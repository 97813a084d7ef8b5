from datetime import datetime, timezone

import pytest

from ravehub import currency
from ravehub.models import ExchangeRates

# Full LATAM coverage, USD based
SAMPLE_RATES = {
    "USD": 1.0,
    "EUR": 0.92,
    "MXN": 17.0,
    "BRL": 5.0,
    "CLP": 950.0,
    "COP": 3900.0,
    "ARS": 850.0,
    "PEN": 3.75,
    "PYG": 7300.0,
    "UYU": 39.0,
}

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_rates_cache(monkeypatch):
    """Every test starts with an empty memory cache and no disk cache."""
    monkeypatch.setattr(currency, "RATES_CACHE_PATH", "")
    currency._rates_cache = None
    yield
    currency._rates_cache = None


@pytest.fixture
def sample_rates():
    return ExchangeRates(base="USD", rates=dict(SAMPLE_RATES), timestamp=1700000000.0, provider="Test")
