"""Exchange rate providers, in fallback order.

Every provider module exposes fetch(base_currency) -> ProviderResult and
never raises for network or payload problems.
"""

from . import currencyfreaks, exchangerate_api, openexchangerates

# Only providers with full LATAM coverage belong here. Frankfurter was
# dropped because it has no PEN, CLP, COP, ARS, PYG or UYU.
PROVIDERS = [openexchangerates, exchangerate_api, currencyfreaks]
