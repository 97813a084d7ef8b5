"""Vercel serverless function for currency conversion."""

import json
import math
import sys
from http.server import BaseHTTPRequestHandler
from pathlib import Path
from urllib.parse import parse_qs, urlparse

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ravehub.config import SUPPORTED_CURRENCIES, currency_for_country
from ravehub.currency import convert_currency, format_price


def parse_params(path):
    """Return (amount, from, to) from the query string, or raise ValueError.

    Without "to", a "country" code picks the currency used there.
    """
    query = parse_qs(urlparse(path).query)
    amount = query.get("amount", [""])[0]
    from_currency = query.get("from", [""])[0].upper()
    to_currency = query.get("to", [""])[0].upper()
    country = query.get("country", [""])[0]
    if not to_currency and country:
        to_currency = currency_for_country(country)

    if not amount or not from_currency or not to_currency:
        raise ValueError("amount, from and to are required")
    try:
        amount = float(amount)
    except ValueError:
        raise ValueError(f"Invalid amount: {amount}")
    if not math.isfinite(amount):
        raise ValueError(f"Invalid amount: {amount}")
    for code in (from_currency, to_currency):
        if code not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {code}")
    return amount, from_currency, to_currency


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        try:
            amount, from_currency, to_currency = parse_params(self.path)
        except ValueError as e:
            return self._json_response(400, {"error": str(e)})

        result = convert_currency(amount, from_currency, to_currency)
        if not math.isfinite(result.amount):
            return self._json_response(400, {"error": f"Amount out of range: {amount}"})
        data = result.to_dict()
        data["formatted"] = format_price(result.amount, result.to_currency)
        return self._json_response(200, data)

    def do_OPTIONS(self):
        self.send_response(200)
        self._send_cors_headers()
        self.end_headers()

    def _json_response(self, status, data):
        self.send_response(status)
        self._send_cors_headers()
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def _send_cors_headers(self):
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
