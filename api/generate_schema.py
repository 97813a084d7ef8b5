"""Vercel serverless function that builds JSON-LD for a posted document."""

import json
import logging
import sys
from http.server import BaseHTTPRequestHandler
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ravehub import schema

logger = logging.getLogger("ravehub.api.generate_schema")


def build_schema(schema_type, data):
    if schema_type == "event":
        return schema.generate_event_schema(data)
    return schema.generate(schema_type, data)


class handler(BaseHTTPRequestHandler):
    def do_POST(self):
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length)

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, ValueError):
            return self._json_response(400, {"error": "Invalid JSON"})

        if not isinstance(payload, dict):
            return self._json_response(400, {"error": "Invalid JSON"})

        schema_type = payload.get("type")
        data = payload.get("data")
        if not schema_type or not isinstance(data, dict):
            return self._json_response(400, {"error": "Missing required fields: type, data"})
        if not isinstance(schema_type, str):
            return self._json_response(400, {"error": "type must be a string"})

        try:
            result = build_schema(schema_type, data)
        except schema.UnsupportedSchemaTypeError as e:
            return self._json_response(400, {"error": str(e)})
        except Exception:
            logger.exception("Schema generation failed for type %s", schema_type)
            return self._json_response(500, {"error": "Failed to generate schema"})

        return self._json_response(200, {"schema": result})

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
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
