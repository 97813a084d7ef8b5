import json
from unittest.mock import patch

import pytest

from ravehub import currency
from ravehub.main import run
from ravehub.models import ExchangeRates

from tests.conftest import SAMPLE_RATES


@pytest.fixture
def write_json(tmp_path):
    def write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return write


def test_installments(capsys):
    assert run(["installments", "300", "50", "3", "2025-01-31"]) == 0
    out = capsys.readouterr().out
    assert "Reserva: 50.00  Saldo: 250.00" in out
    assert "Cuota 3:      83.34  vence 2025-03-31" in out


def test_installments_invalid(capsys):
    assert run(["installments", "100", "100", "2", "2025-01-01"]) == 1
    assert "ERROR: Reservation amount" in capsys.readouterr().out


def test_convert(capsys):
    rates = ExchangeRates(base="USD", rates=dict(SAMPLE_RATES), timestamp=0, provider="Test")
    with patch.object(currency, "get_exchange_rates", return_value=rates):
        assert run(["convert", "100", "usd", "pen"]) == 0
    assert "$100,00 USD = S/375,00 PEN (rate 3.750000)" in capsys.readouterr().out


def test_schema_json(write_json, capsys):
    path = write_json("fest.json", {"name": "Creamfields", "slug": "creamfields"})
    assert run(["schema", "festival", path]) == 0
    graph = json.loads(capsys.readouterr().out)
    assert graph["@graph"][3]["@type"] == "MusicFestival"


def test_schema_script_tag(write_json, capsys):
    path = write_json("event.json", {"name": "<Ultra>", "slug": "ultra"})
    assert run(["schema", "event", path, "--script"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith('<script type="application/ld+json">')
    assert "<Ultra>" not in out


def test_stats(write_json, capsys):
    path = write_json("export.json", {
        "events": [{"id": "e1", "eventStatus": "published"}],
        "users": [{"id": "u1"}],
        "transactions": [{"id": "t1", "status": "approved", "totalAmount": 10, "quantity": 2}],
    })
    assert run(["stats", path]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["activeEvents"] == 1
    assert data["totalTickets"] == 2
    assert data["totalRevenue"] == 10


def test_bio_stats_accepts_plain_list(write_json, capsys):
    path = write_json("bio.json", [{"type": "page_view"}, {"type": "event_click", "targetName": "Ultra"}])
    assert run(["bio-stats", path]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["totalViews"] == 1
    assert data["topEvents"] == [{"name": "Ultra", "count": 1}]


def test_validate_not_ready(write_json, capsys):
    path = write_json("draft.json", {"name": "Borrador"})
    assert run(["validate", path]) == 1
    out = capsys.readouterr().out
    assert "(NOT READY)" in out
    assert "[ERROR] slug:" in out


def test_missing_file_returns_error(tmp_path):
    assert run(["schema", "festival", str(tmp_path / "nope.json")]) == 2


def test_bad_json_returns_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{oops")
    assert run(["stats", str(path)]) == 2
