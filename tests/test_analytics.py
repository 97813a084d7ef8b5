from datetime import datetime, timedelta, timezone

import pytest

from ravehub import analytics
from ravehub.date_utils import EPOCH

from tests.conftest import NOW

UTC = timezone.utc


def ago(**kwargs):
    return NOW - timedelta(**kwargs)


@pytest.fixture
def events():
    return [
        {"id": "e1", "name": "Ultra", "eventStatus": "published", "createdAt": ago(days=3).isoformat()},
        {"id": "e2", "name": "Creamfields", "eventStatus": "draft", "createdAt": {"seconds": ago(days=1).timestamp()}},
    ]


@pytest.fixture
def users():
    return [
        {"id": "u1", "firstName": "Ana", "createdAt": ago(days=2)},
        {"id": "u2", "createdAt": ago(days=2, hours=1)},
        {"id": "u3", "firstName": "Luis", "createdAt": ago(days=60)},
    ]


@pytest.fixture
def transactions():
    return [
        {
            "id": "t1", "status": "approved", "eventId": "e1", "currency": "PEN", "totalAmount": 100,
            "ticketItems": [{"name": "VIP", "quantity": 2}],
            "createdAt": ago(hours=20),
        },
        {
            "id": "t2", "paymentStatus": "approved", "eventId": "e2", "amount": 50, "quantity": 1,
            "createdAt": int(ago(days=10).timestamp() * 1000),
        },
        {"id": "t3", "status": "pending", "totalAmount": 80, "createdAt": ago(days=2)},
        {
            "id": "t4", "status": "approved", "eventId": "gone", "totalAmount": 70,
            "ticketItems": [{"name": "General", "quantity": 3}],
            "createdAt": ago(days=40),
        },
    ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_range_start():
    assert analytics.range_start("7d", NOW) == ago(days=7)
    assert analytics.range_start("24h", NOW) == ago(hours=24)
    assert analytics.range_start("all", NOW) == EPOCH
    assert analytics.range_start("bogus", NOW) == EPOCH


@pytest.mark.parametrize("tx, paid, pending", [
    ({"status": "approved"}, True, False),
    ({"paymentStatus": "approved"}, True, False),
    ({"status": "pending"}, False, True),
    ({"status": "created", "paymentStatus": "pending"}, False, True),
    ({"status": "rejected"}, False, False),
])
def test_payment_status(tx, paid, pending):
    assert analytics.is_paid(tx) is paid
    assert analytics.is_pending(tx) is pending


def test_ticket_quantity_and_amount():
    assert analytics.ticket_quantity({"ticketItems": [{"quantity": 2}, {"quantity": "3"}]}) == 5
    assert analytics.ticket_quantity({"quantity": 4}) == 4
    assert analytics.ticket_quantity({"quantity": "lots"}) == 0
    assert analytics.transaction_amount({"totalAmount": 10, "amount": 99}) == 10
    assert analytics.transaction_amount({"amount": "12.5"}) == 12.5
    assert analytics.transaction_amount({}) == 0


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class TestDashboardStats:
    def test_all_time(self, events, users, transactions):
        stats = analytics.dashboard_stats(events, users, transactions, now=NOW, tz=UTC)
        assert stats.total_events == 2
        assert stats.active_events == 1
        assert stats.total_users == 3
        assert stats.total_tickets == 6
        assert stats.total_revenue == 220
        assert stats.pending_payments == 1

    def test_time_range_filters_transactions(self, events, users, transactions):
        stats = analytics.dashboard_stats(events, users, transactions, time_range="30d", now=NOW, tz=UTC)
        assert stats.total_tickets == 3
        assert stats.total_revenue == 150
        # Counts are never range filtered
        assert stats.total_users == 3

    def test_seven_day_sales_series(self, events, users, transactions):
        stats = analytics.dashboard_stats(events, users, transactions, now=NOW, tz=UTC)
        names = [d["name"] for d in stats.sales_data]
        assert names == ["dom", "lun", "mar", "mié", "jue", "vie", "sáb"]
        assert dict((d["name"], d["sales"]) for d in stats.sales_data)["vie"] == 100
        assert sum(d["sales"] for d in stats.sales_data) == 100

    def test_to_dict_is_camel_case(self, events, users, transactions):
        data = analytics.dashboard_stats(events, users, transactions, now=NOW, tz=UTC).to_dict()
        assert set(data) == {
            "totalEvents", "activeEvents", "totalTickets", "totalUsers",
            "pendingPayments", "totalRevenue", "salesData", "recentActivity",
        }


def test_recent_activity(events, users, transactions):
    activity = analytics.recent_activity(events, users, transactions)
    assert [a.id for a in activity] == ["t1", "e2", "u1", "u2", "e1", "t4", "u3"]
    messages = {a.id: a.message for a in activity}
    assert messages["e1"] == 'Nuevo evento "Ultra" creado'
    assert messages["t1"] == "Pago aprobado por PEN 100"
    assert messages["t4"] == "Pago aprobado por CLP 70"
    assert messages["u2"] == "Nuevo usuario registrado: Usuario"


def test_recent_activity_limit(events, users, transactions):
    assert len(analytics.recent_activity(events, users, transactions, limit=2)) == 2


# ---------------------------------------------------------------------------
# Detailed analytics
# ---------------------------------------------------------------------------

class TestDetailedAnalytics:
    def test_all_time(self, events, users, transactions):
        result = analytics.detailed_analytics(events, users, transactions, now=NOW)

        assert result.sales_trend == [
            {"date": "2025-02-03", "amount": 70.0, "tickets": 3},
            {"date": "2025-03-05", "amount": 50.0, "tickets": 1},
            {"date": "2025-03-14", "amount": 100.0, "tickets": 2},
        ]
        assert result.top_ticket_types == [
            {"name": "General", "value": 3},
            {"name": "VIP", "value": 2},
        ]
        assert result.top_events == [
            {"name": "Ultra", "revenue": 100.0, "tickets": 2},
            {"name": "Evento Desconocido", "revenue": 70.0, "tickets": 3},
            {"name": "Creamfields", "revenue": 50.0, "tickets": 1},
        ]
        assert result.total_revenue == 220
        assert result.total_tickets == 6
        assert result.total_new_users == 3

    def test_user_growth_in_range(self, events, users, transactions):
        result = analytics.detailed_analytics(events, users, transactions, time_range="7d", now=NOW)
        assert result.user_growth == [{"date": "2025-03-13", "count": 2}]
        assert result.total_new_users == 2
        assert result.to_dict()["summary"] == {"totalRevenue": 100.0, "totalTickets": 2, "totalNewUsers": 2}


# ---------------------------------------------------------------------------
# Bio link
# ---------------------------------------------------------------------------

def test_bio_link_stats():
    bio_events = [
        {"type": "page_view", "country": "PE", "timestamp": datetime(2025, 3, 1, 22, 15, tzinfo=UTC)},
        {"type": "page_view", "country": "PE", "timestamp": "2025-03-01T22:45:00Z"},
        {"type": "page_view_unique", "country": "CL", "timestamp": "2025-03-01T22:45:00Z"},
        {"type": "event_click", "targetName": "Ultra", "country": "CL"},
        {"type": "event_click", "targetName": "Ultra"},
        {"type": "event_click"},
        {"type": "whatsapp_click", "targetName": "Lima"},
        {"type": "news_click", "targetName": "Guía"},
    ]
    stats = analytics.bio_link_stats(bio_events, tz=UTC)

    assert stats.total_views == 2
    assert stats.total_clicks == 5
    assert stats.top_events == [{"name": "Ultra", "count": 2}, {"name": "Unknown Event", "count": 1}]
    assert stats.top_groups == [{"name": "Lima", "count": 1}]
    assert stats.top_news == [{"name": "Guía", "count": 1}]
    assert stats.top_countries[0] == {"name": "Unknown", "value": 4}
    assert len(stats.hourly_traffic) == 24
    assert stats.hourly_traffic[22] == {"hour": "22:00", "views": 2}


def test_build_bio_event_prefers_proxy_headers():
    headers = {
        "X-Vercel-IP-Country": "PE",
        "CF-IPCountry": "CL",
        "X-Forwarded-For": "200.1.2.3, 10.0.0.1",
        "User-Agent": "Mozilla/5.0",
    }
    doc = analytics.build_bio_event("event_click", headers, {"targetName": "Ultra", "country": "AR"}, now=NOW)
    assert doc == {
        "type": "event_click",
        "targetName": "Ultra",
        "targetId": None,
        "country": "PE",
        "userAgent": "Mozilla/5.0",
        "ip": "200.1.2.3",
        "timestamp": NOW,
    }


def test_build_bio_event_defaults():
    doc = analytics.build_bio_event("page_view", {}, {"country": "MX"}, now=NOW)
    assert doc["country"] == "MX"
    assert doc["ip"] == "unknown"
    assert doc["userAgent"] == "unknown"
