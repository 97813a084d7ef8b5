"""Admin analytics aggregation.

Everything here works on plain document lists as read from the store
(events, users, ticket transactions, bio-link events) and reduces them in
memory. Queries, limits and ordering that the store would normally apply
are reproduced here so results do not depend on how the lists were loaded.
"""

import logging
from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from .config import LOCAL_TZ
from .date_utils import EPOCH, short_weekday_es, to_datetime
from .models import Activity, BioLinkStats, DashboardStats, DetailedAnalytics

logger = logging.getLogger("ravehub.analytics")

TIME_RANGES = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
    "year": timedelta(days=365),
    "all": None,
}

DASHBOARD_TRANSACTION_LIMIT = 1000
ANALYTICS_TRANSACTION_LIMIT = 2000
ANALYTICS_USER_LIMIT = 1000
ANALYTICS_EVENT_LIMIT = 100
RECENT_ACTIVITY_LIMIT = 10
TOP_LIMIT = 5

PAGE_VIEW_TYPES = {"page_view", "page_view_unique"}

# Headers set by the CDN / proxy in front of the site, in trust order
COUNTRY_HEADERS = ["x-vercel-ip-country", "px-ip-country", "cf-ipcountry", "x-country"]


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------

def range_start(time_range: str, now: Optional[datetime] = None) -> datetime:
    """First instant included in time_range. 'all' and unknown ranges start at the epoch."""
    now = now or datetime.now(timezone.utc)
    span = TIME_RANGES.get(time_range)
    if span is None:
        return EPOCH
    return now - span


def _number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def is_paid(transaction: dict) -> bool:
    return transaction.get("status") == "approved" or transaction.get("paymentStatus") == "approved"


def is_pending(transaction: dict) -> bool:
    return transaction.get("status") == "pending" or transaction.get("paymentStatus") == "pending"


def ticket_quantity(transaction: dict) -> int:
    """Tickets in a transaction: sum of ticketItems, else the flat quantity."""
    items = transaction.get("ticketItems")
    if isinstance(items, list):
        return int(sum(_number(item.get("quantity")) for item in items))
    return int(_number(transaction.get("quantity")))


def transaction_amount(transaction: dict) -> float:
    return _number(transaction.get("totalAmount") or transaction.get("amount"))


def _created_at(doc: dict) -> datetime:
    return to_datetime(doc.get("createdAt")) or EPOCH


def _newest(docs: Iterable[dict], limit: int) -> List[dict]:
    return sorted(docs, key=_created_at, reverse=True)[:limit]


def _in_range(docs: Iterable[dict], start: datetime, time_range: str) -> List[dict]:
    if time_range == "all":
        return list(docs)
    return [d for d in docs if _created_at(d) >= start]


def _ranked(counts: Dict[str, float], key: str = "count", limit: Optional[int] = None) -> List[dict]:
    """[{'name': ..., key: ...}] sorted by value, highest first."""
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [{"name": name, key: value} for name, value in ranked]


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def dashboard_stats(
    events: List[dict],
    users: List[dict],
    transactions: List[dict],
    time_range: str = "all",
    now: Optional[datetime] = None,
    tz=LOCAL_TZ,
) -> DashboardStats:
    """Headline numbers, a seven-day sales series and the activity feed."""
    now = now or datetime.now(timezone.utc)
    start = range_start(time_range, now)

    stats = DashboardStats(
        total_events=len(events),
        active_events=sum(1 for e in events if e.get("eventStatus") == "published"),
        total_users=len(users),
    )

    in_range = _newest(_in_range(transactions, start, time_range), DASHBOARD_TRANSACTION_LIMIT)

    # Last seven local days, oldest first, keyed by short weekday name
    today = now.astimezone(tz).date()
    sales: Dict[str, float] = {}
    for offset in range(6, -1, -1):
        sales[short_weekday_es(today - timedelta(days=offset))] = 0.0
    seven_days_ago = now - timedelta(days=7)

    for t in in_range:
        if is_paid(t):
            amount = transaction_amount(t)
            stats.total_tickets += ticket_quantity(t)
            stats.total_revenue += amount

            created = _created_at(t)
            if created >= seven_days_ago:
                day_name = short_weekday_es(created.astimezone(tz).date())
                if day_name in sales:
                    sales[day_name] += amount

        if is_pending(t):
            stats.pending_payments += 1

    stats.sales_data = [{"name": name, "sales": value} for name, value in sales.items()]
    stats.recent_activity = recent_activity(events, users, transactions)
    return stats


def recent_activity(
    events: List[dict],
    users: List[dict],
    transactions: List[dict],
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> List[Activity]:
    """Newest events, approved payments and sign-ups merged into one feed."""
    activity = []

    for e in _newest(events, limit):
        activity.append(Activity(
            id=str(e.get("id", "")),
            type="event",
            message=f'Nuevo evento "{e.get("name")}" creado',
            timestamp=_created_at(e),
        ))

    approved = [t for t in transactions if t.get("status") == "approved"]
    for t in _newest(approved, limit):
        activity.append(Activity(
            id=str(t.get("id", "")),
            type="payment",
            message=f"Pago aprobado por {t.get('currency') or 'CLP'} {t.get('totalAmount')}",
            timestamp=_created_at(t),
        ))

    for u in _newest(users, limit):
        activity.append(Activity(
            id=str(u.get("id", "")),
            type="user",
            message=f"Nuevo usuario registrado: {u.get('firstName') or 'Usuario'}",
            timestamp=_created_at(u),
        ))

    activity.sort(key=lambda a: a.timestamp, reverse=True)
    return activity[:limit]


# ---------------------------------------------------------------------------
# Detailed analytics
# ---------------------------------------------------------------------------

def detailed_analytics(
    events: List[dict],
    users: List[dict],
    transactions: List[dict],
    time_range: str = "all",
    now: Optional[datetime] = None,
) -> DetailedAnalytics:
    """Per-day trends plus top ticket types and top events by revenue.

    Days are UTC calendar days (YYYY-MM-DD).
    """
    now = now or datetime.now(timezone.utc)
    start = range_start(time_range, now)

    tickets = _newest(_in_range(transactions, start, time_range), ANALYTICS_TRANSACTION_LIMIT)
    new_users = _newest(_in_range(users, start, time_range), ANALYTICS_USER_LIMIT)
    event_names = {e.get("id"): e.get("name") for e in _newest(events, ANALYTICS_EVENT_LIMIT)}

    paid = [t for t in tickets if is_paid(t)]

    revenue_by_day: Dict[str, float] = defaultdict(float)
    tickets_by_day: Dict[str, int] = defaultdict(int)
    ticket_types: Counter = Counter()
    by_event: Dict[str, dict] = {}

    for t in paid:
        day = _created_at(t).date().isoformat()
        amount = transaction_amount(t)
        qty = ticket_quantity(t)
        revenue_by_day[day] += amount
        tickets_by_day[day] += qty

        items = t.get("ticketItems")
        if isinstance(items, list):
            for item in items:
                ticket_types[item.get("name") or "General"] += int(_number(item.get("quantity")))

        event_id = t.get("eventId")
        if event_id:
            entry = by_event.setdefault(event_id, {
                "name": event_names.get(event_id) or "Evento Desconocido",
                "revenue": 0.0,
                "tickets": 0,
            })
            entry["revenue"] += amount
            entry["tickets"] += qty

    users_by_day: Counter = Counter(_created_at(u).date().isoformat() for u in new_users)

    return DetailedAnalytics(
        sales_trend=[
            {"date": day, "amount": revenue_by_day[day], "tickets": tickets_by_day.get(day, 0)}
            for day in sorted(revenue_by_day)
        ],
        top_ticket_types=_ranked(ticket_types, key="value", limit=TOP_LIMIT),
        user_growth=[{"date": day, "count": users_by_day[day]} for day in sorted(users_by_day)],
        top_events=sorted(by_event.values(), key=lambda e: e["revenue"], reverse=True)[:TOP_LIMIT],
        total_revenue=sum(revenue_by_day.values()),
        total_tickets=sum(tickets_by_day.values()),
        total_new_users=len(new_users),
    )


# ---------------------------------------------------------------------------
# Bio link
# ---------------------------------------------------------------------------

def bio_link_stats(bio_events: List[dict], tz=LOCAL_TZ) -> BioLinkStats:
    """Views, clicks and top targets for the link-in-bio page."""
    page_views = [e for e in bio_events if e.get("type") == "page_view"]
    clicks = [e for e in bio_events if e.get("type") not in PAGE_VIEW_TYPES]

    def targets(event_type: str, unknown: str) -> Counter:
        return Counter(
            e.get("targetName") or unknown
            for e in bio_events if e.get("type") == event_type
        )

    countries = Counter(e.get("country") or "Unknown" for e in bio_events)

    hours: Counter = Counter()
    for e in page_views:
        ts = to_datetime(e.get("timestamp"))
        if ts is not None:
            hours[ts.astimezone(tz).hour] += 1

    return BioLinkStats(
        total_views=len(page_views),
        total_clicks=len(clicks),
        top_events=_ranked(targets("event_click", "Unknown Event"), limit=TOP_LIMIT),
        top_groups=_ranked(targets("whatsapp_click", "Unknown Group")),
        top_news=_ranked(targets("news_click", "Unknown News"), limit=TOP_LIMIT),
        top_countries=_ranked(countries, key="value", limit=TOP_LIMIT),
        hourly_traffic=[{"hour": f"{h}:00", "views": hours.get(h, 0)} for h in range(24)],
    )


def build_bio_event(
    event_type: str,
    headers: Dict[str, str],
    metadata: Optional[dict] = None,
    now: Optional[datetime] = None,
) -> dict:
    """Build the document logged for one bio-link interaction.

    Country comes from proxy geo headers when present, otherwise from the
    client supplied metadata. Only the first x-forwarded-for hop is kept.
    """
    metadata = metadata or {}
    lowered = {k.lower(): v for k, v in headers.items()}

    country = next((lowered[h] for h in COUNTRY_HEADERS if lowered.get(h)), None)
    country = country or metadata.get("country")
    forwarded = lowered.get("x-forwarded-for") or "unknown"

    doc = {
        "type": event_type,
        "targetName": metadata.get("targetName"),
        "targetId": metadata.get("targetId"),
        "country": country,
        "userAgent": lowered.get("user-agent") or "unknown",
        "ip": forwarded.split(",")[0].strip(),
        "timestamp": now or datetime.now(timezone.utc),
    }
    logger.info("Logging bio event %s (%s)", event_type, country or "no country")
    return doc
