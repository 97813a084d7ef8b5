"""Data models for Ravehub core services."""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


@dataclass
class ExchangeRates:
    """Rates table relative to a base currency."""
    base: str
    rates: Dict[str, float]
    timestamp: float  # epoch seconds
    provider: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ExchangeRates":
        return cls(
            base=data["base"],
            rates={k: float(v) for k, v in data["rates"].items()},
            timestamp=float(data["timestamp"]),
            provider=data["provider"],
        )


@dataclass
class CachedRates:
    """Exchange rates plus the moment we fetched them."""
    rates: ExchangeRates
    fetched_at: float  # epoch seconds

    def age(self, now: float) -> float:
        return now - self.fetched_at

    def to_dict(self) -> dict:
        return {"rates": self.rates.to_dict(), "fetched_at": self.fetched_at}

    @classmethod
    def from_dict(cls, data: dict) -> "CachedRates":
        return cls(
            rates=ExchangeRates.from_dict(data["rates"]),
            fetched_at=float(data["fetched_at"]),
        )


@dataclass
class ProviderResult:
    """Result from a single exchange rate provider."""
    provider_name: str
    rates: Optional[ExchangeRates] = None
    success: bool = True
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def rates_found(self) -> int:
        return len(self.rates.rates) if self.rates else 0

    @property
    def status_line(self) -> str:
        if not self.success:
            return f"{self.provider_name}: ERROR - {self.error_message}"
        return f"{self.provider_name}: {self.rates_found} rate(s) loaded"


@dataclass
class ConversionResult:
    """Outcome of converting an amount between two currencies."""
    amount: float
    from_currency: str
    to_currency: str
    original_amount: float
    rate: float
    timestamp: float
    provider: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------

@dataclass
class Activity:
    """One entry in the admin dashboard activity feed."""
    id: str
    type: str  # event | payment | user
    message: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class DashboardStats:
    total_events: int = 0
    active_events: int = 0
    total_tickets: int = 0
    total_users: int = 0
    pending_payments: int = 0
    total_revenue: float = 0.0
    sales_data: List[dict] = field(default_factory=list)
    recent_activity: List[Activity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalEvents": self.total_events,
            "activeEvents": self.active_events,
            "totalTickets": self.total_tickets,
            "totalUsers": self.total_users,
            "pendingPayments": self.pending_payments,
            "totalRevenue": self.total_revenue,
            "salesData": self.sales_data,
            "recentActivity": [a.to_dict() for a in self.recent_activity],
        }


@dataclass
class DetailedAnalytics:
    sales_trend: List[dict] = field(default_factory=list)
    top_ticket_types: List[dict] = field(default_factory=list)
    user_growth: List[dict] = field(default_factory=list)
    top_events: List[dict] = field(default_factory=list)
    total_revenue: float = 0.0
    total_tickets: int = 0
    total_new_users: int = 0

    def to_dict(self) -> dict:
        return {
            "salesTrend": self.sales_trend,
            "topTicketTypes": self.top_ticket_types,
            "userGrowth": self.user_growth,
            "topEvents": self.top_events,
            "summary": {
                "totalRevenue": self.total_revenue,
                "totalTickets": self.total_tickets,
                "totalNewUsers": self.total_new_users,
            },
        }


@dataclass
class BioLinkStats:
    total_views: int = 0
    total_clicks: int = 0
    top_events: List[dict] = field(default_factory=list)
    top_groups: List[dict] = field(default_factory=list)
    top_news: List[dict] = field(default_factory=list)
    top_countries: List[dict] = field(default_factory=list)
    hourly_traffic: List[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalViews": self.total_views,
            "totalClicks": self.total_clicks,
            "topEvents": self.top_events,
            "topGroups": self.top_groups,
            "topNews": self.top_news,
            "topCountries": self.top_countries,
            "hourlyTraffic": self.hourly_traffic,
        }


# ---------------------------------------------------------------------------
# Installments
# ---------------------------------------------------------------------------

@dataclass
class Installment:
    number: int
    amount: float
    due_date: date


@dataclass
class InstallmentPlan:
    success: bool = True
    error_message: Optional[str] = None
    total_amount: float = 0.0
    reservation_amount: float = 0.0
    remaining_amount: float = 0.0
    monthly_amount: float = 0.0  # approximate, for display
    installments: List[Installment] = field(default_factory=list)

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error_message}
        return {
            "success": True,
            "totalAmount": self.total_amount,
            "reservationAmount": self.reservation_amount,
            "remainingAmount": self.remaining_amount,
            "monthlyAmount": self.monthly_amount,
            "installments": [
                {
                    "installmentNumber": i.number,
                    "amount": i.amount,
                    "dueDate": i.due_date.isoformat(),
                }
                for i in self.installments
            ],
        }


# ---------------------------------------------------------------------------
# SEO preview
# ---------------------------------------------------------------------------

@dataclass
class PreviewIssue:
    severity: str  # error | warning | info
    field: str
    message: str
    current: object = None
    expected: object = None


@dataclass
class PreviewValidationResult:
    is_valid: bool
    score: int
    issues: List[PreviewIssue] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def errors(self) -> List[PreviewIssue]:
        return [i for i in self.issues if i.severity == "error"]

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "score": self.score,
            "issues": [asdict(i) for i in self.issues],
            "recommendations": self.recommendations,
        }
