"""Canonical data models."""

from dataclasses import dataclass, field
from datetime import datetime

# Default values for usage fields absent from a thread file
USAGE_DEFAULTS: dict[str, int | float] = {
    "inputTokens": 0,
    "outputTokens": 0,
    "cacheReadInputTokens": 0,
    "credits": 0,
}

UNKNOWN_MODEL = "unknown"


@dataclass
class ThreadUsage:
    """Token and credit usage reported on an assistant message."""

    model: str = UNKNOWN_MODEL
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_input_tokens: int = 0
    credits: float = 0

    @property
    def total_tokens(self) -> int:
        """Tokens billed for this entry (input + output + cache reads)."""
        return self.input_tokens + self.output_tokens + self.cache_read_input_tokens


@dataclass
class ThreadMessage:
    """A single message within a thread."""

    role: str  # user, assistant
    usage: ThreadUsage | None = None
    file_uris: list[str] = field(default_factory=list)


@dataclass
class ThreadRecord:
    """One saved Amp conversation thread."""

    id: str
    created: int  # Unix timestamp (milliseconds)
    messages: list[ThreadMessage] = field(default_factory=list)


@dataclass
class UsageSummary:
    """Aggregate counters for the threads of one year."""

    total_input_tokens: int = 0
    total_output_tokens: int = 0
    total_cache_read_tokens: int = 0
    total_tokens: int = 0
    total_credits: float = 0
    total_messages: int = 0
    total_sessions: int = 0
    model_token_totals: dict[str, int] = field(default_factory=dict)
    model_credit_totals: dict[str, float] = field(default_factory=dict)
    daily_activity: dict[str, int] = field(default_factory=dict)
    projects: set[str] = field(default_factory=set)
    first_timestamp: int | None = None  # Unix timestamp (milliseconds)

    @classmethod
    def empty(cls) -> "UsageSummary":
        """Summary with every counter at zero."""
        return cls()


@dataclass
class ModelStats:
    id: str
    name: str
    provider_id: str
    count: int
    percentage: float
    credits: float


@dataclass
class ProviderStats:
    id: str
    name: str
    count: int
    percentage: float


@dataclass
class MostActiveDay:
    date: str  # YYYY-MM-DD
    count: int
    formatted_date: str  # e.g. "Jan 5"


@dataclass
class WeekdayActivity:
    counts: list[int]  # Sunday..Saturday
    most_active_day: int
    most_active_day_name: str
    max_count: int


@dataclass
class WrappedStats:
    """Presentation-ready statistics for one year."""

    year: int
    first_session_date: datetime
    days_since_first_session: int
    total_sessions: int
    total_messages: int
    total_projects: int
    total_input_tokens: int
    total_output_tokens: int
    total_tokens: int
    total_cache_read_tokens: int
    cache_hit_rate: float
    total_credits: float
    has_credits: bool
    top_models: list[ModelStats]
    top_providers: list[ProviderStats]
    max_streak: int
    current_streak: int
    max_streak_days: set[str]
    daily_activity: dict[str, int]
    most_active_day: MostActiveDay | None
    weekday_activity: WeekdayActivity

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "year": self.year,
            "first_session_date": self.first_session_date.isoformat(),
            "days_since_first_session": self.days_since_first_session,
            "total_sessions": self.total_sessions,
            "total_messages": self.total_messages,
            "total_projects": self.total_projects,
            "total_input_tokens": self.total_input_tokens,
            "total_output_tokens": self.total_output_tokens,
            "total_tokens": self.total_tokens,
            "total_cache_read_tokens": self.total_cache_read_tokens,
            "cache_hit_rate": self.cache_hit_rate,
            "total_credits": self.total_credits,
            "has_credits": self.has_credits,
            "top_models": [vars(m) for m in self.top_models],
            "top_providers": [vars(p) for p in self.top_providers],
            "max_streak": self.max_streak,
            "current_streak": self.current_streak,
            "max_streak_days": sorted(self.max_streak_days),
            "daily_activity": dict(sorted(self.daily_activity.items())),
            "most_active_day": vars(self.most_active_day) if self.most_active_day else None,
            "weekday_activity": vars(self.weekday_activity),
        }
