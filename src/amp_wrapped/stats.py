"""Derived statistics for an Amp wrapped card.

Turns a UsageSummary into rankings, streaks, weekday distribution and the
other presentation-ready values. Every function here is pure: the current
time is passed in explicitly.
"""

import math
from datetime import date, datetime, timedelta

from amp_wrapped.collector.summary import format_date_key
from amp_wrapped.models import (
    ModelStats,
    MostActiveDay,
    ProviderStats,
    UsageSummary,
    WeekdayActivity,
    WrappedStats,
)

TOP_N = 3

MS_PER_DAY = 24 * 60 * 60 * 1000

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

MODEL_NAMES = {
    "claude-opus-4-5-20251101": "Opus 4.5",
    "claude-sonnet-4-5-20250929": "Sonnet 4.5",
    "claude-sonnet-4-20250514": "Sonnet 4",
    "claude-haiku-4-5-20251001": "Haiku 4.5",
    "claude-3-5-sonnet-20241022": "Sonnet 3.5",
    "claude-3-5-haiku-20241022": "Haiku 3.5",
    "claude-3-opus-20240229": "Opus 3",
    "claude-3-sonnet-20240229": "Sonnet 3",
    "claude-3-haiku-20240307": "Haiku 3",
    "gpt-4o": "GPT-4o",
    "gpt-4o-mini": "GPT-4o Mini",
    "gpt-4-turbo": "GPT-4 Turbo",
    "gpt-5": "GPT-5",
    "gpt-5.1": "GPT-5.1",
    "o1-preview": "o1 Preview",
    "o1-mini": "o1 Mini",
    "o3-mini": "o3 Mini",
    "gemini-2.0-flash": "Gemini 2.0 Flash",
    "gemini-3-flash-preview": "Gemini 3 Flash",
    "gemini-1.5-pro": "Gemini 1.5 Pro",
    "deepseek-chat": "DeepSeek Chat",
    "deepseek-coder": "DeepSeek Coder",
}

PROVIDER_NAMES = {
    "anthropic": "Anthropic",
    "openai": "OpenAI",
    "google": "Google",
    "mistral": "Mistral",
    "meta": "Meta",
    "deepseek": "DeepSeek",
    "unknown": "Other",
}


def resolve_provider_id(model_id: str) -> str:
    """Map a model identifier to the provider that owns it."""
    if model_id.startswith("claude"):
        return "anthropic"
    if model_id.startswith(("gpt", "o1", "o3")):
        return "openai"
    if model_id.startswith("gemini"):
        return "google"
    if "mistral" in model_id or "mixtral" in model_id:
        return "mistral"
    if "llama" in model_id:
        return "meta"
    if "deepseek" in model_id:
        return "deepseek"
    return "unknown"


def get_model_display_name(model_id: str) -> str:
    """Human-readable model name, e.g. "claude-opus-4-1" -> "Opus 4"."""
    if model_id in MODEL_NAMES:
        return MODEL_NAMES[model_id]

    if model_id.startswith("claude-"):
        parts = model_id[len("claude-"):].split("-")
        if len(parts) >= 2:
            return f"{parts[0][:1].upper()}{parts[0][1:]} {parts[1]}"

    return model_id[:1].upper() + model_id[1:]


def get_provider_display_name(provider_id: str) -> str:
    return PROVIDER_NAMES.get(provider_id, provider_id)


def _percentage(count: float, total: float) -> float:
    return count / total * 100 if total > 0 else 0.0


def _parse_date_key(key: str) -> date | None:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        return None


def rank_models(summary: UsageSummary) -> list[ModelStats]:
    """Top models by token count.

    Models with no tokens are excluded. Ties keep the summary's order.
    """
    models: list[ModelStats] = []
    for model_id, tokens in summary.model_token_totals.items():
        if tokens <= 0:
            continue
        models.append(
            ModelStats(
                id=model_id,
                name=get_model_display_name(model_id),
                provider_id=resolve_provider_id(model_id),
                count=tokens,
                percentage=_percentage(tokens, summary.total_tokens),
                credits=summary.model_credit_totals.get(model_id, 0),
            )
        )

    models.sort(key=lambda m: m.count, reverse=True)
    return models[:TOP_N]


def rank_providers(summary: UsageSummary) -> list[ProviderStats]:
    """Top providers by the summed token count of their models."""
    provider_counts: dict[str, int] = {}
    for model_id, tokens in summary.model_token_totals.items():
        if tokens <= 0:
            continue
        provider_id = resolve_provider_id(model_id)
        provider_counts[provider_id] = provider_counts.get(provider_id, 0) + tokens

    ranked = sorted(provider_counts.items(), key=lambda item: item[1], reverse=True)
    return [
        ProviderStats(
            id=provider_id,
            name=get_provider_display_name(provider_id),
            count=count,
            percentage=_percentage(count, summary.total_tokens),
        )
        for provider_id, count in ranked[:TOP_N]
    ]


def calculate_max_streak(daily_activity: dict[str, int], year: int) -> tuple[int, set[str]]:
    """Longest run of consecutive active days within ``year``.

    Returns:
        Tuple of (streak length, dates in the streak). The earliest run wins
        ties.
    """
    active: list[tuple[str, date]] = []
    for key in daily_activity:
        parsed = _parse_date_key(key)
        if parsed is not None and parsed.year == year:
            active.append((key, parsed))
    active.sort()

    if not active:
        return 0, set()

    max_streak = 1
    run_length = 1
    run_start = 0
    max_start = 0
    max_end = 0

    for i in range(1, len(active)):
        gap = (active[i][1] - active[i - 1][1]).days
        if gap == 1:
            run_length += 1
            if run_length > max_streak:
                max_streak = run_length
                max_start = run_start
                max_end = i
        else:
            run_length = 1
            run_start = i

    return max_streak, {key for key, _ in active[max_start:max_end + 1]}


def count_streak_backwards(daily_activity: dict[str, int], start: date) -> int:
    """Count consecutive active days ending at ``start`` (inclusive)."""
    streak = 0
    day = start
    while format_date_key(day) in daily_activity:
        streak += 1
        day -= timedelta(days=1)
    return streak


def calculate_current_streak(daily_activity: dict[str, int], now: datetime) -> int:
    """Streak that is still alive as of ``now``.

    A streak counts if there was activity today or, failing that, yesterday.
    """
    today = now.date()
    yesterday = today - timedelta(days=1)

    if format_date_key(today) in daily_activity:
        return count_streak_backwards(daily_activity, today)
    if format_date_key(yesterday) in daily_activity:
        return count_streak_backwards(daily_activity, yesterday)
    return 0


def find_most_active_day(daily_activity: dict[str, int]) -> MostActiveDay | None:
    """Date with the most threads; the earliest date wins ties."""
    best: tuple[str, date] | None = None
    max_count = 0

    for key in sorted(daily_activity):
        count = daily_activity[key]
        parsed = _parse_date_key(key)
        if parsed is None:
            continue
        if count > max_count:
            max_count = count
            best = (key, parsed)

    if best is None:
        return None

    key, parsed = best
    return MostActiveDay(
        date=key,
        count=max_count,
        formatted_date=f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}",
    )


def build_weekday_activity(daily_activity: dict[str, int]) -> WeekdayActivity:
    """Sum thread counts per weekday (0=Sunday .. 6=Saturday)."""
    counts = [0] * 7
    for key, count in daily_activity.items():
        parsed = _parse_date_key(key)
        if parsed is None:
            continue
        # date.weekday() is Monday-based
        counts[(parsed.weekday() + 1) % 7] += count

    most_active = 0
    max_count = 0
    for i, count in enumerate(counts):
        if count > max_count:
            max_count = count
            most_active = i

    return WeekdayActivity(
        counts=counts,
        most_active_day=most_active,
        most_active_day_name=WEEKDAY_NAMES[most_active],
        max_count=max_count,
    )


def calculate_cache_hit_rate(cache_read_tokens: int, input_tokens: int) -> float:
    """Share of prompt tokens served from cache, as a percentage."""
    if cache_read_tokens <= 0:
        return 0.0
    return cache_read_tokens / (cache_read_tokens + input_tokens) * 100


def calculate_stats(summary: UsageSummary, year: int, now: datetime) -> WrappedStats:
    """Derive wrapped statistics from a usage summary.

    Args:
        summary: Aggregated usage for the year
        year: Year the summary was collected for
        now: Current time, used for the current streak and account age

    Returns:
        WrappedStats value object
    """
    daily_activity = summary.daily_activity
    max_streak, max_streak_days = calculate_max_streak(daily_activity, year)

    if summary.first_timestamp is not None:
        first_session_date = datetime.fromtimestamp(summary.first_timestamp / 1000, now.tzinfo)
        first_ms = summary.first_timestamp
    else:
        first_session_date = now
        first_ms = now.timestamp() * 1000
    days_since_first_session = math.floor((now.timestamp() * 1000 - first_ms) / MS_PER_DAY)

    return WrappedStats(
        year=year,
        first_session_date=first_session_date,
        days_since_first_session=days_since_first_session,
        total_sessions=summary.total_sessions,
        total_messages=summary.total_messages,
        total_projects=len(summary.projects),
        total_input_tokens=summary.total_input_tokens,
        total_output_tokens=summary.total_output_tokens,
        total_tokens=summary.total_tokens,
        total_cache_read_tokens=summary.total_cache_read_tokens,
        cache_hit_rate=calculate_cache_hit_rate(
            summary.total_cache_read_tokens, summary.total_input_tokens
        ),
        total_credits=summary.total_credits,
        has_credits=summary.total_credits > 0,
        top_models=rank_models(summary),
        top_providers=rank_providers(summary),
        max_streak=max_streak,
        current_streak=calculate_current_streak(daily_activity, now),
        max_streak_days=max_streak_days,
        daily_activity=dict(daily_activity),
        most_active_day=find_most_active_day(daily_activity),
        weekday_activity=build_weekday_activity(daily_activity),
    )
