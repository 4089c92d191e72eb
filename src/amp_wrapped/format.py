"""Text formatting for the terminal summary and share link."""

from urllib.parse import urlencode

from amp_wrapped.models import WrappedStats

SHARE_URL = "https://x.com/intent/tweet"


def format_number(value: float) -> str:
    """Compact number, e.g. 1234 -> "1.2K", 5600000 -> "5.6M"."""
    for threshold, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if abs(value) >= threshold:
            return f"{value / threshold:.1f}{suffix}"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.2f}"
    return str(int(value))


def format_number_full(value: float) -> str:
    """Number with thousands separators, e.g. 1234567 -> "1,234,567"."""
    return f"{int(round(value)):,}"


def summary_lines(stats: WrappedStats) -> list[str]:
    """Lines of the terminal summary block."""
    lines = [
        f"Threads:       {format_number(stats.total_sessions)}",
        f"Messages:      {format_number(stats.total_messages)}",
        f"Total Tokens:  {format_number(stats.total_tokens)}",
        f"Projects:      {format_number(stats.total_projects)}",
        f"Streak:        {stats.max_streak} days",
    ]
    if stats.has_credits:
        lines.append(f"Credits Used:  {stats.total_credits:.2f}")
    if stats.most_active_day:
        lines.append(f"Most Active:   {stats.most_active_day.formatted_date}")
    if stats.cache_hit_rate > 0:
        lines.append(f"Cache Hits:    {stats.cache_hit_rate:.1f}%")
    for rank, model in enumerate(stats.top_models, start=1):
        lines.append(f"Model #{rank}:     {model.name} ({model.percentage:.1f}%)")
    return lines


def generate_share_url(stats: WrappedStats) -> str:
    """Build an X (Twitter) intent URL announcing the year's stats."""
    lines = [
        f"Amp Wrapped {stats.year}",
        "",
        f"Total Tokens: {format_number_full(stats.total_tokens)}",
        f"Total Messages: {format_number_full(stats.total_messages)}",
        f"Total Threads: {format_number_full(stats.total_sessions)}",
        "",
        f"Longest Streak: {stats.max_streak} days",
        f"Top model: {stats.top_models[0].name if stats.top_models else 'N/A'}",
    ]
    if stats.has_credits:
        lines.append(f"Total Credits: {stats.total_credits:.2f}")

    text = "\n".join(lines)
    return f"{SHARE_URL}?{urlencode({'text': text})}"
