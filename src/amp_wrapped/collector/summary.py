"""Usage collector: folds thread records into a yearly UsageSummary."""

from collections.abc import Iterable
from datetime import date, datetime, tzinfo
from pathlib import Path

from amp_wrapped.collector.parser import parse_threads
from amp_wrapped.collector.sources import list_thread_files, read_thread_files
from amp_wrapped.logging import get_logger
from amp_wrapped.models import UNKNOWN_MODEL, ThreadRecord, UsageSummary

logger = get_logger("collector")

# Path segments that usually sit directly below a project root
PROJECT_INDICATORS = ("/src/", "/lib/", "/app/", "/components/", "/pages/")


def format_date_key(value: date | datetime) -> str:
    """Format a date as a YYYY-MM-DD activity key."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def thread_datetime(created_ms: int, tz: tzinfo | None = None) -> datetime:
    """Convert a thread creation timestamp to a calendar datetime.

    Args:
        created_ms: Unix timestamp in milliseconds
        tz: Target timezone (None uses the local timezone)
    """
    return datetime.fromtimestamp(created_ms / 1000, tz)


def extract_project_path(uri: str) -> str | None:
    """Derive a project directory from a file mention URI.

    e.g. "file:///Users/me/Projects/app/src/main.ts" -> "/Users/me/Projects/app"

    Args:
        uri: File URI

    Returns:
        Project path, or None if it cannot be derived
    """
    if not uri.startswith("file://"):
        return None

    path = uri[len("file://"):]

    for indicator in PROJECT_INDICATORS:
        idx = path.find(indicator)
        if idx != -1:
            return path[:idx]

    # Fall back to parent directory
    parts = path.split("/")
    if len(parts) >= 4:
        return "/".join(parts[:-1])

    return None


def collect_usage_summary(
    records: Iterable[ThreadRecord],
    year: int,
    tz: tzinfo | None = None,
) -> UsageSummary:
    """Aggregate usage counters for threads created in ``year``.

    Records are folded in (created, id) order so that every map in the
    summary has a deterministic insertion order.

    Args:
        records: Parsed thread records
        year: Calendar year to keep
        tz: Timezone for calendar dates (None uses the local timezone)

    Returns:
        UsageSummary for the year
    """
    summary = UsageSummary.empty()

    for thread in sorted(records, key=lambda t: (t.created, t.id)):
        try:
            created_at = thread_datetime(thread.created, tz)
        except (OverflowError, OSError, ValueError):
            logger.debug("Skipping thread %s: invalid creation time %r", thread.id, thread.created)
            continue

        if created_at.year != year:
            continue

        summary.total_sessions += 1

        if summary.first_timestamp is None or thread.created < summary.first_timestamp:
            summary.first_timestamp = thread.created

        date_key = format_date_key(created_at)
        summary.daily_activity[date_key] = summary.daily_activity.get(date_key, 0) + 1

        for message in thread.messages:
            if message.role == "user":
                summary.total_messages += 1
                for uri in message.file_uris:
                    project = extract_project_path(uri)
                    if project:
                        summary.projects.add(project)

            if message.role == "assistant" and message.usage is not None:
                usage = message.usage
                entry_total = usage.total_tokens

                summary.total_input_tokens += usage.input_tokens
                summary.total_output_tokens += usage.output_tokens
                summary.total_cache_read_tokens += usage.cache_read_input_tokens
                summary.total_tokens += entry_total
                summary.total_credits += usage.credits

                if usage.model != UNKNOWN_MODEL:
                    summary.model_token_totals[usage.model] = (
                        summary.model_token_totals.get(usage.model, 0) + entry_total
                    )
                    summary.model_credit_totals[usage.model] = (
                        summary.model_credit_totals.get(usage.model, 0) + usage.credits
                    )

    logger.debug(
        "Collected usage: year=%d sessions=%d messages=%d tokens=%d",
        year,
        summary.total_sessions,
        summary.total_messages,
        summary.total_tokens,
    )
    return summary


def collect_from_directory(
    threads_path: Path,
    year: int,
    tz: tzinfo | None = None,
    workers: int = 1,
) -> UsageSummary:
    """Discover, read and aggregate all thread files under ``threads_path``.

    A missing directory yields an all-zero summary.
    """
    paths = list_thread_files(threads_path)
    if not paths:
        logger.info("No thread files found in %s", threads_path)
        return UsageSummary.empty()

    pairs = read_thread_files(paths, workers=workers)
    return collect_usage_summary(parse_threads(pairs), year, tz)
