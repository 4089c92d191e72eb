"""CLI entry point for amp-wrapped.

Allows running as a module:
    python -m amp_wrapped --year 2025
"""

import json
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError

import click

from amp_wrapped import __version__
from amp_wrapped.collector import check_amp_data_exists, collect_from_directory, get_threads_path
from amp_wrapped.config import load_config
from amp_wrapped.format import generate_share_url, summary_lines
from amp_wrapped.logging import get_logger, setup_logging
from amp_wrapped.stats import calculate_stats

logger = get_logger("cli")


def current_time(tz: tzinfo | None = None) -> datetime:
    """Current time in the configured timezone (None uses the local zone)."""
    return datetime.now(tz)


@click.command()
@click.option("--year", "-y", type=int, help="Year to summarize (default: current year)")
@click.option(
    "--data-path",
    type=click.Path(path_type=Path, file_okay=False),
    help="Amp data directory (default: ~/.local/share/amp)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    help="Path to config.yaml",
)
@click.option("--json", "as_json", is_flag=True, help="Print stats as JSON")
@click.option("--share", is_flag=True, help="Print a link for sharing on X")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.version_option(__version__, prog_name="amp-wrapped")
def cli(
    year: int | None,
    data_path: Path | None,
    config_path: Path | None,
    as_json: bool,
    share: bool,
    verbose: bool,
) -> None:
    """Generate your Amp year in review stats."""
    config = load_config(config_path)
    setup_logging(config.logging.dir, level=config.logging.level_number, verbose=verbose)

    try:
        tz = config.resolve_timezone()
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise click.ClickException(f"Unknown timezone {config.timezone!r}") from e

    # Dates and "today" must come from the same calendar
    now = current_time(tz)
    requested_year = year if year is not None else now.year
    threads_path = get_threads_path(data_path or config.data_path)

    if not check_amp_data_exists(threads_path):
        click.echo(f"Amp data not found at {threads_path}")
        click.echo("Make sure you have used Amp at least once.")
        return

    try:
        summary = collect_from_directory(
            threads_path,
            requested_year,
            tz=tz,
            workers=config.loader.workers,
        )
        stats = calculate_stats(summary, requested_year, now)
    except Exception as e:
        logger.exception("Failed to collect stats")
        raise click.ClickException(f"Failed to collect stats: {e}") from e

    if stats.total_sessions == 0:
        click.echo(f"No Amp activity found for {requested_year}")
        return

    if as_json:
        click.echo(json.dumps(stats.to_dict(), indent=2))
    else:
        click.echo(f"Your {requested_year} in Amp\n")
        for line in summary_lines(stats):
            click.echo(line)

    if share:
        click.echo(f"\nShare on X: {generate_share_url(stats)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
