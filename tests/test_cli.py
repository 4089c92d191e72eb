"""Tests for the amp-wrapped command line interface."""

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest
from click.testing import CliRunner

from amp_wrapped.__main__ import cli


def write_thread(threads: Path, thread_id: str, created: datetime, model: str = "gpt-4o") -> None:
    (threads / f"{thread_id}.json").write_text(
        json.dumps(
            {
                "id": thread_id,
                "v": 1,
                "created": int(created.timestamp() * 1000),
                "messages": [
                    {
                        "role": "user",
                        "fileMentions": {"files": [{"uri": "file:///home/me/code/proj/src/a.py"}]},
                    },
                    {
                        "role": "assistant",
                        "usage": {
                            "model": model,
                            "inputTokens": 1000,
                            "outputTokens": 500,
                            "cacheReadInputTokens": 1000,
                            "credits": 0.75,
                        },
                    },
                ],
            }
        )
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Config that keeps logs inside the test directory."""
    path = tmp_path / "config.yaml"
    path.write_text(f"data_path: {tmp_path / 'amp'}\nlogging:\n  dir: {tmp_path / 'logs'}\n")
    return path


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    """Amp data directory with a few 2025 threads."""
    threads = tmp_path / "amp" / "threads"
    threads.mkdir(parents=True)
    write_thread(threads, "T-1", datetime(2025, 7, 1, 12, tzinfo=timezone.utc))
    write_thread(threads, "T-2", datetime(2025, 7, 2, 12, tzinfo=timezone.utc), "claude-sonnet-4-20250514")
    write_thread(threads, "T-3", datetime(2025, 7, 2, 13, tzinfo=timezone.utc))
    return tmp_path / "amp"


class TestCli:
    """Tests for the cli command."""

    def test_missing_data_directory(self, tmp_path: Path, config_file: Path) -> None:
        """Should explain and exit cleanly when Amp data is missing."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "--data-path", str(tmp_path / "none")]
        )

        assert result.exit_code == 0
        assert "Amp data not found" in result.output

    def test_no_activity_for_year(self, config_file: Path, data_path: Path) -> None:
        """Should report when the year has no threads."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "--year", "2019"])

        assert result.exit_code == 0
        assert "No Amp activity found for 2019" in result.output

    def test_prints_summary(self, config_file: Path, data_path: Path) -> None:
        """Should print the summary block for a year with activity."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "-y", "2025"])

        assert result.exit_code == 0
        assert "Your 2025 in Amp" in result.output
        assert "Threads:       3" in result.output
        assert "Total Tokens:  7.5K" in result.output
        assert "Streak:        2 days" in result.output
        assert "Credits Used:  2.25" in result.output
        assert "Cache Hits:    50.0%" in result.output
        assert "GPT-4o" in result.output

    def test_json_output(self, config_file: Path, data_path: Path) -> None:
        """Should emit stats as JSON."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--config", str(config_file), "--data-path", str(data_path), "--year", "2025", "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total_sessions"] == 3
        assert data["total_projects"] == 1
        assert data["top_providers"][0]["id"] == "openai"

    def test_share_url(self, config_file: Path, data_path: Path) -> None:
        """Should print the share link when requested."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "--year", "2025", "--share"])

        assert result.exit_code == 0
        assert "https://x.com/intent/tweet?text=Amp+Wrapped+2025" in result.output

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "amp-wrapped" in result.output


class TestCliTimezone:
    """Tests for the configured calendar timezone."""

    @pytest.fixture
    def zone_config(self, tmp_path: Path) -> Path:
        """Config pinned to UTC+14, far from any test machine's zone."""
        try:
            ZoneInfo("Etc/GMT-14")
        except ZoneInfoNotFoundError:
            pytest.skip("timezone database not available")

        path = tmp_path / "config.yaml"
        path.write_text(
            f"data_path: {tmp_path / 'amp'}\n"
            "timezone: Etc/GMT-14\n"
            f"logging:\n  dir: {tmp_path / 'logs'}\n"
        )
        return path

    def test_today_and_default_year_follow_configured_zone(
        self, tmp_path: Path, zone_config: Path
    ) -> None:
        """Should take "now" and the default year from the configured zone."""
        threads = tmp_path / "amp" / "threads"
        threads.mkdir(parents=True)
        # 2026-01-01 00:30 at UTC+14
        write_thread(threads, "T-1", datetime(2025, 12, 31, 10, 30, tzinfo=timezone.utc))
        instant = datetime(2025, 12, 31, 11, 0, tzinfo=timezone.utc)

        runner = CliRunner()
        with patch(
            "amp_wrapped.__main__.current_time", side_effect=lambda tz=None: instant.astimezone(tz)
        ) as current_time:
            result = runner.invoke(cli, ["--config", str(zone_config), "--json"])

        assert result.exit_code == 0, result.output
        assert current_time.call_args.args[0] == ZoneInfo("Etc/GMT-14")
        data = json.loads(result.output)
        assert data["year"] == 2026
        assert data["total_sessions"] == 1
        assert data["daily_activity"] == {"2026-01-01": 1}
        assert data["current_streak"] == 1

    def test_unknown_timezone(self, tmp_path: Path) -> None:
        """Should fail with a clear message for an unknown zone name."""
        path = tmp_path / "config.yaml"
        path.write_text(f"timezone: Mars/Olympus_Mons\nlogging:\n  dir: {tmp_path / 'logs'}\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(path)])

        assert result.exit_code == 1
        assert "Unknown timezone" in result.output
