"""Source discovery for Amp thread files."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from amp_wrapped.logging import get_logger

logger = get_logger("sources")


def get_amp_data_path() -> Path:
    """Get the Amp data directory.

    Amp uses XDG-style paths on all platforms:
    - macOS/Linux: ~/.local/share/amp
    - Windows: %USERPROFILE%\\.local\\share\\amp
    """
    return Path.home() / ".local" / "share" / "amp"


def get_threads_path(data_path: Path | None = None) -> Path:
    """Directory holding one JSON file per thread."""
    if data_path is None:
        data_path = get_amp_data_path()
    return data_path / "threads"


def check_amp_data_exists(threads_path: Path | None = None) -> bool:
    """Check whether the Amp threads directory exists."""
    if threads_path is None:
        threads_path = get_threads_path()
    return threads_path.is_dir()


def list_thread_files(threads_path: Path) -> list[Path]:
    """Discover Amp thread files.

    Location: <threads_path>/T-*.json
    """
    if not threads_path.is_dir():
        return []

    paths = sorted(p for p in threads_path.glob("T-*.json") if p.is_file())
    logger.debug("Discovered thread files: path=%s total=%d", threads_path, len(paths))
    return paths


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read thread file %s: %s", path, e)
        return None


def read_thread_files(paths: list[Path], workers: int = 1) -> list[tuple[Path, str]]:
    """Read raw thread file contents.

    Unreadable files are skipped. Results keep the order of ``paths`` even
    when files are read in parallel.

    Args:
        paths: Thread files to read
        workers: Number of reader threads (1 reads sequentially)

    Returns:
        List of (path, raw_text) pairs
    """
    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            contents = list(executor.map(_read_text, paths))
    else:
        contents = [_read_text(path) for path in paths]

    return [(path, text) for path, text in zip(paths, contents) if text is not None]
