"""Loading and aggregation of Amp thread history."""

from .parser import parse_thread, parse_threads
from .sources import (
    check_amp_data_exists,
    get_amp_data_path,
    get_threads_path,
    list_thread_files,
    read_thread_files,
)
from .summary import (
    collect_from_directory,
    collect_usage_summary,
    extract_project_path,
    format_date_key,
)

__all__ = [
    "check_amp_data_exists",
    "collect_from_directory",
    "collect_usage_summary",
    "extract_project_path",
    "format_date_key",
    "get_amp_data_path",
    "get_threads_path",
    "list_thread_files",
    "parse_thread",
    "parse_threads",
    "read_thread_files",
]
