"""CSV logger for summarize pipeline timing metrics."""

import csv
import threading
from datetime import UTC, datetime
from pathlib import Path

from blogsummarizer.config import get_settings


class CSVLogger:
    """Thread-safe CSV logger for appending timing metrics."""

    def __init__(self, filepath: str | Path) -> None:
        """Initialize CSV logger.

        Args:
            filepath: Path to CSV file (will be created if doesn't exist)
        """
        self.filepath = Path(filepath)
        self._lock = threading.Lock()
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Ensure the parent directory exists."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def _write_header_if_needed(self) -> None:
        """Write CSV header if file doesn't exist or is empty."""
        if not self.filepath.exists() or self.filepath.stat().st_size == 0:
            with open(self.filepath, "w", newline="") as f:
                writer = csv.writer(f)
                writer.writerow(["timestamp", "operation", "duration_ms", "item_count", "chars"])

    def log(
        self,
        operation: str,
        duration_ms: float,
        item_count: int = 0,
        chars: int = 0,
    ) -> None:
        """Log a timing metric to CSV.

        Args:
            operation: Name of the stage (e.g., "acquire", "extract")
            duration_ms: Duration in milliseconds
            item_count: Number of records touched (optional)
            chars: Size of the processed text (optional)
        """
        with self._lock:
            self._write_header_if_needed()
            with open(self.filepath, "a", newline="") as f:
                writer = csv.writer(f)
                writer.writerow([
                    datetime.now(UTC).isoformat(),
                    operation,
                    f"{duration_ms:.2f}",
                    item_count,
                    chars,
                ])


class NullLogger:
    """Drop-in logger used when the timing log is disabled."""

    def log(
        self,
        operation: str,
        duration_ms: float,
        item_count: int = 0,
        chars: int = 0,
    ) -> None:
        pass


_timing_logger: CSVLogger | NullLogger | None = None


def get_timing_logger() -> CSVLogger | NullLogger:
    """Get or create the summarize metrics logger."""
    global _timing_logger
    if _timing_logger is None:
        path = get_settings().timing_log_path
        _timing_logger = CSVLogger(path) if path else NullLogger()
    return _timing_logger
