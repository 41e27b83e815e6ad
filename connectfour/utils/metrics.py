"""Per-game results logging."""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence
import csv
import os
from datetime import datetime

GAME_FIELDS = ("outcome", "moves", "wins", "losses", "draws")


class MetricsLogger:
    """Appends one CSV row per finished game."""

    def __init__(self, log_dir: str = "data/logs", fieldnames: Sequence[str] = GAME_FIELDS):
        """
        Initialize metrics logger.

        Args:
            log_dir: Directory to save logs
            fieldnames: Column names written after ``step``
        """
        self.log_dir = log_dir
        os.makedirs(log_dir, exist_ok=True)

        self.metrics: Dict[str, List[tuple]] = defaultdict(list)
        self.current_episode = 0

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.csv_path = os.path.join(log_dir, f"games_{timestamp}.csv")
        self.csv_fieldnames = ["step", *fieldnames]
        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.DictWriter(self.csv_file, fieldnames=self.csv_fieldnames)
        self.csv_writer.writeheader()

    def log_dict(self, metrics_dict: Dict[str, Any], step: Optional[int] = None) -> None:
        """
        Log one row of metrics.

        Args:
            metrics_dict: Mapping of field name to value; unknown fields raise
            step: Step/game number (uses current_episode if None)
        """
        if step is None:
            step = self.current_episode

        unknown = set(metrics_dict) - set(self.csv_fieldnames)
        if unknown:
            raise KeyError(f"Unknown metric field(s): {sorted(unknown)}")

        row = {"step": step}
        row.update(metrics_dict)
        self.csv_writer.writerow(row)
        self.csv_file.flush()

        for key, value in metrics_dict.items():
            self.metrics[key].append((step, value))

    def increment_episode(self) -> None:
        """Increment current episode counter."""
        self.current_episode += 1

    def get_metric(self, key: str) -> List[tuple]:
        """Return all ``(step, value)`` pairs logged for ``key``."""
        return self.metrics.get(key, [])

    def close(self) -> None:
        """Close the CSV file."""
        if self.csv_file and not self.csv_file.closed:
            self.csv_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
