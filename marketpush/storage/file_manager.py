# marketpush/storage/file_manager.py

"""Saves export reports to disk."""

import json
import logging
from datetime import datetime
from pathlib import Path

from marketpush.config.settings import Settings
from marketpush.models.export_outcome import ExportOutcome

logger = logging.getLogger("marketpush.storage")


class FileManager:
    """Saves export reports to disk.

    Only the outcome of an export is written; the inventory itself is
    never persisted.
    """

    def __init__(self, results_dir: Path | None = None) -> None:
        self.results_dir: Path = results_dir or Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "FileManager initialised, results_dir=%s", self.results_dir
        )

    def save_outcomes(self, outcomes: list[ExportOutcome]) -> Path:
        """Write outcomes to ``export_<timestamp>.json`` and return the path."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filepath = self.results_dir / f"export_{timestamp}.json"

        data = [o.to_dict() for o in outcomes]
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=str)

        logger.info(
            "Saved export report for %d products to %s",
            len(outcomes),
            filepath,
        )
        return filepath
