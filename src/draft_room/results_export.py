"""Results export - write completed draft results to JSON files."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from src.draft_room.config import RESULTS_DIR

logger = logging.getLogger(__name__)


class ResultsExporter:
    """Writes one results file per completed draft.

    Files are never overwritten: a name collision gets a numeric suffix.
    """

    FILENAME_PREFIX = "draft-results-"

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = Path(storage_dir or RESULTS_DIR)

    def save_results(self, results: Dict) -> Path:
        """Save draft results to a new JSON file.

        Args:
            results: Results payload from ``DraftEngine.get_results``.

        Returns:
            Path to the written file.

        Raises:
            TypeError: If the payload is not JSON-serializable. No file is
                created in that case.
            OSError: If the file cannot be written. A partly written file is
                removed first.
        """
        content = json.dumps(results, indent=2)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

        stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
        base = f"{self.FILENAME_PREFIX}{stamp}"
        filepath = self.storage_dir / f"{base}.json"

        suffix = 1
        while True:
            try:
                f = open(filepath, "x", encoding="utf-8")
            except FileExistsError:
                filepath = self.storage_dir / f"{base}-{suffix}.json"
                suffix += 1
                continue
            break

        try:
            with f:
                f.write(content)
        except OSError:
            filepath.unlink(missing_ok=True)
            raise

        logger.info(
            "Draft results for %s saved to %s",
            results.get("session_token"),
            filepath,
        )
        return filepath
