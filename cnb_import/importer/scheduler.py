from __future__ import annotations

import logging
import time

from ..logging_config import LOGGER_NAME
from .importer import CzechCentralBankImporter

logger = logging.getLogger(LOGGER_NAME)


def run_periodic(
    interval_seconds: float,
    importer: CzechCentralBankImporter | None = None,
    *,
    max_runs: int | None = None,
) -> int:
    """Run imports periodically until interrupted (Ctrl+C).

    interval_seconds: seconds between runs; minimum enforced to 1.0
    max_runs: stop after this many runs (None = forever)
    Returns the number of completed runs.
    """
    importer = importer or CzechCentralBankImporter.from_settings()
    interval = max(1.0, float(interval_seconds))
    print(
        f"[schedule] Starting periodic imports every {interval:.1f}s."
        " Press Ctrl+C to stop."
    )
    runs = 0
    while max_runs is None or runs < max_runs:
        try:
            importer.import_rates()
            runs += 1
            for text in importer.get_messages():
                print(f"[schedule] {text}")
            if max_runs is not None and runs >= max_runs:
                break
            time.sleep(interval)
        except KeyboardInterrupt:
            print("[schedule] Stopped by user")
            break
    logger.info("Scheduler finished after %d runs", runs)
    return runs
