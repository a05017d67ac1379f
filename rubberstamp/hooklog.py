"""Optional append-only log for hook runs.

Off unless RUBBERSTAMP_ENABLE_LOGS is set. Writes to rubberstamp.log in
the current directory. Failures are reported on stderr and never
interrupt the hook, since stdout carries the decision.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

ENABLE_ENV = "RUBBERSTAMP_ENABLE_LOGS"
LOG_FILE = "rubberstamp.log"


def logging_enabled() -> bool:
    return ENABLE_ENV in os.environ


def log_message(message: str, log_path: Path | None = None) -> None:
    if not logging_enabled():
        return

    target = log_path or Path(LOG_FILE)
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    try:
        with open(target, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
    except OSError as e:
        print(f"Warning: Failed to write to log file: {e}", file=sys.stderr)
