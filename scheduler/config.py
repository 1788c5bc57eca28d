"""Environment-variable-based configuration for the prep scheduler and dashboard."""

from __future__ import annotations

import os
from pathlib import Path

DATA_DIR: Path = Path(os.environ.get("PROTOCOL_DATA_DIR", "~/.gut_protocol")).expanduser()
NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "21"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
# Prep plans are generated once an event is this many days out
PREP_LEAD_TIME_DAYS: int = int(os.environ.get("PREP_LEAD_TIME_DAYS", "3"))
# Scheduled events carry only a date; assume this local start hour
EVENT_START_HOUR: int = int(os.environ.get("EVENT_START_HOUR", "9"))
