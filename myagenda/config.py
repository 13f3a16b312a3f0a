"""
Configuration constants and environment setup.

Every value can be overridden through an environment variable
(or a local .env file). CLI flags take precedence over both.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.environ.get("MYAGENDA_DATA_DIR", str(PACKAGE_DIR / "data")))

# Path or http(s) URL
EVENTS_SOURCE = os.environ.get("MYAGENDA_EVENTS", str(DATA_DIR / "events.json"))
RANGE_SOURCE = os.environ.get("MYAGENDA_RANGE", str(DATA_DIR / "range.json"))

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

# Zone the program is held in; all times are shown in this zone.
EVENT_TIMEZONE = os.environ.get("MYAGENDA_TIMEZONE", "America/Los_Angeles")

FETCH_TIMEOUT_SECONDS = int(os.environ.get("MYAGENDA_FETCH_TIMEOUT", "30"))

# ---------------------------------------------------------------------------
# Engine defaults
# ---------------------------------------------------------------------------

DEFAULT_COLOR_BY = os.environ.get("MYAGENDA_COLOR_BY", "topic")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("MYAGENDA_LOG_LEVEL", "WARNING").upper()
