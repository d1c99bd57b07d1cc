"""Local configuration for headinglinks."""

from __future__ import annotations

import os


DEFAULT_NOTE_EXTENSION = ".md"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"

# Only documents with this suffix take part in heading tracking and link repair.
HEADINGLINKS_NOTE_EXTENSION = os.getenv("HEADINGLINKS_NOTE_EXTENSION", DEFAULT_NOTE_EXTENSION)
HEADINGLINKS_ENCODING = os.getenv("HEADINGLINKS_ENCODING", DEFAULT_ENCODING)
HEADINGLINKS_CLEAR_ON_MISS = os.getenv("HEADINGLINKS_CLEAR_ON_MISS", "false").lower() in {"1", "true", "yes"}
HEADINGLINKS_LOG_LEVEL = os.getenv("HEADINGLINKS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
