"""Saved command line preferences (.ghactivityrc)."""

import json
import logging
from datetime import date
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(".ghactivityrc")


class Preferences(BaseModel):
    """Values remembered between runs."""

    username: str | None = None
    limit: int | None = Field(default=None, ge=0)
    export_format: str | None = None
    from_date: date | None = None
    to_date: date | None = None


def load_preferences(path: Path = DEFAULT_PATH) -> Preferences:
    """Load saved preferences. A missing or unreadable file gives defaults."""
    if not path.exists():
        return Preferences()
    try:
        return Preferences.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable preferences file {path}: {e}")
        return Preferences()


def save_preferences(preferences: Preferences, path: Path = DEFAULT_PATH) -> Path:
    """Write preferences as JSON, omitting unset values."""
    data = preferences.model_dump(mode="json", exclude_none=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    logger.info(f"Preferences saved to {path}")
    return path
