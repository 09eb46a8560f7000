"""
Local preference store.

A tiny JSON-file key-value store for the one user preference the studio
keeps: the application logo.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..config import settings

logger = logging.getLogger(__name__)

LOGO_KEY = "app_logo"


class PreferenceStore:
    """JSON file backed get/set store."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.preferences_path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Preferences file {self.path} is corrupt, ignoring it: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Preferences file {self.path} does not hold an object, ignoring it")
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Atomic replace
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)

    # =========================================================================
    # Logo
    # =========================================================================

    def get_logo(self) -> str | None:
        return self.get(LOGO_KEY)

    def set_logo(self, data_url: str) -> None:
        """Store a logo given as an image data URL (PNG, JPG, SVG...)."""
        if not data_url.startswith("data:image/"):
            raise ValueError("Logo must be an image data URL (PNG, JPG, SVG)")
        self.set(LOGO_KEY, data_url)
