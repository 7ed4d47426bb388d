"""
User Settings

The only thing the app remembers between sessions: the theme preference.
Stored as a small JSON file in the user's home directory.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Optional

log = logging.getLogger(__name__)

THEMES = ("light", "dark")

SETTINGS_ENV_VAR = "HMPI_SETTINGS_PATH"


def default_settings_path() -> Path:
    """~/.hmpi/settings.json unless HMPI_SETTINGS_PATH is set."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".hmpi" / "settings.json"


@dataclass
class UserSettings:
    theme: str = "light"
    """Either 'light' or 'dark'."""

    @property
    def is_dark(self) -> bool:
        return self.theme == "dark"

    def toggle_theme(self) -> str:
        self.theme = "light" if self.is_dark else "dark"
        return self.theme

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "UserSettings":
        theme = data.get("theme", "light")
        if theme not in THEMES:
            log.warning(f"Ignoring unknown theme '{theme}'")
            theme = "light"
        return cls(theme=theme)

    def save(self, path: Optional[Path] = None):
        """Write settings to disk."""
        path = Path(path) if path else default_settings_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        log.info(f"Saved settings to {path}")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "UserSettings":
        """Read settings from disk, falling back to defaults."""
        path = Path(path) if path else default_settings_path()
        if not path.exists():
            return cls()
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning(f"Could not read settings from {path}: {e}")
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)
