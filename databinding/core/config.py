from typing import Any, Optional
import json
import os
from pydantic import BaseModel
from loguru import logger
from .events import Signal


# --- Settings Model ---
class BinderSettings(BaseModel):
    # Locale name handed to converters; None means the process locale
    culture: Optional[str] = None
    # Raise TeardownError from Binder.detach() after all handles ran; False only logs
    strict_teardown: bool = True


# --- Manager ---
class ConfigManager:
    """
    Manages binder configuration with optional persistence and reactivity.

    With no filepath the settings live in memory only.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = BinderSettings()
        self.on_changed = Signal("ConfigChanged")
        if self.filepath:
            self._load()

    @property
    def data(self) -> BinderSettings:
        return self._data

    def update(self, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if key not in BinderSettings.model_fields:
            raise ValueError(f"Invalid key: {key}")

        raw = self._data.model_dump()
        raw[key] = value
        self._data = BinderSettings.model_validate(raw)
        self._save()
        self.on_changed.emit(key, getattr(self._data, key))

    def get(self, key: str) -> Any:
        return getattr(self._data, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                    # Allow the settings to live under a [binder] table
                    raw = raw.get("binder", raw)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = BinderSettings.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
        elif not self.filepath.endswith('.toml'):
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
