from __future__ import annotations

import json
from typing import List, Optional

from PySide6.QtCore import QSettings


class SliderSettings:
    """Remembers the last slider value and config file between runs.

    Persists via QSettings; pass ``file_path`` to use an ini file instead of
    the platform store.
    """

    SETTINGS_ORG = "MultiSlider"
    SETTINGS_APP = "MultiSlider"
    KEY_LAST_VALUE = "slider/last_value"
    KEY_LAST_CONFIG = "slider/last_config_file"

    def __init__(self, file_path: Optional[str] = None):
        if file_path:
            self.settings = QSettings(file_path, QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(self.SETTINGS_ORG, self.SETTINGS_APP)

    def last_value(self) -> List[float]:
        raw = self.settings.value(self.KEY_LAST_VALUE)
        if not raw:
            return []
        # QSettings may split a comma-separated string into a list
        if isinstance(raw, list):
            raw = ", ".join(str(x) for x in raw)
        try:
            items = json.loads(str(raw))
        except ValueError:
            return []
        if isinstance(items, (int, float)):
            items = [items]
        if not isinstance(items, list):
            return []
        try:
            return [float(v) for v in items]
        except (TypeError, ValueError):
            return []

    def set_last_value(self, value) -> None:
        # Store as JSON string; QSettings round-trips lists inconsistently across backends
        self.settings.setValue(self.KEY_LAST_VALUE, json.dumps(value))

    def last_config_file(self) -> Optional[str]:
        raw = self.settings.value(self.KEY_LAST_CONFIG, type=str)
        return raw or None

    def set_last_config_file(self, file_path: str) -> None:
        self.settings.setValue(self.KEY_LAST_CONFIG, file_path)

    def sync(self) -> None:
        self.settings.sync()
