# Settings stores: in-memory and JSON-file backed preferences with change listeners.

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Mapping, Optional

from checkprofile.collaborators.base import UNSET, SettingsStore

logger = logging.getLogger(__name__)


class InMemorySettingsStore(SettingsStore):
    """Preferences held in a dict; defaults are used for keys without a value."""

    def __init__(self, defaults: Optional[Mapping[str, str]] = None) -> None:
        super().__init__()
        self.defaults: dict[str, str] = dict(defaults or {})
        self.values: dict[str, str] = {}

    def get_string(self, key: str) -> str:
        if key in self.values:
            return self.values[key]
        return self.defaults.get(key, UNSET)

    def set_string(self, key: str, value: str) -> None:
        old = self.get_string(key)
        self.values[key] = value
        self._changed(key, old)

    def reset_to_default(self, key: str) -> None:
        old = self.get_string(key)
        self.values.pop(key, None)
        self._changed(key, old)

    def _changed(self, key: str, old: str) -> None:
        self._fire(key, old, self.get_string(key))


class JsonSettingsStore(InMemorySettingsStore):
    """
    Preferences persisted to a JSON object file so they survive sessions.

    The file is read once on creation and rewritten after every change.
    A missing file starts empty; an unreadable one is copied to
    <name>.bak, logged, and replaced on the next save.
    """

    def __init__(self, path: Path, defaults: Optional[Mapping[str, str]] = None) -> None:
        super().__init__(defaults)
        self.path = Path(path)
        self.values = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read settings file %s: %s", self.path, e)
            self._back_up()
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not contain an object; ignoring it", self.path)
            self._back_up()
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _back_up(self) -> None:
        """Keep the unreadable file next to the original before it gets rewritten."""
        backup = self.path.with_name(self.path.name + ".bak")
        try:
            shutil.copyfile(self.path, backup)
        except OSError as e:
            logger.warning("Could not back up settings file %s: %s", self.path, e)
            return
        logger.warning("Settings file %s will be replaced on the next save; original kept at %s", self.path, backup)

    def _changed(self, key: str, old: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.values, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug("Saved settings to %s", self.path)
        super()._changed(key, old)
