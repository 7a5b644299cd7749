"""
Persistent storage for editor-side numbering settings.

Settings are stored as JSON in the camelCase shape produced by
`NumberingConfig.to_dict()`. Loading merges stored values over the defaults, so
older files with missing keys still load. Both operations are coroutines that do
their file I/O in a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from strif import atomic_output_file

from headnum.numbering.config_model import NumberingConfig

log = logging.getLogger(__name__)


class SettingsStore:
    """
    JSON settings file. `previous` holds the config that was on disk before the
    most recent `save()`, or None if there was none.
    """

    def __init__(self, path: Path) -> None:
        self.path: Path = path
        self.previous: NumberingConfig | None = None

    async def load(self) -> NumberingConfig | None:
        """Load settings, or None if nothing has been saved yet."""
        data = await asyncio.to_thread(self._read)
        if data is None:
            return None
        return NumberingConfig.from_dict(data)

    async def save(self, config: NumberingConfig) -> None:
        try:
            self.previous = await self.load()
        except (ValueError, OSError):
            log.exception("Could not read previous settings from %s", self.path)
            self.previous = NumberingConfig()
        await asyncio.to_thread(self._write, config.to_dict())

    def _read(self) -> dict[str, Any] | None:
        if not self.path.is_file():
            return None
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return None
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {self.path} must contain a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        with atomic_output_file(self.path, make_parents=True) as temp_path:
            Path(temp_path).write_text(
                json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
            )
