"""
JSON file storage backend.

Each collection lives in its own file inside a data directory, so a corrupt
file only loses that one collection.
"""

import json
from pathlib import Path
from typing import Sequence

from quote_builder.models.quote import HistoryRecord, ServiceTemplate
from quote_builder.storage.base import (
    QUOTE_HISTORY,
    RECENT_SERVICES,
    LoadedState,
    decode_state,
    dump_history,
    dump_templates,
)
from quote_builder.utils.logging import ServiceLogger


class JsonFileStorage:
    """Persists recent services and quote history as JSON documents."""

    def __init__(self, data_dir: Path | str):
        """
        Initialize the file storage.

        Args:
            data_dir: Directory holding the collection files
        """
        self.data_dir = Path(data_dir)
        self.logger = ServiceLogger("storage.json")

        # Ensure directory exists
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def recent_services_file(self) -> Path:
        return self.data_dir / f"{RECENT_SERVICES}.json"

    @property
    def history_file(self) -> Path:
        return self.data_dir / f"{QUOTE_HISTORY}.json"

    def load(self) -> LoadedState:
        return decode_state(
            self._read(self.recent_services_file),
            self._read(self.history_file),
            self.logger,
        )

    def save(
        self,
        recent_services: Sequence[ServiceTemplate],
        history: Sequence[HistoryRecord],
    ) -> None:
        self._write(self.recent_services_file, dump_templates(recent_services))
        self._write(self.history_file, dump_history(history))
        self.logger.log_debug(
            "state_saved",
            data_dir=str(self.data_dir),
            recent_services=len(recent_services),
            history=len(history),
        )

    def _read(self, path: Path) -> str | None:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, path: Path, payload: list) -> None:
        # Atomic replace
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            tmp_path.replace(path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
