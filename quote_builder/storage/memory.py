"""
In-memory storage backend.

Holds JSON text per collection so that saved state goes through the same
encode/decode path as the persistent backends.
"""

import json
from typing import Sequence

from quote_builder.models.quote import HistoryRecord, ServiceTemplate
from quote_builder.storage.base import LoadedState, decode_state, dump_history, dump_templates
from quote_builder.utils.logging import ServiceLogger


class MemoryStorage:
    """Process-local storage, used as the default backend and in tests."""

    def __init__(
        self,
        recent_services_raw: str | None = None,
        history_raw: str | None = None,
    ):
        self.recent_services_raw = recent_services_raw
        self.history_raw = history_raw
        self.save_count = 0
        self.logger = ServiceLogger("storage.memory")

    def load(self) -> LoadedState:
        return decode_state(self.recent_services_raw, self.history_raw, self.logger)

    def save(
        self,
        recent_services: Sequence[ServiceTemplate],
        history: Sequence[HistoryRecord],
    ) -> None:
        self.recent_services_raw = json.dumps(dump_templates(recent_services), ensure_ascii=False)
        self.history_raw = json.dumps(dump_history(history), ensure_ascii=False)
        self.save_count += 1
