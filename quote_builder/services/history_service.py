"""
Quote history and recent-service management.

Owns two bounded, newest-first lists:
- history records of generated quotes, deduplicated by
  (client name, project name, quote date)
- recently used service templates, deduplicated by name
"""

import threading
import time
from typing import Sequence

from quote_builder.config.settings import HistorySettings, settings
from quote_builder.models.quote import HistoryRecord, Quote, ServiceLine, ServiceTemplate
from quote_builder.storage.base import StoragePort
from quote_builder.storage.memory import MemoryStorage
from quote_builder.utils.logging import ServiceLogger


class HistoryStore:
    """
    Sole mutator of the persisted quote history and recent services.

    State is loaded from the storage port on construction and, with
    ``autosave`` enabled, saved back after every mutation.
    """

    def __init__(
        self,
        storage: StoragePort | None = None,
        history_settings: HistorySettings | None = None,
        autosave: bool = True,
    ):
        self.storage = storage if storage is not None else MemoryStorage()
        self.config = history_settings or settings.history
        self.autosave = autosave
        self.logger = ServiceLogger("history")
        self._lock = threading.RLock()
        self._last_record_ms = 0

        recent_services, history = self.storage.load()
        self._recent_services: list[ServiceTemplate] = recent_services[: self.config.max_recent_services]
        self._history: list[HistoryRecord] = history[: self.config.max_records]
        self.logger.log_operation_complete(
            "load_history",
            recent_services=len(self._recent_services),
            history=len(self._history),
        )

    @property
    def history(self) -> tuple[HistoryRecord, ...]:
        return tuple(self._history)

    @property
    def recent_services(self) -> tuple[ServiceTemplate, ...]:
        return tuple(self._recent_services)

    def record_quote(self, quote: Quote) -> HistoryRecord:
        """
        Record a generated quote at the head of the history.

        A record with the same client name, project name and quote date is
        replaced. The list is truncated to the configured maximum.

        Args:
            quote: Snapshot to record

        Returns:
            The new HistoryRecord
        """
        with self._lock:
            record = HistoryRecord(
                id=self._next_record_id(),
                client_name=quote.client.company_name or self.config.client_placeholder,
                project_name=quote.client.project_name or self.config.project_placeholder,
                total_amount=quote.total,
                quote_date=quote.client.quote_date,
                quote=quote,
            )
            key = _record_key(record)
            kept = [existing for existing in self._history if _record_key(existing) != key]
            replaced = len(self._history) - len(kept)
            self._commit(history=[record, *kept][: self.config.max_records])

        self.logger.log_operation_complete(
            "record_quote",
            record_id=record.id,
            client_name=record.client_name,
            project_name=record.project_name,
            replaced=replaced,
        )
        return record

    def touch_recent_service(self, line: ServiceLine) -> ServiceTemplate | None:
        """
        Move a line's service to the head of the recent-services list.

        Lines without a name or with a non-positive price are ignored.

        Returns:
            The stored template, or None when the line was ignored
        """
        template = _template_for(line)
        if template is None:
            return None

        with self._lock:
            self._commit(recent_services=self._touched(self._recent_services, template))
        return template

    def touch_recent_services(self, lines: Sequence[ServiceLine]) -> None:
        """Touch each line in order; the last eligible line ends up first."""
        with self._lock:
            recent_services = self._recent_services
            for line in lines:
                template = _template_for(line)
                if template is not None:
                    recent_services = self._touched(recent_services, template)
            self._commit(recent_services=recent_services)

    def remove_recent_service(self, name: str) -> None:
        """Remove a recent service by exact name. Absent names are ignored."""
        with self._lock:
            kept = [template for template in self._recent_services if template.name != name]
            if len(kept) == len(self._recent_services):
                return
            self._commit(recent_services=kept)
        self.logger.log_operation_complete("remove_recent_service", name=name)

    def remove_history_record(self, record_id: str) -> None:
        """Remove a history record by id. Absent ids are ignored."""
        with self._lock:
            kept = [record for record in self._history if record.id != record_id]
            if len(kept) == len(self._history):
                return
            self._commit(history=kept)
        self.logger.log_operation_complete("remove_history_record", record_id=record_id)

    def get_record(self, record_id: str) -> HistoryRecord | None:
        for record in self._history:
            if record.id == record_id:
                return record
        return None

    def load_record(self, record_id: str) -> Quote | None:
        """
        Return the stored snapshot for a record.

        Loading does not reorder the history.
        """
        record = self.get_record(record_id)
        if record is None:
            self.logger.log_debug("history_record_missing", record_id=record_id)
            return None
        return record.quote

    def save(self) -> None:
        """Write both collections through the storage port."""
        with self._lock:
            self.storage.save(self._recent_services, self._history)

    def _commit(
        self,
        recent_services: list[ServiceTemplate] | None = None,
        history: list[HistoryRecord] | None = None,
    ) -> None:
        # Lists are replaced only after a successful autosave
        recent_services = self._recent_services if recent_services is None else recent_services
        history = self._history if history is None else history
        if self.autosave:
            self.storage.save(recent_services, history)
        self._recent_services = recent_services
        self._history = history

    def _touched(
        self,
        recent_services: list[ServiceTemplate],
        template: ServiceTemplate,
    ) -> list[ServiceTemplate]:
        kept = [existing for existing in recent_services if existing.name != template.name]
        return [template, *kept][: self.config.max_recent_services]

    def _next_record_id(self) -> str:
        # Millisecond timestamp, bumped to stay unique within this store
        now_ms = time.time_ns() // 1_000_000
        existing = {record.id for record in self._history}
        candidate = max(now_ms, self._last_record_ms + 1)
        while str(candidate) in existing:
            candidate += 1
        self._last_record_ms = candidate
        return str(candidate)


def _record_key(record: HistoryRecord) -> tuple:
    return (record.client_name, record.project_name, record.quote_date)


def _template_for(line: ServiceLine) -> ServiceTemplate | None:
    """Template for a line, or None for unnamed or non-positive-price lines."""
    if not line.name or line.original_price <= 0:
        return None
    return ServiceTemplate(
        name=line.name,
        description=line.description,
        original_price=line.original_price,
    )
