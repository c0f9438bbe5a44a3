"""
Storage port for quote history and recent services.

Adapters persist the two collections as JSON-compatible lists and decode
each collection independently, so one unreadable collection never costs
the other.
"""

import json
from typing import Any, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from quote_builder.exceptions import ParseError
from quote_builder.models.quote import HistoryRecord, ServiceTemplate
from quote_builder.utils.logging import ServiceLogger


RECENT_SERVICES = "recent_services"
QUOTE_HISTORY = "quote_history"

_templates_adapter = TypeAdapter(list[ServiceTemplate])
_history_adapter = TypeAdapter(list[HistoryRecord])

LoadedState = tuple[list[ServiceTemplate], list[HistoryRecord]]


class StoragePort(Protocol):
    """Interface every persistence backend provides."""

    def load(self) -> LoadedState:
        """Return ``(recent_services, history)``, newest first."""
        ...

    def save(
        self,
        recent_services: Sequence[ServiceTemplate],
        history: Sequence[HistoryRecord],
    ) -> None:
        """Replace the persisted collections."""
        ...


def dump_templates(templates: Sequence[ServiceTemplate]) -> list[dict[str, Any]]:
    return [template.model_dump(mode="json") for template in templates]


def dump_history(records: Sequence[HistoryRecord]) -> list[dict[str, Any]]:
    return [record.model_dump(mode="json") for record in records]


def parse_templates(raw: Any) -> list[ServiceTemplate]:
    """
    Decode a persisted recent-services collection.

    Accepts a JSON string or already-decoded list.

    Raises:
        ParseError: If the payload is not a valid template list
    """
    return _parse(RECENT_SERVICES, raw, _templates_adapter)


def parse_history(raw: Any) -> list[HistoryRecord]:
    """
    Decode a persisted quote history collection.

    Raises:
        ParseError: If the payload is not a valid history record list
    """
    return _parse(QUOTE_HISTORY, raw, _history_adapter)


def _parse(collection: str, raw: Any, adapter: TypeAdapter) -> list:
    if raw is None:
        return []
    try:
        if isinstance(raw, (str, bytes)):
            raw = json.loads(raw)
        return adapter.validate_python(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError) as e:
        raise ParseError(collection, str(e)) from e


def decode_state(
    raw_recent: Any,
    raw_history: Any,
    logger: ServiceLogger,
) -> LoadedState:
    """
    Decode both collections, discarding whichever cannot be parsed.

    Parse failures are logged and replaced by an empty list.
    """
    try:
        recent_services = parse_templates(raw_recent)
    except ParseError as e:
        logger.log_recovered("load_collection", e, collection=e.collection)
        recent_services = []

    try:
        history = parse_history(raw_history)
    except ParseError as e:
        logger.log_recovered("load_collection", e, collection=e.collection)
        history = []

    return recent_services, history
