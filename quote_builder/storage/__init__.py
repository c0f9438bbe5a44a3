"""
Persistence backends for quote history and recent services.

The core only depends on the ``StoragePort`` protocol; ``create_storage``
builds the backend selected in settings.
"""

from quote_builder.config.settings import Settings, settings as default_settings
from quote_builder.storage.base import StoragePort, parse_history, parse_templates
from quote_builder.storage.json_file import JsonFileStorage
from quote_builder.storage.memory import MemoryStorage
from quote_builder.storage.sql import SqlStorage


def create_storage(app_settings: Settings | None = None) -> StoragePort:
    """Build the storage backend named by ``settings.storage.backend``."""
    storage_settings = (app_settings or default_settings).storage

    if storage_settings.backend == "json":
        return JsonFileStorage(storage_settings.json_dir)
    if storage_settings.backend == "sql":
        return SqlStorage(storage_settings.database_url)
    return MemoryStorage()


__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "SqlStorage",
    "StoragePort",
    "create_storage",
    "parse_history",
    "parse_templates",
]
