"""Plugin settings management.

This package provides:
- RewarderSettings: The settings record, its defaults and load/save
- SettingsStore: Storage backends for the persisted mapping
- SettingsPersister: The save capability bound to a live record
"""

from rewarder.settings.model import (
    DEFAULT_SETTINGS,
    OCCURRENCE_MAX,
    OCCURRENCE_MIN,
    OccurrenceType,
    RewarderSettings,
)
from rewarder.settings.store import (
    JsonFileStore,
    MemoryStore,
    SettingsPersister,
    SettingsStore,
    YamlFileStore,
    open_store,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "OCCURRENCE_MAX",
    "OCCURRENCE_MIN",
    "JsonFileStore",
    "MemoryStore",
    "OccurrenceType",
    "RewarderSettings",
    "SettingsPersister",
    "SettingsStore",
    "YamlFileStore",
    "open_store",
]
