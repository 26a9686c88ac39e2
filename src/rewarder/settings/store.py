# src/rewarder/settings/store.py
"""Persistence boundary for plugin settings.

A store moves plain mappings in and out of some storage; it knows nothing
about validation. ``SettingsPersister`` binds a store to a live settings
record and is the save capability handed to the settings form.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

import yaml

from rewarder.errors import SettingsStoreError
from rewarder.settings.model import RewarderSettings

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class SettingsStore(Protocol):
    """Protocol for key/value storage of persisted settings."""

    def load_data(self) -> dict[str, Any]:
        """Return the persisted mapping, or an empty dict if nothing is stored."""
        ...

    def save_data(self, data: Mapping[str, Any]) -> None:
        """Replace the persisted mapping."""
        ...


class _FileStore(ABC):
    """Shared file handling for the file-backed stores."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @abstractmethod
    def _parse(self, text: str) -> Any:
        """Turn file text into a mapping, or None for an empty document."""

    @abstractmethod
    def _dump(self, data: dict[str, Any]) -> str:
        """Serialize a mapping to file text."""

    def load_data(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.debug("Settings file %s does not exist yet", self.path)
            return {}

        try:
            data = self._parse(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise SettingsStoreError("Unable to read settings", self.path, exc) from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsStoreError("Settings file does not hold a mapping", self.path)
        return data

    def save_data(self, data: Mapping[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self._dump(dict(data)), encoding="utf-8")
        except OSError as exc:
            raise SettingsStoreError("Unable to write settings", self.path, exc) from exc
        logger.debug("Saved settings to %s", self.path)


class YamlFileStore(_FileStore):
    """Settings stored as a YAML document."""

    def _parse(self, text: str) -> Any:
        return yaml.safe_load(text)

    def _dump(self, data: dict[str, Any]) -> str:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


class JsonFileStore(_FileStore):
    """Settings stored as JSON, the format of the plugin's ``data.json``."""

    def _parse(self, text: str) -> Any:
        return json.loads(text) if text.strip() else None

    def _dump(self, data: dict[str, Any]) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def open_store(path: Path) -> SettingsStore:
    """Create the file store matching the path's suffix."""
    if path.suffix.lower() == ".json":
        return JsonFileStore(path)
    return YamlFileStore(path)


class MemoryStore:
    """In-memory store for testing."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})
        self.save_calls: list[dict[str, Any]] = []

    def load_data(self) -> dict[str, Any]:
        return dict(self.data)

    def save_data(self, data: Mapping[str, Any]) -> None:
        """Record the save and keep the data for the next load."""
        self.data = dict(data)
        self.save_calls.append(dict(data))

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.save_calls = []


class SettingsPersister:
    """Writes a live settings record to its store.

    Outside a batch every ``save()`` writes immediately. Inside
    ``with persister.batch():`` saves only mark the record dirty and a
    single write of the final state happens when the outermost batch
    exits, so the last accepted edit always wins. If the block raises,
    the deferred write is dropped and the store keeps its previous state.
    """

    def __init__(self, settings: RewarderSettings, store: SettingsStore) -> None:
        self.settings = settings
        self.store = store
        self._depth = 0
        self._dirty = False
        self._discard = False

    def save(self) -> None:
        """Persist the current settings, or defer while batching."""
        if self._depth:
            self._dirty = True
            return
        self.settings.save(self.store)

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Coalesce the saves made inside the block into one write."""
        self._depth += 1
        try:
            yield
        except BaseException:
            # A failed block discards every deferred save
            self._discard = True
            raise
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._flush()

    def _flush(self) -> None:
        dirty, discard = self._dirty, self._discard
        self._dirty = self._discard = False
        if dirty and discard:
            logger.debug("Discarding coalesced settings save after failed batch")
        elif dirty:
            logger.debug("Flushing coalesced settings save")
            self.settings.save(self.store)
