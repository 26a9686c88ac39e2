"""Reward plugin settings record and its defaults."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from rewarder.errors import SettingsLoadError

if TYPE_CHECKING:
    from rewarder.settings.store import SettingsStore

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)

SETTINGS_ENV_VAR: Final = "REWARDER_SETTINGS"

OCCURRENCE_MIN: Final = 0.1
OCCURRENCE_MAX: Final = 100.0

# Pattern a daily note section heading must start with
SECTION_HEADING_PATTERN: Final = r"^#+"


class _SettingsBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class OccurrenceType(_SettingsBase):
    """A named reward tier and its chance, in percent, per finished task."""

    label: str = Field(..., min_length=1, description="Display name of the tier")
    value: float = Field(
        ...,
        ge=OCCURRENCE_MIN,
        le=OCCURRENCE_MAX,
        description="Chance in percent (0.1-100) that a finished task awards this tier",
    )


def _default_occurrence_types() -> list[OccurrenceType]:
    return [
        OccurrenceType(label="common", value=20),
        OccurrenceType(label="rare", value=5),
        OccurrenceType(label="legendary", value=0.5),
    ]


class RewarderSettings(_SettingsBase):
    """All user-configurable settings of the rewarder plugin.

    Field names are snake_case in Python and camelCase when persisted, so
    a ``data.json`` written by the plugin loads as-is. Every assignment is
    validated, which keeps the record within its constraints no matter
    which code path mutates it.

    Examples:
        settings = RewarderSettings.load(store)
        settings.occurrence_types[0].value = 12.5
        settings.save(store)
    """

    # Default search paths for the settings file
    DEFAULT_SETTINGS_PATHS: ClassVar[list[Path]] = [
        Path("rewarder.yaml"),
        Path("~/.config/rewarder/rewarder.yaml").expanduser(),
    ]

    # Special characters
    completed_task_character: str = Field(
        "☑️", min_length=1, description="Prefix of completed tasks in the daily note"
    )
    escape_character_begin: str = Field(
        "{", min_length=1, description="Marks the start of a reward's metadata"
    )
    escape_character_end: str = Field(
        "}", min_length=1, description="Marks the end of a reward's metadata"
    )

    # Reward tiers; index 0 is the default tier
    occurrence_types: list[OccurrenceType] = Field(
        default_factory=_default_occurrence_types, min_length=3, max_length=3
    )

    # Functionality
    rewards_file: str = Field("Rewards.md", min_length=1, description="Note listing the rewards")
    save_reward_to_daily: bool = False
    save_reward_section_heading: str | None = Field(None, pattern=SECTION_HEADING_PATTERN)
    save_task_to_daily: bool = False
    save_task_section_heading: str | None = Field(None, pattern=SECTION_HEADING_PATTERN)
    show_modal: bool = True
    use_as_inspirational: bool = False
    reward_preface: str = "- [ ] Earned reward: "

    @classmethod
    def defaults(cls) -> RewarderSettings:
        """Return a fresh record holding the default values."""
        return cls()

    @classmethod
    def from_persisted(cls, data: Mapping[str, Any] | None) -> RewarderSettings:
        """Merge a partial persisted mapping over the defaults.

        Keys present in ``data`` win; missing keys fall back to
        ``DEFAULT_SETTINGS``. The merge is shallow, so a persisted
        ``occurrenceTypes`` list replaces the default list entirely.

        Args:
            data: Persisted mapping, camelCase or snake_case keys

        Returns:
            Validated settings record

        Raises:
            SettingsLoadError: If the merged data is invalid
        """
        merged = DEFAULT_SETTINGS.to_persisted()
        for key, value in (data or {}).items():
            field = cls.model_fields.get(key)
            merged[field.alias if field and field.alias else key] = value

        try:
            return cls.model_validate(merged)
        except ValidationError as err:
            raise SettingsLoadError(f"Invalid settings:\n{err}") from err

    def to_persisted(self) -> dict[str, Any]:
        """Return the camelCase mapping to persist; absent headings are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def locate(cls) -> Path | None:
        """Find the settings file to use.

        Returns:
            Path from ``REWARDER_SETTINGS`` or the first existing default
            path, or None when no file exists yet

        Raises:
            FileNotFoundError: If ``REWARDER_SETTINGS`` names a missing file
        """
        env_path = os.environ.get(SETTINGS_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Settings file from {SETTINGS_ENV_VAR} not found: {path}")
            return path

        for default_path in cls.DEFAULT_SETTINGS_PATHS:
            if default_path.exists():
                return default_path
        return None

    @classmethod
    def load(cls, store: SettingsStore | None = None) -> RewarderSettings:
        """Load settings from a store.

        Args:
            store: Store to read from (optional, locates the settings file
                if None)

        Returns:
            Validated RewarderSettings object; defaults when nothing is
            persisted yet

        Raises:
            SettingsLoadError: If the persisted data is invalid
            SettingsStoreError: If the store cannot be read
        """
        if store is None:
            from rewarder.settings.store import open_store

            path = cls.locate()
            if path is None:
                logger.debug("No settings file found, using defaults")
                return cls.defaults()
            store = open_store(path)

        return cls.from_persisted(store.load_data())

    def save(self, store: SettingsStore) -> None:
        """Persist the settings through a store."""
        store.save_data(self.to_persisted())


# Read-only reference values; copy before mutating
DEFAULT_SETTINGS: Final = RewarderSettings()
