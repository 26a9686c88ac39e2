# src/rewarder/form/settings_form.py
"""Settings form for the rewarder plugin."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from functools import partial
from typing import Final, Literal

from rewarder.form.controls import (
    Heading,
    ResetButton,
    Setting,
    SettingsContainer,
    TextInput,
    Toggle,
)
from rewarder.paths import sanitise_note
from rewarder.settings.model import (
    DEFAULT_SETTINGS,
    OCCURRENCE_MAX,
    OCCURRENCE_MIN,
    SECTION_HEADING_PATTERN,
    RewarderSettings,
)

logger: Final = logging.getLogger(__name__)

ToggleField = Literal["show_modal", "save_reward_to_daily", "save_task_to_daily", "use_as_inspirational"]
HeadingField = Literal["save_reward_section_heading", "save_task_section_heading"]
CharacterField = Literal["completed_task_character", "escape_character_begin", "escape_character_end"]
ResettableField = Literal[
    "rewards_file",
    "save_reward_section_heading",
    "save_task_section_heading",
    "reward_preface",
    "completed_task_character",
    "escape_character_begin",
    "escape_character_end",
]

_SECTION_HEADING: Final = re.compile(SECTION_HEADING_PATTERN)


def format_number(value: float) -> str:
    """Format a number for display, without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def parse_occurrence(text: str) -> tuple[float, bool] | None:
    """Parse and clamp an occurrence percentage.

    Args:
        text: Raw input text

    Returns:
        Tuple of (value clamped to 0.1-100, whether clamping happened),
        or None if the text is not a number
    """
    if not text.strip():
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None

    if value > OCCURRENCE_MAX:
        return OCCURRENCE_MAX, True
    if value < OCCURRENCE_MIN:
        return OCCURRENCE_MIN, True
    return value, False


class SettingsForm:
    """Binds a settings record to a declarative form.

    The form reads the record, renders one control per field into the
    container and writes validated edits back. Invalid input is never
    reported as an error; it is either:

    - dropped, leaving the field at its last good value
    - clamped into range and redisplayed
    - replaced by the default (rewards file only)

    Every accepted edit is followed by a call to ``save``. Changes that
    alter what another control should show trigger a full re-render
    through ``display()``.

    Examples:
        persister = SettingsPersister(settings, store)
        form = SettingsForm(settings, persister.save, container)
        form.display()
    """

    def __init__(
        self,
        settings: RewarderSettings,
        save: Callable[[], None],
        container: SettingsContainer,
    ):
        """Initialize the form.

        Args:
            settings: Live settings record, mutated in place
            save: Persists the record after each accepted edit
            container: Host surface to render into
        """
        self.settings = settings
        self.save = save
        self.container = container

    # ---- rendering ----
    def display(self) -> None:
        """Rebuild every control from the current settings."""
        self.container.empty()
        settings = self.settings
        add = self.container.add

        add(Heading("Functionality settings", level=1))

        add(
            Setting(
                key="rewards_file",
                name="File with Rewards",
                description='For example "Rewards.md" or "Folder/Rewards.md"',
                control=TextInput(
                    value=settings.rewards_file,
                    placeholder=DEFAULT_SETTINGS.rewards_file,
                    on_change=self.set_rewards_file,
                ),
                reset=self._reset_button("rewards_file"),
            )
        )
        add(
            self._toggle(
                "show_modal",
                "Show popup when reward is awarded",
                "If disabled a less prominent notice will be shown instead",
            )
        )
        add(
            self._toggle(
                "save_reward_to_daily",
                "Save rewards in daily note",
                "Will save rewards received to the end of the daily note "
                "or section heading specified below",
            )
        )
        add(
            self._section_heading(
                "save_reward_section_heading",
                "The section heading of daily note used to save rewards",
                "This section heading is used as the place for saving rewards "
                "received in the daily note",
                placeholder="## Rewards",
            )
        )
        add(
            Setting(
                key="reward_preface",
                name="Reward preface text",
                description="The text that appears before each reward in the daily note",
                control=TextInput(
                    value=settings.reward_preface,
                    placeholder=DEFAULT_SETTINGS.reward_preface,
                    on_change=self.set_reward_preface,
                ),
                reset=self._reset_button("reward_preface"),
            )
        )
        add(
            self._toggle(
                "save_task_to_daily",
                "Save task in daily note",
                "Will save completed tasks to the end of the daily note "
                "or section heading specified below",
            )
        )
        add(
            self._section_heading(
                "save_task_section_heading",
                "The section heading of daily note used to save tasks",
                "This section heading is used as the place for saving the "
                "completed tasks in the daily note",
                placeholder="## CompletedTasks",
            )
        )
        add(
            self._toggle(
                "use_as_inspirational",
                "Use with quotes instead of rewards",
                "Rewards are shown as inspirational quotes instead of congratulations",
            )
        )

        add(Heading("Reward settings", level=1))
        add(Heading("Occurrence values", level=3))
        for i, occurrence in enumerate(settings.occurrence_types):
            description = "Between 0.1% to 100% for every finished task"
            if i == 0:
                description += ". This is the default value for rewards"
            add(
                Setting(
                    key=f"occurrence_types.{i}.value",
                    name=f"How often should {occurrence.label} rewards occur?",
                    description=description,
                    control=TextInput(
                        value=format_number(occurrence.value),
                        placeholder=format_number(occurrence.value),
                        input_type="number",
                        on_change=partial(self.set_occurrence_value, i),
                    ),
                    reset=ResetButton(on_click=partial(self.reset_occurrence_value, i)),
                )
            )

        add(Heading("Occurrence labels", level=3))
        for i, occurrence in enumerate(settings.occurrence_types):
            add(
                Setting(
                    key=f"occurrence_types.{i}.label",
                    name=f'Would you like to rename "{occurrence.label}"?',
                    control=TextInput(
                        value=occurrence.label,
                        placeholder=occurrence.label,
                        on_change=partial(self.set_occurrence_label, i),
                    ),
                    reset=ResetButton(on_click=partial(self.reset_occurrence_label, i)),
                )
            )

        add(Heading("Special characters", level=3))
        add(
            self._special_character(
                "completed_task_character",
                "Completed task",
                "This character is used as prefix for completed tasks in the daily note",
            )
        )
        add(
            self._special_character(
                "escape_character_begin",
                "Start of metadata",
                "This character shows the start of the reward's data",
            )
        )
        add(
            self._special_character(
                "escape_character_end",
                "End of metadata",
                "This character shows the end of the reward's data",
            )
        )

    def _toggle(self, field: ToggleField, name: str, description: str) -> Setting:
        return Setting(
            key=field,
            name=name,
            description=description,
            control=Toggle(
                value=getattr(self.settings, field),
                on_change=partial(self.set_toggle, field),
            ),
        )

    def _section_heading(
        self, field: HeadingField, name: str, description: str, placeholder: str
    ) -> Setting:
        return Setting(
            key=field,
            name=name,
            description=description,
            control=TextInput(
                # An absent heading shows as an empty input
                value=getattr(self.settings, field) or "",
                placeholder=placeholder,
                on_change=partial(self.set_section_heading, field),
            ),
            reset=self._reset_button(field),
        )

    def _special_character(self, field: CharacterField, name: str, description: str) -> Setting:
        return Setting(
            key=field,
            name=name,
            description=description,
            control=TextInput(
                value=getattr(self.settings, field),
                placeholder=getattr(DEFAULT_SETTINGS, field),
                on_change=partial(self.set_special_character, field),
            ),
            reset=self._reset_button(field),
        )

    def _reset_button(self, field: ResettableField) -> ResetButton:
        return ResetButton(on_click=partial(self.reset_field, field))

    # ---- edit handlers ----
    def set_rewards_file(self, value: str) -> bool:
        """Store a normalized rewards file path, falling back to the default."""
        path = sanitise_note(value)
        if path is None:
            logger.debug("Blank rewards file, falling back to %s", DEFAULT_SETTINGS.rewards_file)
            path = DEFAULT_SETTINGS.rewards_file
        self.settings.rewards_file = path
        self.save()
        return True

    def set_toggle(self, field: ToggleField, value: bool) -> bool:
        setattr(self.settings, field, bool(value))
        self.save()
        return True

    def set_section_heading(self, field: HeadingField, value: str) -> bool:
        """Store a daily note heading; it must start with one or more ``#``."""
        if not value or not _SECTION_HEADING.match(value):
            logger.debug("Ignoring %s %r: not a markdown heading", field, value)
            return False
        setattr(self.settings, field, value)
        self.save()
        return True

    def set_reward_preface(self, value: str) -> bool:
        self.settings.reward_preface = value
        self.save()
        return True

    def set_occurrence_value(self, index: int, text: str) -> bool:
        """Store an occurrence percentage, clamped to 0.1-100.

        A clamped value is redisplayed so the input shows what was stored.
        """
        parsed = parse_occurrence(text)
        if parsed is None:
            logger.debug("Ignoring occurrence value %r: not a number", text)
            return False

        value, clamped = parsed
        self.settings.occurrence_types[index].value = value
        self.save()
        if clamped:
            logger.debug("Clamped occurrence value %r to %s", text, format_number(value))
            self.display()
        return True

    def set_occurrence_label(self, index: int, value: str) -> bool:
        if not value:
            logger.debug("Ignoring empty label for occurrence %d", index)
            return False
        self.settings.occurrence_types[index].label = value
        self.save()
        return True

    def set_special_character(self, field: CharacterField, value: str) -> bool:
        """Store a metadata or task marker; any non-empty string is accepted."""
        if not value:
            logger.debug("Ignoring empty %s", field)
            return False
        setattr(self.settings, field, value)
        self.save()
        return True

    # ---- reset handlers ----
    def reset_field(self, field: ResettableField) -> None:
        """Restore a field's default value and redisplay."""
        setattr(self.settings, field, getattr(DEFAULT_SETTINGS, field))
        self.save()
        self.display()

    def reset_occurrence_value(self, index: int) -> None:
        self.settings.occurrence_types[index].value = DEFAULT_SETTINGS.occurrence_types[index].value
        self.save()
        self.display()

    def reset_occurrence_label(self, index: int) -> None:
        self.settings.occurrence_types[index].label = DEFAULT_SETTINGS.occurrence_types[index].label
        self.save()
        self.display()
