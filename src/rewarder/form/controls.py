# src/rewarder/form/controls.py
"""Declarative controls emitted by the settings form.

The form never touches a UI toolkit. It describes each row as plain data
with bound callbacks and hands it to a ``SettingsContainer``; the host
turns the description into real widgets.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol, Union, runtime_checkable


@dataclass
class Heading:
    """Section title."""

    text: str
    level: int = 1


@dataclass
class TextInput:
    """Single line input; ``on_change`` receives the raw text."""

    value: str
    on_change: Callable[[str], bool]
    placeholder: str = ""
    input_type: Literal["text", "number"] = "text"


@dataclass
class Toggle:
    """On/off switch."""

    value: bool
    on_change: Callable[[bool], bool]


@dataclass
class ResetButton:
    """Icon button that restores a field's default value."""

    on_click: Callable[[], None]
    icon: str = "reset"
    tooltip: str = "Restore default"


@dataclass
class Setting:
    """One labelled row of the form.

    ``key`` identifies the bound field with a dotted path such as
    ``rewards_file`` or ``occurrence_types.0.value``.
    """

    key: str
    name: str
    control: TextInput | Toggle
    description: str = ""
    reset: ResetButton | None = None


FormItem = Union[Heading, Setting]


@runtime_checkable
class SettingsContainer(Protocol):
    """Protocol for the host surface the form renders into."""

    def empty(self) -> None:
        """Discard every item rendered so far."""
        ...

    def add(self, item: FormItem) -> None:
        """Append an item below the existing ones."""
        ...


class RecordingContainer:
    """Container that keeps the rendered items in memory.

    Used by tests and by the CLI, which drives the form through the
    recorded callbacks instead of real widgets.
    """

    def __init__(self) -> None:
        self.items: list[FormItem] = []
        self.render_count = 0

    def empty(self) -> None:
        self.items = []
        self.render_count += 1

    def add(self, item: FormItem) -> None:
        self.items.append(item)

    @property
    def settings(self) -> list[Setting]:
        """Rendered rows, headings excluded."""
        return [item for item in self.items if isinstance(item, Setting)]

    def find(self, key: str) -> Setting:
        """Return the rendered row bound to ``key``.

        Raises:
            KeyError: If no row has that key
        """
        for setting in self.settings:
            if setting.key == key:
                return setting
        raise KeyError(key)
