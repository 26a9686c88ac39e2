"""Settings form and the declarative controls it renders."""

from rewarder.form.controls import (
    FormItem,
    Heading,
    RecordingContainer,
    ResetButton,
    Setting,
    SettingsContainer,
    TextInput,
    Toggle,
)
from rewarder.form.settings_form import SettingsForm, format_number, parse_occurrence

__all__ = [
    "FormItem",
    "Heading",
    "RecordingContainer",
    "ResetButton",
    "Setting",
    "SettingsContainer",
    "SettingsForm",
    "TextInput",
    "Toggle",
    "format_number",
    "parse_occurrence",
]
