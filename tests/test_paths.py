import pytest

from rewarder.paths import normalize_path, sanitise_note


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Rewards.md", "Rewards.md"),
        ("Folder//Rewards.md", "Folder/Rewards.md"),
        ("/Folder/Rewards.md/", "Folder/Rewards.md"),
        ("Folder\\Sub\\Rewards.md", "Folder/Sub/Rewards.md"),
        ("My\u00a0Rewards.md", "My Rewards.md"),
        ("///", "/"),
    ],
)
def test_normalize_path(raw: str, expected: str) -> None:
    assert normalize_path(raw) == expected


def test_normalize_path_applies_nfc() -> None:
    decomposed = "Cafe\u0301.md"
    assert normalize_path(decomposed) == "Caf\u00e9.md"


@pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
def test_sanitise_note_blank(raw: str | None) -> None:
    assert sanitise_note(raw) is None


def test_sanitise_note_normalizes() -> None:
    assert sanitise_note("Folder//Rewards.md") == "Folder/Rewards.md"
