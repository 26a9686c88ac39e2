from pathlib import Path

import pytest
from pydantic import ValidationError

from rewarder.errors import SettingsLoadError
from rewarder.settings import DEFAULT_SETTINGS, MemoryStore, OccurrenceType, RewarderSettings


def test_defaults() -> None:
    cfg = RewarderSettings.defaults()
    assert cfg.rewards_file == "Rewards.md"
    assert cfg.completed_task_character == "☑️"
    assert (cfg.escape_character_begin, cfg.escape_character_end) == ("{", "}")
    assert [(o.label, o.value) for o in cfg.occurrence_types] == [
        ("common", 20),
        ("rare", 5),
        ("legendary", 0.5),
    ]
    assert cfg.show_modal is True
    assert cfg.save_reward_to_daily is False
    assert cfg.save_reward_section_heading is None
    assert cfg.save_task_section_heading is None
    assert cfg.reward_preface == "- [ ] Earned reward: "


def test_defaults_are_fresh_copies() -> None:
    cfg = RewarderSettings.defaults()
    cfg.occurrence_types[0].value = 1
    assert DEFAULT_SETTINGS.occurrence_types[0].value == 20


def test_from_persisted_merges_over_defaults() -> None:
    cfg = RewarderSettings.from_persisted({"rewardsFile": "Folder/Rewards.md", "showModal": False})
    assert cfg.rewards_file == "Folder/Rewards.md"
    assert cfg.show_modal is False
    assert cfg.escape_character_begin == "{"
    assert cfg.reward_preface == DEFAULT_SETTINGS.reward_preface


def test_from_persisted_accepts_snake_case_keys() -> None:
    cfg = RewarderSettings.from_persisted({"reward_preface": "", "save_task_to_daily": True})
    assert cfg.reward_preface == ""
    assert cfg.save_task_to_daily is True


def test_from_persisted_none_gives_defaults() -> None:
    assert RewarderSettings.from_persisted(None) == RewarderSettings.defaults()


@pytest.mark.parametrize(
    "data",
    [
        {"saveRewardSectionHeading": "Rewards"},
        {"escapeCharacterBegin": ""},
        {"occurrenceTypes": [{"label": "common", "value": 200}] * 3},
        {"occurrenceTypes": [{"label": "common", "value": 20}]},
        {"rewardsFile": ""},
    ],
)
def test_from_persisted_rejects_invalid(data: dict) -> None:
    with pytest.raises(SettingsLoadError):
        RewarderSettings.from_persisted(data)


def test_load_error_is_runtime_error() -> None:
    with pytest.raises(RuntimeError):
        RewarderSettings.from_persisted({"showModal": "not a bool"})


def test_assignment_is_validated() -> None:
    cfg = RewarderSettings.defaults()
    with pytest.raises(ValidationError):
        cfg.occurrence_types[1].value = 0.01
    with pytest.raises(ValidationError):
        cfg.save_task_section_heading = "Tasks"
    assert cfg.occurrence_types[1].value == 5
    assert cfg.save_task_section_heading is None


def test_to_persisted_uses_camel_case_and_omits_absent_headings() -> None:
    data = RewarderSettings.defaults().to_persisted()
    assert data["rewardsFile"] == "Rewards.md"
    assert data["occurrenceTypes"][2] == {"label": "legendary", "value": 0.5}
    assert "saveRewardSectionHeading" not in data
    assert "saveTaskSectionHeading" not in data


def test_round_trip_through_store() -> None:
    store = MemoryStore()
    cfg = RewarderSettings.defaults()
    cfg.save_reward_section_heading = "## Rewards"
    cfg.occurrence_types[2] = OccurrenceType(label="epic", value=0.1)
    cfg.use_as_inspirational = True

    cfg.save(store)
    loaded = RewarderSettings.load(store)

    assert loaded == cfg
    assert loaded.save_task_section_heading is None
    assert "saveTaskSectionHeading" not in store.data


def test_load_without_store_uses_env_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "rewarder.yaml"
    path.write_text("rewardsFile: Vault/Prizes.md\n")
    monkeypatch.setenv("REWARDER_SETTINGS", str(path))

    assert RewarderSettings.load().rewards_file == "Vault/Prizes.md"


def test_load_without_store_missing_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REWARDER_SETTINGS", str(tmp_path / "missing.yaml"))
    with pytest.raises(FileNotFoundError):
        RewarderSettings.load()


def test_load_without_any_file_gives_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(RewarderSettings, "DEFAULT_SETTINGS_PATHS", [tmp_path / "nope.yaml"])
    assert RewarderSettings.load() == RewarderSettings.defaults()
