import pytest

from rewarder.form import RecordingContainer, SettingsForm
from rewarder.settings import MemoryStore, RewarderSettings, SettingsPersister


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def settings() -> RewarderSettings:
    return RewarderSettings.defaults()


@pytest.fixture
def container() -> RecordingContainer:
    return RecordingContainer()


@pytest.fixture
def form(settings: RewarderSettings, store: MemoryStore, container: RecordingContainer) -> SettingsForm:
    persister = SettingsPersister(settings, store)
    form = SettingsForm(settings, persister.save, container)
    form.display()
    return form


@pytest.fixture(autouse=True)
def no_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REWARDER_SETTINGS", raising=False)
