from __future__ import annotations

import pytest

from weld_quoter import config
from weld_quoter.engine.settings import WeldSettings


@pytest.fixture(autouse=True)
def _isolated_settings_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(config.APP_SETTINGS_ENV_VAR, raising=False)
    monkeypatch.setattr(config, "_APP_SETTINGS_CACHE", None)


@pytest.fixture
def app_settings() -> dict:
    return config.load_app_settings(reload=True)


@pytest.fixture
def settings(app_settings: dict) -> WeldSettings:
    return WeldSettings.from_mapping(app_settings)
