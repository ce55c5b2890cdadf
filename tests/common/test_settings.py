from __future__ import annotations

import pytest

from config import get_settings_module, load_settings


@pytest.mark.parametrize(
    "env, expected",
    [("production", "config.production"), ("test", "config.testing"), ("anything", "config.development")],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_testing_settings_never_touch_the_dev_database(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    settings = load_settings()

    assert settings.TESTING is True
    assert settings.DB_CONFIG["database"].endswith("_test")
