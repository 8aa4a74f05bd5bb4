import pytest

from tribuna import settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    for getter in (settings.get_api_port, settings.get_api_bind_host, settings.get_log_level):
        getter.cache_clear()
    yield
    for getter in (settings.get_api_port, settings.get_api_bind_host, settings.get_log_level):
        getter.cache_clear()


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("no", False), ("", True)],
)
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("TRIBUNA_TEST_FLAG", raw)
    assert settings.env_flag("TRIBUNA_TEST_FLAG", True) is expected


def test_api_port_prefers_tribuna_variable(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("TRIBUNA_API_PORT", "8100")
    assert settings.get_api_port() == 8100


def test_api_port_falls_back_to_port(monkeypatch):
    monkeypatch.delenv("TRIBUNA_API_PORT", raising=False)
    monkeypatch.setenv("PORT", "9000")
    assert settings.get_api_port() == 9000


def test_log_level_default(monkeypatch):
    monkeypatch.delenv("TRIBUNA_LOG_LEVEL", raising=False)
    assert settings.get_log_level() == "INFO"
