"""Tests for settings loaded from the environment."""

from vcflow.config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in ("VC_REMOTE", "VC_MAIN_BRANCH", "VC_TICKET_PREFIX", "VC_TICKET_URL", "VC_VERBOSE"):
        monkeypatch.delenv(name, raising=False)

    assert load_settings() == Settings()


def test_from_environment(monkeypatch):
    monkeypatch.setenv("VC_REMOTE", "upstream")
    monkeypatch.setenv("VC_MAIN_BRANCH", "main")
    monkeypatch.setenv("VC_TICKET_PREFIX", "PROJ")
    monkeypatch.setenv("VC_TICKET_URL", "https://tickets.example.com/browse/")
    monkeypatch.setenv("VC_VERBOSE", "yes")

    settings = load_settings()

    assert settings.remote == "upstream"
    assert settings.main_branch == "main"
    assert settings.ticket_prefix == "PROJ"
    assert settings.ticket_url == "https://tickets.example.com/browse/"
    assert settings.verbose is True


def test_empty_values_fall_back(monkeypatch):
    monkeypatch.setenv("VC_MAIN_BRANCH", "")
    monkeypatch.setenv("VC_VERBOSE", "0")

    settings = load_settings()

    assert settings.main_branch == "master"
    assert settings.verbose is False


def test_release_branch():
    assert Settings().release_branch(70) == "release/sprint_70"
