from app.core.config import Settings


def test_stop_wait_timeout_from_env(monkeypatch):
    monkeypatch.setenv("STOP_WAIT_TIMEOUT", "2.5")

    assert Settings().STOP_WAIT_TIMEOUT == 2.5


def test_stop_wait_timeout_none_from_env(monkeypatch):
    monkeypatch.setenv("STOP_WAIT_TIMEOUT", "None")

    assert Settings().STOP_WAIT_TIMEOUT is None


def test_max_log_entries_from_env(monkeypatch):
    monkeypatch.setenv("MAX_LOG_ENTRIES", "3")

    assert Settings().MAX_LOG_ENTRIES == 3
