import pytest

from rowfft import _config


def test_logs_env(monkeypatch):
    monkeypatch.setenv("ROWFFT_LOGS", " plan, Launch ,,")
    assert _config.parse_rowfft_logs_env() == ["PLAN", "LAUNCH"]


def test_logs_env_unset(monkeypatch):
    monkeypatch.delenv("ROWFFT_LOGS", raising=False)
    assert _config.parse_rowfft_logs_env() == []


def test_logs_env_unknown_key(monkeypatch):
    monkeypatch.setenv("ROWFFT_LOGS", "PLAN,STAGES")
    with pytest.raises(RuntimeError, match="STAGES"):
        _config.parse_rowfft_logs_env()


@pytest.mark.parametrize("value, expected", [("", 8192), ("  ", 8192), ("1024", 1024)])
def test_int_env(value, expected, monkeypatch):
    monkeypatch.setenv("ROWFFT_MAX_LENGTH", value)
    assert _config.parse_int_env("ROWFFT_MAX_LENGTH", 8192) == expected


@pytest.mark.parametrize("value", ["abc", "0", "-8", "1.5"])
def test_int_env_invalid(value, monkeypatch):
    monkeypatch.setenv("ROWFFT_NUM_WARPS", value)
    with pytest.raises(RuntimeError, match="ROWFFT_NUM_WARPS"):
        _config.parse_int_env("ROWFFT_NUM_WARPS", None)


def test_int_env_default_none(monkeypatch):
    monkeypatch.delenv("ROWFFT_NUM_WARPS", raising=False)
    assert _config.parse_int_env("ROWFFT_NUM_WARPS", None) is None
