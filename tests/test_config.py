import logging

import pytest

from mxn_usd.config import Config, _float_or_none, _read_nested, resolve_secret


@pytest.mark.parametrize(
    "raw, expected",
    [("30", 30.0), ("2.5", 2.5), (None, None), ("", None), ("0", None), ("-1", None), ("soon", None)],
)
def test_timeout_parsing(raw, expected):
    assert _float_or_none(raw) == expected


def test_read_nested_only_returns_strings():
    config = {"banxico": {"token": "abc", "retries": 3}}

    assert _read_nested(config, "banxico", "token") == "abc"
    assert _read_nested(config, "banxico", "retries") is None
    assert _read_nested(config, "wise", "token") is None


def test_environment_wins_over_legacy_config(monkeypatch):
    monkeypatch.setenv("BANXICO_TOKEN", "from-env")
    monkeypatch.setenv("FUNCTIONS_CONFIG", '{"banxico": {"token": "from-legacy"}}')

    assert Config.get_banxico_token() == "from-env"


def test_malformed_legacy_config_is_ignored(monkeypatch):
    monkeypatch.setenv("FUNCTIONS_CONFIG_JSON", "{not json")

    assert resolve_secret("BANXICO_TOKEN", "banxico") is None
    assert Config.get_banxico_headers() == {}


def test_missing_token_is_logged_once(caplog):
    with caplog.at_level(logging.WARNING, logger="mxn_usd.config"):
        for _ in range(3):
            assert Config.get_banxico_headers() == {}
            assert "Authorization" not in Config.get_wise_headers()

    messages = [record.getMessage() for record in caplog.records]
    assert sum("BANXICO_TOKEN is not configured" in m for m in messages) == 1
    assert sum("WISE_API_TOKEN is not configured" in m for m in messages) == 1
