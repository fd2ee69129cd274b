from typing import Any, Dict, List, Optional

import pytest

from mxn_usd import config as config_module
from mxn_usd.config import resolve_secret


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON payload")
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``; returns one canned response or raises."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params=None, headers=None, timeout=None) -> FakeResponse:
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def banxico_payload(*series: Dict[str, Any]) -> Dict[str, Any]:
    return {"bmx": {"series": list(series)}}


def banxico_series(series_id: str, dato: str, fecha: str = "15/03/2024") -> Dict[str, Any]:
    return {
        "idSerie": series_id,
        "titulo": "Tipo de cambio",
        "datos": [{"fecha": fecha, "dato": dato}],
    }


@pytest.fixture(autouse=True)
def clear_secrets(monkeypatch):
    for name in (
        "FIREBASE_FUNCTIONS_CONFIG",
        "FUNCTIONS_CONFIG",
        "FUNCTIONS_CONFIG_JSON",
        "WISE_API_TOKEN",
        "BANXICO_TOKEN",
        "EXCHANGERATE_HOST_ACCESS_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    resolve_secret.cache_clear()
    config_module._WARNED_SECRETS.clear()
    yield
    resolve_secret.cache_clear()
    config_module._WARNED_SECRETS.clear()
