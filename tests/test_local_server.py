import logging

import pytest

from local_server import create_app
from mxn_usd.services import RateService

from conftest import FakeResponse, FakeSession, banxico_payload, banxico_series


@pytest.fixture
def make_client():
    def factory(response=None, error=None):
        session = FakeSession(response=response, error=error)
        app = create_app(RateService(session=session))
        app.config["TESTING"] = True
        return app.test_client(), session

    return factory


def test_rate_endpoint_returns_envelope(make_client):
    client, session = make_client(FakeResponse(200, [{"rate": 17.23}]))

    response = client.get("/api/mxn-usd/wise")

    assert response.status_code == 200
    assert response.get_json() == {"mxn_usd": 17.23, "source": "mid-market", "provider": "Wise"}
    assert len(session.calls) == 1


def test_fee_query_parameter_is_forwarded(make_client):
    payload = banxico_payload(banxico_series("SF43718", "17,456700", "15/03/2024"))
    client, _ = make_client(FakeResponse(200, payload))

    response = client.get("/api/mxn-usd/banxico-fix?fee=0.02")

    body = response.get_json()
    assert response.status_code == 200
    assert body["customer_rate"] == 17.805834
    assert body["reference"]["date"] == "2024-03-15"


def test_invalid_fee_is_ignored(make_client):
    payload = banxico_payload(banxico_series("SF43718", "17.4567"))
    client, _ = make_client(FakeResponse(200, payload))

    response = client.get("/api/mxn-usd/banxico-fix?fee=abc")

    assert response.status_code == 200
    assert response.get_json()["fee"] == 0.0


def test_bad_payload_returns_502(make_client):
    client, _ = make_client(FakeResponse(200, {"rates": {}}))

    response = client.get("/api/mxn-usd/exchangerate-host")

    assert response.status_code == 502
    assert response.get_json()["error"].startswith("Could not parse exchange rate")


def test_upstream_failure_returns_500(make_client):
    client, _ = make_client(FakeResponse(503))

    response = client.get("/api/mxn-usd/banxico-mid")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}


def test_unknown_provider_returns_400(make_client):
    client, session = make_client()

    response = client.get("/api/mxn-usd/bitso")

    body = response.get_json()
    assert response.status_code == 400
    assert "bitso" in body["error"]
    assert "wise" in body["available_providers"]
    assert session.calls == []


def test_providers_and_health_endpoints(make_client):
    client, session = make_client()

    providers = client.get("/api/providers").get_json()["providers"]
    health = client.get("/health").get_json()

    assert providers["wise"]["provider"] == "Wise"
    assert health["status"] == "healthy"
    assert set(health["available_providers"]) == set(providers)
    assert session.calls == []


def test_error_envelopes_are_logged(make_client, caplog):
    client, _ = make_client(FakeResponse(200, {"rates": {}}))

    with caplog.at_level(logging.ERROR, logger="local_server"):
        response = client.get("/api/mxn-usd/exchangerate-host")

    assert response.status_code == 502
    assert any("exchangerate-host rate unavailable (502)" in r.getMessage() for r in caplog.records)


def test_successful_envelopes_are_not_logged_as_errors(make_client, caplog):
    client, _ = make_client(FakeResponse(200, [{"rate": 17.23}]))

    with caplog.at_level(logging.ERROR, logger="local_server"):
        client.get("/api/mxn-usd/wise")

    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
