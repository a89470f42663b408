from locket import config


def test_health_root(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_health_paypal_reports_configuration_without_secrets(client):
    res = client.get("/health/paypal")
    assert res.status_code == 200
    data = res.json()
    assert data == {
        "mode": "sandbox",
        "base_url": "https://api-m.sandbox.paypal.com",
        "client_id_configured": True,
        "secret_configured": True,
        "token_cache": False,
    }
    assert "test-secret" not in res.text
    assert "test-client-id" not in res.text


def test_health_paypal_live_and_missing_secret(client, monkeypatch):
    monkeypatch.setattr(config, "PAYPAL_MODE", "live")
    monkeypatch.setattr(config, "PAYPAL_SECRET", "")
    data = client.get("/health/paypal").json()
    assert data["mode"] == "live"
    assert data["base_url"] == "https://api-m.paypal.com"
    assert data["secret_configured"] is False


def test_health_rate_limit_disabled_in_tests(client):
    data = client.get("/health/rate-limit").json()
    assert data["enabled"] is False
