from locket import config
from locket.app_setup.factory import create_app


def test_no_signed_cookie_session_middleware():
    # La session web est le cookie sb_access; aucun middleware de session signée
    app = create_app()
    names = [m.cls.__name__ for m in app.user_middleware]
    assert "SessionMiddleware" not in names
    assert "CORSMiddleware" in names


def test_paypal_base_url_follows_mode_at_call_time(monkeypatch):
    assert not hasattr(config, "PAYPAL_BASE_URL")
    monkeypatch.setattr(config, "PAYPAL_MODE", "live")
    assert config.paypal_base_url() == "https://api-m.paypal.com"
    monkeypatch.setattr(config, "PAYPAL_MODE", "sandbox")
    assert config.paypal_base_url() == "https://api-m.sandbox.paypal.com"
    assert config.paypal_base_url("live") == "https://api-m.paypal.com"
