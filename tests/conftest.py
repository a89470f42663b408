import os

# Le limiter Redis n'est jamais initialisé en tests (avant l'import de l'app)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
import httpx
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from locket import config
from locket.asgi import app as fastapi_app
from locket.paypal import client as paypal_client

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Jamais d'appel réel à Supabase
@pytest.fixture(autouse=True)
def mock_supabase(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr("locket.infra.supabase_client.get_supabase", lambda: fake)
    monkeypatch.setattr("locket.auth.repository.get_supabase", lambda: fake)
    return fake

@pytest.fixture(autouse=True)
def paypal_config(monkeypatch):
    """Identifiants PayPal sandbox factices; cache de jetons désactivé (comportement par défaut)."""
    monkeypatch.setattr(config, "PAYPAL_CLIENT_ID", "test-client-id-ABCD")
    monkeypatch.setattr(config, "PAYPAL_SECRET", "test-secret")
    monkeypatch.setattr(config, "PAYPAL_MODE", "sandbox")
    monkeypatch.setattr(config, "PAYPAL_TOKEN_CACHE", False)
    paypal_client.token_cache.clear()
    yield
    paypal_client.token_cache.clear()


class PayPalStub:
    """
    Faux PayPal branché via httpx.MockTransport.
    Chaque réponse est un couple (status, body): dict => JSON, str => texte brut.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.token = (200, {"access_token": "A21AA-test-token", "token_type": "Bearer", "expires_in": 32400})
        self.order = (201, {"id": "ORDER123", "status": "CREATED"})
        self.capture = (201, {"id": "ORDER123", "status": "COMPLETED"})

    @staticmethod
    def _build(reply) -> httpx.Response:
        status, body = reply
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/v1/oauth2/token":
            return self._build(self.token)
        if path.endswith("/capture"):
            return self._build(self.capture)
        if path == "/v2/checkout/orders":
            return self._build(self.order)
        return httpx.Response(404, json={"name": "RESOURCE_NOT_FOUND"})

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def last(self, path: str) -> Optional[httpx.Request]:
        matching = [r for r in self.requests if r.url.path == path]
        return matching[-1] if matching else None


@pytest.fixture
def paypal_stub(monkeypatch) -> PayPalStub:
    stub = PayPalStub()

    def _fake_http_client() -> httpx.Client:
        return httpx.Client(base_url=config.paypal_base_url(), transport=httpx.MockTransport(stub.handler))

    monkeypatch.setattr(paypal_client, "_http_client", _fake_http_client)
    return stub


def make_user(email: str = "a@b.com", **metadata: Any) -> Dict[str, Any]:
    return {"id": "user-1", "email": email, "metadata": metadata, "token": "session-token"}


@pytest.fixture
def signed_in(monkeypatch, client):
    """
    Simule une session: cookie sb_access + résolution du jeton par le service Auth.
    Retourne une fonction pour choisir l'utilisateur (email, full_name, avatar_url...).
    """
    def _sign_in(email: str = "a@b.com", **metadata: Any) -> Dict[str, Any]:
        user = make_user(email, **metadata)
        monkeypatch.setattr("locket.auth.service.get_user_from_token", lambda token: user)
        client.cookies.set("sb_access", "session-token")
        return user
    return _sign_in
