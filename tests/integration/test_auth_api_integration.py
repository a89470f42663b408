from locket.auth.models import AuthResponse


def _ok(email="u@test.com", token="AT"):
    return AuthResponse(True, user={"id": "u1", "email": email, "metadata": {}}, session={"access_token": token})


def test_api_login_success_sets_cookie(client, monkeypatch):
    monkeypatch.setattr("locket.auth.service.login", lambda email, pwd: _ok(email))
    res = client.post("/api/v1/auth/login", json={"email": "u@test.com", "password": "x"})
    assert res.status_code == 200
    data = res.json()
    assert data["access_token"] == "AT"
    assert data["user"]["id"] == "u1"
    assert "sb_access=AT" in res.headers.get("set-cookie", "")


def test_api_login_invalid(client, monkeypatch):
    monkeypatch.setattr("locket.auth.service.login", lambda email, pwd: AuthResponse(False, error="bad creds"))
    res = client.post("/api/v1/auth/login", json={"email": "u@test.com", "password": "bad"})
    assert res.status_code == 401
    assert res.json() == {"detail": "bad creds"}


def test_api_signup_without_session_returns_message(client, monkeypatch):
    monkeypatch.setattr(
        "locket.auth.service.signup",
        lambda email, pwd, full_name=None: AuthResponse(True, error="Sign-up successful, please check your email"),
    )
    res = client.post("/api/v1/auth/signup", json={"email": "new@test.com", "password": "Secret123", "full_name": "New"})
    assert res.status_code == 200
    assert "check your email" in res.json()["message"]


def test_api_signup_weak_password_is_422(client):
    res = client.post("/api/v1/auth/signup", json={"email": "new@test.com", "password": "alllowercase"})
    assert res.status_code == 422


def test_api_me_requires_session(client):
    res = client.get("/api/v1/auth/me")
    assert res.status_code == 401
    assert res.json() == {"detail": "Not authenticated"}


def test_api_me_returns_user(client, signed_in):
    signed_in("a@b.com", full_name="Ada")
    res = client.get("/api/v1/auth/me")
    assert res.status_code == 200
    assert res.json() == {"id": "user-1", "email": "a@b.com", "metadata": {"full_name": "Ada"}}
