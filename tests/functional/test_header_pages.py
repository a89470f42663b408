from locket.auth.models import AuthResponse
from locket.utils.csrf import CSRF_COOKIE_NAME

HTML = {"Accept": "text/html"}


def _csrf(client):
    client.get("/")
    return client.cookies.get(CSRF_COOKIE_NAME)


def test_landing_signed_out_shows_login_and_signup(client):
    res = client.get("/")
    assert res.status_code == 200
    assert 'href="/login"' in res.text and ">Log In<" in res.text
    assert 'href="/signup"' in res.text and ">Sign Up<" in res.text
    assert "account-menu" not in res.text


def test_stale_session_renders_signed_out_header(client, monkeypatch):
    def _reject(token):
        raise RuntimeError("JWT expired")

    monkeypatch.setattr("locket.auth.service.get_user_from_token", _reject)
    client.cookies.set("sb_access", "stale")
    res = client.get("/")
    assert res.status_code == 200
    assert ">Log In<" in res.text


def test_signed_in_without_photo_shows_initial_and_menu(client, signed_in):
    signed_in("a@b.com")
    res = client.get("/")
    assert res.status_code == 200
    assert '<span class="avatar-fallback">A</span>' in res.text
    assert 'href="/profile"' in res.text and ">Profile<" in res.text
    assert 'action="/auth/logout"' in res.text and ">Log out<" in res.text
    assert ">Log In<" not in res.text
    assert ">Sign Up<" not in res.text


def test_signed_in_with_photo_shows_image(client, signed_in):
    signed_in("zoe@x.io", full_name="Zoe", avatar_url="https://cdn.example.com/zoe.png")
    res = client.get("/")
    assert '<img src="https://cdn.example.com/zoe.png" alt="Zoe"' in res.text
    assert "avatar-fallback" not in res.text


def test_logout_menu_carries_csrf_token(client, signed_in):
    signed_in()
    res = client.get("/")
    token = client.cookies.get(CSRF_COOKIE_NAME)
    assert token
    assert f'name="csrf_token" value="{token}"' in res.text


def test_logout_success_clears_session_and_redirects_home(client, signed_in, monkeypatch):
    signed_in()
    token = _csrf(client)
    calls = []

    def _logout(user_token):
        calls.append(user_token)
        return AuthResponse(True)

    monkeypatch.setattr("locket.auth.service.logout", _logout)
    res = client.post("/auth/logout", data={"csrf_token": token}, follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/"
    cookies = " ".join(res.headers.get_list("set-cookie")).lower()
    assert "sb_access=" in cookies and "max-age=0" in cookies
    assert "no-store" in res.headers.get("cache-control", "")
    assert calls == ["session-token"]


def test_logout_failure_stays_put(client, signed_in, monkeypatch):
    signed_in()
    token = _csrf(client)
    monkeypatch.setattr("locket.auth.service.logout", lambda t: AuthResponse(False, error="Sign-out failed: status 500"))
    res = client.post("/auth/logout", data={"csrf_token": token}, follow_redirects=False)
    assert res.status_code == 204
    assert "location" not in res.headers
    assert "sb_access=" not in " ".join(res.headers.get_list("set-cookie"))


def test_logout_without_csrf_is_forbidden(client, signed_in):
    signed_in()
    res = client.post("/auth/logout", follow_redirects=False)
    assert res.status_code == 403


def test_logout_without_session_redirects_home(client):
    res = client.post("/auth/logout", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/"


def test_profile_requires_login_for_browsers(client):
    res = client.get("/profile", headers=HTML, follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"].startswith("/login?error=")


def test_profile_signed_in(client, signed_in):
    signed_in("a@b.com", full_name="Ada")
    res = client.get("/profile", headers=HTML)
    assert res.status_code == 200
    assert "a@b.com" in res.text
    assert "Ada" in res.text
    assert "no-store" in res.headers.get("cache-control", "")


def test_checkout_page_exposes_only_public_client_id(client):
    res = client.get("/checkout")
    assert res.status_code == 200
    assert "client-id=test-client-id-ABCD" in res.text
    assert "test-secret" not in res.text
