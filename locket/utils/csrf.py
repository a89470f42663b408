# module locket.utils.csrf
from fastapi import FastAPI, Request
from fastapi.responses import Response, JSONResponse
import secrets
import urllib.parse
from locket import config
from locket.utils.security import COOKIE_NAME

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
# API JSON publique (sans cookie par contrat): exemptée du double-submit
CSRF_EXEMPT_PREFIXES = (
    "/api/paypal/",
    "/static",
)

def get_or_create_csrf_token(request: Request) -> str:
    """
    Renvoie le token CSRF existant (cookie) ou en crée un nouveau.
    Mémorisé sur request.state pour que middleware et templates partagent la même valeur.
    """
    token = getattr(request.state, "csrf_token", None) or request.cookies.get(CSRF_COOKIE_NAME)
    if not token:
        token = secrets.token_urlsafe(32)
    request.state.csrf_token = token
    return token

def attach_csrf_cookie_if_missing(response: Response, request: Request, token: str) -> None:
    """
    Pose le cookie CSRF si absent pour le navigateur.
    """
    if not request.cookies.get(CSRF_COOKIE_NAME):
        response.set_cookie(
            key=CSRF_COOKIE_NAME,
            value=token,
            httponly=False,
            secure=config.COOKIE_SECURE,
            samesite="Lax",
            max_age=60 * 60,
            path="/",
        )

def _is_exempt(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in CSRF_EXEMPT_PREFIXES)

def register_csrf_middleware(app: FastAPI) -> None:
    """
    Double-submit cookie: sur les requêtes mutatives portant une session (sb_access),
    le header X-CSRF-Token (ou le champ de formulaire csrf_token) doit égaler le cookie csrf_token.
    """
    @app.middleware("http")
    async def csrf_protection(request: Request, call_next):
        method = request.method.upper()
        has_session = bool(request.cookies.get(COOKIE_NAME))
        is_state_changing = method in ("POST", "PUT", "PATCH", "DELETE")

        token = get_or_create_csrf_token(request)

        if is_state_changing and has_session and not _is_exempt(request.url.path):
            header_token = request.headers.get(CSRF_HEADER_NAME, "")
            cookie_token = request.cookies.get(CSRF_COOKIE_NAME, "")
            form_token = ""

            if not header_token:
                ctype = request.headers.get("content-type", "")
                if ctype.startswith("application/x-www-form-urlencoded"):
                    body = await request.body()

                    async def receive():
                        return {"type": "http.request", "body": body, "more_body": False}
                    request._receive = receive

                    parsed_body = urllib.parse.parse_qs(body.decode("utf-8", errors="replace"))
                    csrf_values = parsed_body.get(CSRF_HEADER_NAME, []) + parsed_body.get("csrf_token", [])
                    if csrf_values:
                        form_token = csrf_values[0]

            provided = header_token or form_token
            if not cookie_token or not provided or not secrets.compare_digest(provided, cookie_token):
                return JSONResponse(status_code=403, content={"detail": "CSRF verification failed"})

        response = await call_next(request)
        attach_csrf_cookie_if_missing(response, request, token)
        return response
