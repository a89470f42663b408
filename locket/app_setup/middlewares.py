"""
Middlewares transverses.
- register_basic_middlewares: CORS, hôtes autorisés, en-têtes X-Forwarded-*
- register_no_cache_middleware: pages liées à la session jamais mises en cache
- register_force_https_middleware: redirige vers HTTPS derrière un proxy
L'ordre d'ajout compte: le dernier ajouté s'exécute en premier.
"""
from fastapi import Request, FastAPI
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
from locket import config
from locket.utils.security import apply_no_cache_headers

def _allowed_hosts() -> list:
    # CORS ouvert en dev ("*"): on n'ajoute pas une seconde barrière sur l'hôte
    if "*" in config.CORS_ORIGINS:
        return ["*"]
    return config.ALLOWED_HOSTS

def register_basic_middlewares(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization", "X-CSRF-Token"],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=_allowed_hosts())
    # Render, Netlify, Nginx...: le proxy termine TLS et renseigne X-Forwarded-Proto
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

def register_no_cache_middleware(app: FastAPI) -> None:
    no_cache_paths = {config.PROFILE_PATH}

    @app.middleware("http")
    async def no_cache_for_session_pages(request: Request, call_next):
        response = await call_next(request)
        if request.method == "GET" and request.url.path.rstrip("/") in no_cache_paths:
            apply_no_cache_headers(response)
        return response

def register_force_https_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def force_https(request: Request, call_next):
        if request.headers.get("x-forwarded-proto") == "http":
            return RedirectResponse(str(request.url.replace(scheme="https")), status_code=301)
        return await call_next(request)
