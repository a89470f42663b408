"""
Factory d’application pour les entrypoints (locket.asgi, python -m locket).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_no_cache_middleware, register_force_https_middleware
from .static import mount_static_files
from .security import register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers
from locket.utils.csrf import register_csrf_middleware

def create_app() -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      1) middlewares de base (CORS, TrustedHost, ProxyHeaders)
      2) fichiers statiques (/static)
      3) CSRF, en-têtes de sécurité + CSP, no-cache sur /profile
      4) gestionnaires d’exceptions
      5) tous les routers (pages, auth, PayPal, health)
      6) redirection HTTPS ajoutée en dernier pour s’exécuter en premier
    """
    app = FastAPI(title="Locket Photo Print", lifespan=lifespan)
    register_basic_middlewares(app)
    mount_static_files(app)
    register_csrf_middleware(app)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    register_force_https_middleware(app)
    return app
