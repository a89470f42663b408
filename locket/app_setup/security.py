from fastapi import FastAPI
from locket import config

PAYPAL_SDK_SOURCES = ["https://www.paypal.com", "https://www.sandbox.paypal.com", "https://*.paypal.com"]
PAYPAL_IMG_SOURCES = ["https://www.paypalobjects.com", "https://*.paypalobjects.com"]

def build_csp() -> str:
    """
    CSP: scripts/iframes PayPal (SDK JS Buttons), connexions vers Supabase,
    images https (avatars fournis par le fournisseur d’identité).
    """
    csp_connect = ["'self'"] + PAYPAL_SDK_SOURCES
    if config.SUPABASE_URL:
        csp_connect.append(config.SUPABASE_URL.rstrip("/"))
    return (
        "default-src 'self'; "
        "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
        f"img-src 'self' data: https: {' '.join(PAYPAL_IMG_SOURCES)}; "
        "style-src 'self' 'unsafe-inline'; "
        f"script-src 'self' 'unsafe-inline' {' '.join(PAYPAL_SDK_SOURCES)}; "
        f"frame-src {' '.join(PAYPAL_SDK_SOURCES)}; "
        f"connect-src {' '.join(csp_connect)}"
    )

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if config.COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")

        response.headers["Content-Security-Policy"] = build_csp()
        return response
