"""
Gestionnaires d’exceptions.
- Transforme 401/403 en redirection HTML vers la page de connexion (si Accept: text/html et pas /api/*).
- Conserve la réponse JSON standard pour les clients API ({"error"} sous /api/paypal/).
"""
import urllib.parse
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER
from locket import config

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre le handler HTTPException pour 401/403.
    - Web: redirection avec message vers /login.
    - API: JSON {"detail": ...} pour clients programmatiques.
    """
    @app.exception_handler(HTTPException)
    async def html_redirect_on_auth_errors(request: Request, exc: HTTPException):
        if exc.status_code in (401, 403):
            accept = (request.headers.get("accept") or "").lower()
            is_api = request.url.path.startswith("/api/")
            if "text/html" in accept and not is_api:
                detail = str(getattr(exc, "detail", "")) or (
                    "Please log in" if exc.status_code == 401 else "Access denied"
                )
                msg = urllib.parse.quote_plus(detail)
                return RedirectResponse(url=f"{config.LOGIN_PATH}?error={msg}", status_code=HTTP_303_SEE_OTHER)
        if request.url.path.startswith("/api/paypal/"):
            # Enveloppe de la passerelle de paiement: un seul champ "error"
            return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))
