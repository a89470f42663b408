import logging
from fastapi import Request, HTTPException, Depends
from fastapi.responses import Response
from typing import Optional, Dict, Any
from locket import config

logger = logging.getLogger(__name__)

COOKIE_NAME = "sb_access"

def set_session_cookie(response: Response, access_token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=access_token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="Lax",
        max_age=60 * 60,
        path="/",
    )

def clear_session_cookie(response: Response):
    response.delete_cookie(COOKIE_NAME, path="/")

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

def apply_no_cache_headers(response: Response) -> Response:
    # Pages liées à la session: jamais servies depuis le cache après déconnexion
    response.headers.update(NO_CACHE_HEADERS)
    return response

def get_session_token(request: Request) -> Optional[str]:
    """Hybride: priorité au Bearer, fallback cookie de session."""
    token = None
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
    if not token:
        token = request.cookies.get(COOKIE_NAME)
    return token or None

def get_current_user(request: Request) -> Dict[str, Any]:
    token = get_session_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        # Délégué au service Auth (import tardif: évite le cycle auth <-> utils)
        from locket.auth.service import get_user_from_token as _svc_get_user_from_token
        user = _svc_get_user_from_token(token)
        if not user.get("id"):
            raise HTTPException(status_code=401, detail="Session expired, please log in again")
        return user
    except HTTPException:
        raise
    except Exception:
        logger.warning("Session token rejected by identity provider", exc_info=True)
        raise HTTPException(status_code=401, detail="Session expired, please log in again")

def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user

def get_optional_user(request: Request) -> Optional[Dict[str, Any]]:
    """
    Variante non bloquante pour les pages publiques (en-tête):
    - None si aucun jeton ou si le fournisseur d'identité le rejette
    """
    if not get_session_token(request):
        return None
    try:
        return get_current_user(request)
    except HTTPException:
        return None
