import logging
import urllib.parse
from fastapi import APIRouter, HTTPException, Depends, Response, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Dict, Any
from starlette.status import HTTP_303_SEE_OTHER, HTTP_204_NO_CONTENT

from locket import config
from locket.utils.validators import validate_password_strength
from locket.utils.rate_limit import optional_rate_limit
from locket.utils.security import require_user, set_session_cookie, clear_session_cookie, get_session_token, apply_no_cache_headers
from locket.utils.templates import render_page
from . import service as auth_service

logger = logging.getLogger(__name__)

# --- API Router (/api/v1/auth) ---

api_router = APIRouter(prefix="/api/v1/auth", tags=["Auth API"])

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    full_name: Optional[str] = None
    @field_validator("password")
    def password_strength(cls, v: str) -> str:
        return validate_password_strength(v)

@api_router.post("/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def api_login(req: LoginRequest, response: Response):
    """Point d'entrée de connexion (API JSON).
    - Délègue la vérification des identifiants au service (login)
    - Pose le cookie de session (sb_access) et retourne {access_token, token_type, user}
    """
    result = auth_service.login(req.email, req.password)
    if not result.success:
        raise HTTPException(status_code=401, detail=result.error or "Invalid credentials")
    if result.access_token:
        set_session_cookie(response, result.access_token)
    return {"access_token": result.access_token, "token_type": "bearer", "user": result.user}

@api_router.post("/signup", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def api_signup(req: SignupRequest, response: Response):
    """Point d’entrée d’inscription (API JSON).
    Avec session: cookie + JSON de session. Sans session: message de confirmation d’email.
    """
    result = auth_service.signup(req.email, req.password, req.full_name)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error or "Sign-up error")
    if result.access_token:
        set_session_cookie(response, result.access_token)
        return {"access_token": result.access_token, "token_type": "bearer", "user": result.user}
    return {"message": result.error or "Sign-up successful, please check your email"}

@api_router.get("/me")
def api_me(user: Dict[str, Any] = Depends(require_user)):
    """Retourne l’utilisateur courant (id, email, metadata) après contrôle de session via require_user."""
    return {"id": user["id"], "email": user["email"], "metadata": user["metadata"]}

# --- Web Router (pages + formulaires) ---

web_router = APIRouter(tags=["Auth Web"])

def _redirect_with(path: str, **params: str) -> RedirectResponse:
    query = urllib.parse.urlencode({k: v for k, v in params.items() if v})
    return RedirectResponse(url=f"{path}?{query}" if query else path, status_code=HTTP_303_SEE_OTHER)

@web_router.get(config.LOGIN_PATH, response_class=HTMLResponse)
def login_page(request: Request, error: Optional[str] = None, message: Optional[str] = None):
    return render_page(request, "login.html", {"error": error, "message": message})

@web_router.get(config.SIGNUP_PATH, response_class=HTMLResponse)
def signup_page(request: Request, error: Optional[str] = None):
    return render_page(request, "signup.html", {"error": error})

@web_router.post("/auth/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def web_login(email: str = Form(...), password: str = Form(...)):
    result = auth_service.login(email, password)
    if not result.success:
        return _redirect_with(config.LOGIN_PATH, error=result.error or "Invalid credentials")
    redirect = RedirectResponse(url=config.LANDING_PATH, status_code=HTTP_303_SEE_OTHER)
    set_session_cookie(redirect, result.access_token)
    return redirect

@web_router.post("/auth/signup", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def web_signup(email: str = Form(...), password: str = Form(...), full_name: str = Form("")):
    try:
        validate_password_strength(password)
    except ValueError as e:
        return _redirect_with(config.SIGNUP_PATH, error=str(e))
    result = auth_service.signup(email, password, full_name or None)
    if not result.success:
        return _redirect_with(config.SIGNUP_PATH, error=result.error or "Sign-up error")
    if result.access_token:
        redirect = RedirectResponse(url=config.LANDING_PATH, status_code=HTTP_303_SEE_OTHER)
        set_session_cookie(redirect, result.access_token)
        return redirect
    return _redirect_with(config.LOGIN_PATH, message="Sign-up successful, please check your email")

@web_router.post("/auth/logout", include_in_schema=False)
def web_logout(request: Request):
    """Déconnexion (action « Log out » du menu de l’en-tête).
    - Termine la session auprès du fournisseur d’identité
    - Succès: efface le cookie et redirige vers l’accueil
    - Échec: erreur journalisée, 204 sans navigation (pas de message côté utilisateur)
    """
    token = get_session_token(request)
    if token:
        result = auth_service.logout(token)
        if not result.success:
            logger.error("Error signing out: %s", result.error)
            return Response(status_code=HTTP_204_NO_CONTENT)
    redirect = RedirectResponse(url=config.LANDING_PATH, status_code=HTTP_303_SEE_OTHER)
    clear_session_cookie(redirect)
    return apply_no_cache_headers(redirect)
