import logging
from typing import Optional, Dict, Any
from locket import config
from locket.auth.models import AuthResponse, build_user_dict, make_auth_response, handle_exception
from .repository import (
    auth_sign_in_password as sign_in_password,
    auth_sign_up_account as sign_up_account,
    auth_sign_out as sign_out_session,
    get_user_from_access_token as _repo_get_user_from_token,
)

logger = logging.getLogger(__name__)

# --- Cas d’usage Auth exposés ---

def login(email: str, password: str) -> AuthResponse:
    """Connexion:
    - Délègue à supabase.auth.sign_in_with_password via repository
    - Normalise la réponse en AuthResponse
    """
    try:
        email = (email or "").strip()
        res = sign_in_password(email, password)
        return make_auth_response(res, fallback_error="Invalid credentials or email not confirmed")
    except Exception as e:
        return handle_exception("sign_in", e)

def signup(email: str, password: str, full_name: Optional[str] = None) -> AuthResponse:
    """Inscription:
    - Injecte full_name dans user_metadata (utilisé par l’en-tête comme nom affiché)
    - Retourne soit une session (access_token) soit un succès invitant à confirmer l’email
    """
    try:
        email = (email or "").strip()
        options_data: Dict[str, Any] = {}
        if full_name and full_name.strip():
            options_data["full_name"] = full_name.strip()

        res = sign_up_account(
            email=email,
            password=password,
            options_data=options_data or None,
            email_redirect_to=config.SIGNUP_REDIRECT_URL,
        )

        sess = getattr(res, "session", None)
        if sess and getattr(sess, "access_token", None):
            return make_auth_response(res)
        # Succès sans session (vérification email)
        return AuthResponse(True, error="Sign-up successful, please check your email")
    except Exception as e:
        msg = str(e).lower()
        if any(k in msg for k in ["already", "registered", "exists"]):
            return AuthResponse(False, error="User already exists")
        return handle_exception("sign_up", e)

def logout(user_token: str) -> AuthResponse:
    """Déconnexion auprès du fournisseur d’identité:
    - Succès si GoTrue répond 2xx (204 attendu)
    - 401/404: session déjà invalide côté fournisseur, considérée comme terminée
    - Toute autre réponse ou erreur réseau: échec (l’appelant journalise, sans surface utilisateur)
    """
    try:
        resp = sign_out_session(user_token)
    except Exception as e:
        return handle_exception("sign_out", e)
    if 200 <= resp.status_code < 300 or resp.status_code in (401, 404):
        return AuthResponse(True)
    return AuthResponse(False, error=f"Sign-out failed: status {resp.status_code}")

# --- Intégration sécurité ---

def get_user_from_token(access_token: str) -> Dict[str, Any]:
    """Normalise user issu de supabase.auth.get_user(access_token):
    - Retourne {id, email, metadata, token}; id à None si le fournisseur ne connaît pas le jeton
    """
    user = build_user_dict(_repo_get_user_from_token(access_token) or {})
    user["token"] = access_token
    return user
