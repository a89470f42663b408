from typing import Optional, Dict, Any
import httpx
from locket import config
from locket.infra.supabase_client import get_supabase

# --- Auth (supabase.auth.*) ---

def auth_sign_in_password(email: str, password: str):
    """Wrapper Supabase Auth: connexion par email/mot de passe (GoTrue)."""
    client = get_supabase()
    return client.auth.sign_in_with_password({"email": email, "password": password})

def auth_sign_up_account(
    email: str,
    password: str,
    options_data: Optional[Dict[str, Any]] = None,
    email_redirect_to: Optional[str] = None
):
    """Wrapper Supabase Auth: inscription d’un compte.
    - options.data: metadata (ex. full_name)
    - options.email_redirect_to: URL de confirmation (SIGNUP_REDIRECT_URL)
    """
    client = get_supabase()
    credentials: Dict[str, Any] = {"email": email, "password": password}

    if options_data or email_redirect_to:
        credentials["options"] = {}
        if options_data:
            credentials["options"]["data"] = options_data
        if email_redirect_to:
            credentials["options"]["email_redirect_to"] = email_redirect_to

    return client.auth.sign_up(credentials)

def auth_sign_out(user_token: str) -> httpx.Response:
    """Appel direct GoTrue pour terminer la session de l'utilisateur:
    - httpx POST /auth/v1/logout avec Authorization: Bearer <user_token>
    - Le client partagé n'est pas utilisé: il ne porte pas la session de cet utilisateur
    """
    url = f"{config.SUPABASE_URL.rstrip('/')}/auth/v1/logout"
    headers = {
        "Authorization": f"Bearer {user_token}",
        "apikey": config.SUPABASE_ANON,
    }
    return httpx.post(url, headers=headers, timeout=10)

def get_user_from_access_token(access_token: str):
    """Utilisateur brut de supabase.auth.get_user(access_token); None si le jeton est inconnu."""
    res = get_supabase().auth.get_user(access_token)
    return getattr(res, "user", None)
