"""
Réponses normalisées du fournisseur d'identité (Supabase Auth).
Le reste de l'application ne manipule jamais les objets du client supabase directement.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class AuthResponse:
    success: bool
    user: Optional[Dict[str, Any]] = None
    session: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def access_token(self) -> Optional[str]:
        return (self.session or {}).get("access_token")


def _field(obj: Any, name: str) -> Any:
    # Le client supabase renvoie des modèles; les mocks et l'API REST des dicts
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def build_user_dict(user: Any) -> Dict[str, Any]:
    """{id, email, metadata}: forme commune à la session, à l'en-tête et à /api/v1/auth/me."""
    return {
        "id": _field(user, "id"),
        "email": _field(user, "email"),
        "metadata": _field(user, "user_metadata") or {},
    }


def build_session_dict(session: Any) -> Dict[str, Any]:
    return {
        "access_token": _field(session, "access_token"),
        "refresh_token": _field(session, "refresh_token"),
    }


def make_auth_response(res: Any, fallback_error: str = "Invalid credentials") -> AuthResponse:
    sess = _field(res, "session")
    if not sess or not _field(sess, "access_token"):
        return AuthResponse(False, error=fallback_error)
    return AuthResponse(True, user=build_user_dict(_field(res, "user")), session=build_session_dict(sess))


def handle_exception(action: str, e: Exception) -> AuthResponse:
    logger.exception("Error during %s", action)
    return AuthResponse(False, error=f"Error during {action}: {e}")
