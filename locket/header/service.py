"""
En-tête du site: état d'identité affiché (connecté / non connecté).

L'identité vient du fournisseur (Supabase) et n'est jamais créée ici.
- Non connecté: deux appels à l'action, Log In et Sign Up
- Connecté: avatar (image si disponible, sinon initiale de l'email) ouvrant un menu Profile / Log out
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from locket import config


@dataclass(frozen=True)
class Identity:
    email: Optional[str]
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_user(cls, user: Optional[Dict[str, Any]]) -> Optional["Identity"]:
        """Construit l'identité depuis le dict utilisateur normalisé (auth.service); None si absent."""
        if not user:
            return None
        metadata = user.get("metadata") or {}
        return cls(
            email=user.get("email"),
            display_name=metadata.get("full_name") or metadata.get("name"),
            photo_url=metadata.get("avatar_url") or metadata.get("picture"),
        )


@dataclass(frozen=True)
class NavAction:
    label: str
    href: str
    method: str = "get"
    primary: bool = False


@dataclass(frozen=True)
class HeaderContext:
    identity: Optional[Identity] = None
    actions: List[NavAction] = field(default_factory=list)
    menu: List[NavAction] = field(default_factory=list)
    avatar_url: Optional[str] = None
    avatar_alt: str = "User"
    avatar_initial: str = ""

    @property
    def signed_in(self) -> bool:
        return self.identity is not None


def avatar_initial(email: Optional[str]) -> str:
    # Premier caractère de l'email en majuscule; vide si pas d'email
    return email[0].upper() if email else ""


def build_header(identity: Optional[Identity]) -> HeaderContext:
    if identity is None:
        return HeaderContext(
            actions=[
                NavAction("Log In", config.LOGIN_PATH),
                NavAction("Sign Up", config.SIGNUP_PATH, primary=True),
            ],
        )
    return HeaderContext(
        identity=identity,
        menu=[
            NavAction("Profile", config.PROFILE_PATH),
            NavAction("Log out", "/auth/logout", method="post"),
        ],
        avatar_url=identity.photo_url or None,
        avatar_alt=identity.display_name or "User",
        avatar_initial=avatar_initial(identity.email),
    )
