from typing import Any, Dict, Optional
from fastapi import Request
from fastapi.templating import Jinja2Templates
from locket import config
from locket.header import Identity, build_header
from locket.utils.csrf import get_or_create_csrf_token
from locket.utils.security import get_optional_user

templates = Jinja2Templates(directory=str(config.TEMPLATES_DIR))
# Variables globales disponibles dans tous les templates
templates.env.globals["site_title"] = "Locket Photo Print"

def render_page(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    user: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """
    Rend une page complète avec l’en-tête (identité courante) et le token CSRF.
    Le cookie CSRF lui-même est posé par le middleware (même valeur via request.state).
    - user: utilisateur déjà résolu (require_user); sinon résolution non bloquante via le cookie
    """
    if user is None:
        user = get_optional_user(request)
    csrf = get_or_create_csrf_token(request)
    ctx: Dict[str, Any] = {
        "header": build_header(Identity.from_user(user)),
        "user": user,
        "csrf_token": csrf,
    }
    ctx.update(context or {})
    resp = templates.TemplateResponse(request, name, ctx, status_code=status_code)
    return resp
