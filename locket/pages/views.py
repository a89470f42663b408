# module locket.pages.views

"""Pages HTML publiques et personnelles.
- Accueil: présentation du service d’impression
- Checkout: bouton PayPal (le client id est public, le secret ne quitte jamais le serveur)
- Profil: page de l’utilisateur connecté (protégée par require_user)
Toutes les pages incluent l’en-tête (partials/header.html) via render_page.
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from locket import config
from locket.utils.security import require_user, apply_no_cache_headers
from locket.utils.templates import render_page

router = APIRouter(tags=["Pages"])

@router.get(config.LANDING_PATH, response_class=HTMLResponse, include_in_schema=False)
def landing_page(request: Request):
    return render_page(request, "index.html")

@router.get("/checkout", response_class=HTMLResponse)
def checkout_page(request: Request):
    """Page de paiement: charge le SDK JS PayPal et appelle /api/paypal/create-order."""
    return render_page(
        request,
        "checkout.html",
        {"paypal_client_id": config.PAYPAL_CLIENT_ID, "currency": config.PAYPAL_CURRENCY},
    )

@router.get(config.PROFILE_PATH, response_class=HTMLResponse)
def profile_page(request: Request, user: Dict[str, Any] = Depends(require_user)):
    """Profil (authentifié). Pas de mise en cache pour éviter un affichage après déconnexion."""
    return apply_no_cache_headers(render_page(request, "profile.html", user=user))
