from fastapi import APIRouter, Request
from locket import config
from locket.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/paypal")
def health_paypal():
    """État de configuration PayPal: uniquement des booléens, jamais les identifiants."""
    return {
        "mode": "live" if config.PAYPAL_MODE == "live" else "sandbox",
        "base_url": config.paypal_base_url(),
        "client_id_configured": bool(config.PAYPAL_CLIENT_ID),
        "secret_configured": bool(config.PAYPAL_SECRET),
        "token_cache": bool(config.PAYPAL_TOKEN_CACHE),
    }

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
