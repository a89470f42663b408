"""
Adaptateur PayPal REST: centralise l'authentification OAuth2 et les appels Orders v2.

- get_access_token: échange PAYPAL_CLIENT_ID/PAYPAL_SECRET contre un jeton Bearer
- create_order: crée une commande intent=CAPTURE (montant, devise, description, livraison)
- capture_order: capture une commande approuvée par l'acheteur
Par défaut un jeton neuf est demandé à chaque appel; le cache est optionnel (PAYPAL_TOKEN_CACHE=1).
"""
import base64
import logging
import threading
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from locket import config
from .errors import ConfigurationError, UpstreamAuthError, UpstreamOrderError
from .models import OrderRequest

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/oauth2/token"
ORDERS_PATH = "/v2/checkout/orders"

# Marge de sécurité avant l'expiration annoncée par PayPal
TOKEN_EXPIRY_MARGIN = 60


class TokenCache:
    """
    Cache mémoire des jetons d'accès, indexé par (base_url, client_id).
    Une entrée est invalidée dès que son expiration (expires_in - marge) est atteinte.
    """

    def __init__(self, margin: int = TOKEN_EXPIRY_MARGIN):
        self.margin = margin
        self._entries: Dict[Tuple[str, str], Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: Tuple[str, str]) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if not entry:
                return None
            token, expires_at = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return token

    def put(self, key: Tuple[str, str], token: str, expires_in: Any) -> None:
        try:
            lifetime = int(expires_in) - self.margin
        except (TypeError, ValueError):
            return
        if lifetime <= 0:
            return
        with self._lock:
            self._entries[key] = (token, time.monotonic() + lifetime)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


token_cache = TokenCache()


def _http_client() -> httpx.Client:
    # Pas de timeout explicite: on garde celui par défaut du transport
    return httpx.Client(base_url=config.paypal_base_url())


def _require_credentials() -> Tuple[str, str]:
    """
    Vérifie la présence des identifiants avant tout appel réseau.
    Lève ConfigurationError si PAYPAL_CLIENT_ID ou PAYPAL_SECRET est vide.
    """
    client_id = config.PAYPAL_CLIENT_ID
    secret = config.PAYPAL_SECRET
    if not client_id or not secret:
        message = "PayPal API credentials (PAYPAL_CLIENT_ID or PAYPAL_SECRET) are not configured on the server."
        logger.error("MISSING_PAYPAL_API_CREDENTIALS: %s", message)
        raise ConfigurationError(message)
    return client_id, secret


def _basic_auth(client_id: str, secret: str) -> str:
    return base64.b64encode(f"{client_id}:{secret}".encode("utf-8")).decode("ascii")


def _json_or_none(response: httpx.Response) -> Optional[Dict[str, Any]]:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _token_error(response: httpx.Response) -> UpstreamAuthError:
    """Traduit une réponse non-2xx du endpoint token en message sûr pour le client."""
    logger.error("PayPal access token error status=%s body=%s", response.status_code, response.text)
    data = _json_or_none(response)
    if data is None:
        return UpstreamAuthError("Failed to get access token from PayPal. Check server logs for details.")
    if data.get("error") == "invalid_client":
        logger.error("PayPal authentication failed: 'invalid_client' (check PAYPAL_CLIENT_ID / PAYPAL_SECRET)")
        return UpstreamAuthError("PayPal client authentication failed. Please check server configuration and credentials.")
    detail = str(data.get("error_description") or data.get("error") or "Unknown PayPal error").rstrip(".")
    return UpstreamAuthError(f"Failed to get access token from PayPal: {detail}.")


def _order_error(action: str, response: httpx.Response) -> UpstreamOrderError:
    """Traduit une réponse non-2xx de l'API Orders, en extrayant details[0].description si possible."""
    logger.error("PayPal %s error status=%s body=%s", action, response.status_code, response.text)
    data = _json_or_none(response)
    if data is None:
        return UpstreamOrderError(f"Failed to {action} with PayPal. Raw error: {response.text}.")
    details = data.get("details") or []
    first = details[0] if isinstance(details, list) and details and isinstance(details[0], dict) else {}
    detail = str(first.get("description") or data.get("message") or "Unknown error").rstrip(".")
    return UpstreamOrderError(f"Failed to {action} with PayPal: {detail}.")


def get_access_token() -> str:
    """
    Obtient un jeton Bearer via OAuth2 client_credentials (HTTP Basic id:secret).
    - ConfigurationError si identifiants absents (aucun appel réseau)
    - UpstreamAuthError si PayPal répond en erreur ou est injoignable
    """
    client_id, secret = _require_credentials()
    cache_key = (config.paypal_base_url(), client_id)
    if config.PAYPAL_TOKEN_CACHE:
        cached = token_cache.get(cache_key)
        if cached:
            return cached

    logger.info("Attempting PayPal auth with client id ending in ...%s for %s environment", client_id[-4:], config.PAYPAL_MODE)
    try:
        with _http_client() as http:
            response = http.post(
                TOKEN_PATH,
                content="grant_type=client_credentials",
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Authorization": f"Basic {_basic_auth(client_id, secret)}",
                },
            )
    except httpx.HTTPError as e:
        logger.exception("PayPal token endpoint unreachable")
        raise UpstreamAuthError("Failed to get access token from PayPal. Check server logs for details.") from e

    if not response.is_success:
        raise _token_error(response)

    data = _json_or_none(response) or {}
    token = data.get("access_token")
    if not token:
        logger.error("PayPal token response without access_token: %s", response.text)
        raise UpstreamAuthError("Failed to get access token from PayPal. Check server logs for details.")
    if config.PAYPAL_TOKEN_CACHE:
        token_cache.put(cache_key, token, data.get("expires_in"))
    logger.info("Successfully obtained PayPal access token")
    return token


def build_order_body(order: OrderRequest) -> Dict[str, Any]:
    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "amount": {
                    "currency_code": config.PAYPAL_CURRENCY,
                    "value": order.amount,
                },
                "description": order.description,
            },
        ],
        "application_context": {
            "shipping_preference": order.shipping_preference,
        },
    }


def _post_orders(action: str, path: str, json_body: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    access_token = get_access_token()
    try:
        with _http_client() as http:
            response = http.post(
                path,
                json=json_body,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {access_token}",
                },
            )
    except httpx.HTTPError as e:
        logger.exception("PayPal orders endpoint unreachable (%s)", action)
        raise UpstreamOrderError(f"Failed to {action} with PayPal. Check server logs for details.") from e

    if not response.is_success:
        raise _order_error(action, response)
    return response.json()


def create_order(order: OrderRequest) -> Dict[str, Any]:
    """
    Crée une commande PayPal (intent CAPTURE) et retourne l'objet PayPal tel quel.
    Deux appels séquentiels: jeton puis création; aucune relance en cas d'échec.
    """
    order_data = _post_orders("create order", ORDERS_PATH, build_order_body(order))
    logger.info("Successfully created PayPal order: %s", order_data.get("id"))
    return order_data


def capture_order(order_id: str) -> Dict[str, Any]:
    """Capture une commande approuvée; retourne la réponse PayPal telle quelle."""
    capture_data = _post_orders("capture order", f"{ORDERS_PATH}/{order_id}/capture", None)
    logger.info("Successfully captured PayPal order: %s status=%s", order_id, capture_data.get("status"))
    return capture_data
