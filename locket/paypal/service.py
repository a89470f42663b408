"""
Cas d'usage 'paypal': orchestre validation (models) et appels PayPal (client).
"""
import re
from typing import Any, Dict

from . import client as paypal_client
from .errors import ValidationError
from .models import parse_order_request

ORDER_ID_RE = re.compile(r"^[A-Za-z0-9-]{1,64}$")

# module locket.paypal.service
def create_order(payload: Any) -> Dict[str, Any]:
    """
    Valide le body brut puis crée la commande PayPal.
    Retour: l'objet commande PayPal, non modifié.
    """
    order = parse_order_request(payload)
    return paypal_client.create_order(order)


def capture_order(order_id: str) -> Dict[str, Any]:
    """Capture une commande approuvée après validation de l'identifiant."""
    order_id = (order_id or "").strip()
    if not ORDER_ID_RE.match(order_id):
        raise ValidationError("Invalid PayPal order id")
    return paypal_client.capture_order(order_id)
