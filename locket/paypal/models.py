"""
Modèle d'entrée de la création de commande et validation du body JSON brut.
"""
import re
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

MISSING_FIELDS_MESSAGE = "Missing amount or description in request body"
INVALID_AMOUNT_MESSAGE = "Amount must be a positive decimal string"

# Chiffres, puis au plus 2 décimales: ni signe, ni exposant, ni séparateur "_"
AMOUNT_RE = re.compile(r"^[0-9]+(\.[0-9]{1,2})?$")

# module locket.paypal.models
class OrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    amount: str
    description: str
    requires_shipping: bool = Field(default=False, alias="requiresShipping")

    @property
    def shipping_preference(self) -> str:
        return "GET_FROM_FILE" if self.requires_shipping else "NO_SHIPPING"


def _normalize_amount(raw: Any) -> str:
    """
    Valide un montant: décimal strictement positif, au plus 2 décimales.
    - Accepte une chaîne ("10.00") ou un nombre JSON (10.5) converti en chaîne.
    - Retourne la chaîne telle que transmise à PayPal.
    """
    if isinstance(raw, bool):
        raise ValidationError(INVALID_AMOUNT_MESSAGE)
    value = str(raw).strip()
    if not AMOUNT_RE.match(value) or Decimal(value) <= 0:
        raise ValidationError(INVALID_AMOUNT_MESSAGE)
    return value


def parse_order_request(payload: Any) -> OrderRequest:
    """
    Construit un OrderRequest depuis le body JSON décodé.
    - amount et description sont obligatoires (valeurs vides = absentes).
    - requiresShipping est interprété par sa véracité; absent => False.
    Lève ValidationError (400) avec un message destiné au client.
    """
    body = payload if isinstance(payload, dict) else {}
    amount = body.get("amount")
    description = body.get("description")
    if not amount or not str(amount).strip() or not description or not str(description).strip():
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    return OrderRequest(
        amount=_normalize_amount(amount),
        description=str(description).strip(),
        requires_shipping=bool(body.get("requiresShipping")),
    )
