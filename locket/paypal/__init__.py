"""
Module 'paypal' (feature-first): point d'entrée public.
Réunit validation de commande, client REST PayPal, erreurs et services.
"""

from .errors import (
    PaymentGatewayError,
    ValidationError,
    ConfigurationError,
    UpstreamAuthError,
    UpstreamOrderError,
)
from .models import OrderRequest, parse_order_request
from .client import get_access_token, build_order_body, TokenCache
from .service import create_order, capture_order

__all__ = [
    # errors
    "PaymentGatewayError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamAuthError",
    "UpstreamOrderError",
    # models
    "OrderRequest",
    "parse_order_request",
    # client
    "get_access_token",
    "build_order_body",
    "TokenCache",
    # services
    "create_order",
    "capture_order",
]
