"""
Taxonomie des erreurs de la passerelle PayPal.

Chaque erreur porte un `status_code` HTTP et un `message` sûr à renvoyer au client.
Le détail brut de PayPal n'est jamais stocké ici: il est journalisé côté serveur.
"""

# module locket.paypal.errors
class PaymentGatewayError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PaymentGatewayError):
    """Entrée appelant absente ou mal formée (400)."""
    status_code = 400


class ConfigurationError(PaymentGatewayError):
    """Identifiants PayPal absents de la configuration serveur."""


class UpstreamAuthError(PaymentGatewayError):
    """Échec de l'échange client_credentials -> access_token."""


class UpstreamOrderError(PaymentGatewayError):
    """PayPal a refusé la création (ou la capture) de la commande."""
