import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from locket.utils.rate_limit import optional_rate_limit
from locket.paypal import service as paypal_service
from locket.paypal.errors import PaymentGatewayError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/paypal", tags=["PayPal API"])

UNKNOWN_CREATE_ERROR = "An unknown error occurred during PayPal order creation."
UNKNOWN_CAPTURE_ERROR = "An unknown error occurred during PayPal order capture."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _read_json(request: Request) -> Any:
    # Un body absent ou non-JSON est traité comme des champs manquants
    try:
        return await request.json()
    except ValueError:
        return None


# module locket.paypal.views
@router.post("/create-order", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_order(request: Request):
    """
    Crée une commande PayPal à partir de { amount, description, requiresShipping? }.
    - 200: objet commande PayPal renvoyé tel quel
    - 400: {"error": "Missing amount or description in request body"} (ou montant invalide)
    - 500: {"error": <message>} pour configuration, authentification ou refus PayPal
    Le détail brut renvoyé par PayPal reste dans les logs serveur.
    """
    payload = await _read_json(request)
    try:
        # Appels PayPal synchrones (httpx): exécutés hors de la boucle événementielle
        order = await run_in_threadpool(paypal_service.create_order, payload)
    except PaymentGatewayError as e:
        if e.status_code >= 500:
            logger.error("Error in POST /api/paypal/create-order: %s", e.message)
        return _error(e.status_code, e.message)
    except Exception:
        logger.exception("Unexpected error in POST /api/paypal/create-order")
        return _error(500, UNKNOWN_CREATE_ERROR)
    return JSONResponse(order)


@router.post("/capture-order/{order_id}", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def capture_order(order_id: str):
    """
    Capture une commande approuvée par l'acheteur (intent CAPTURE).
    Même enveloppe d'erreur que create-order.
    """
    try:
        capture = paypal_service.capture_order(order_id)
    except PaymentGatewayError as e:
        if e.status_code >= 500:
            logger.error("Error in POST /api/paypal/capture-order/%s: %s", order_id, e.message)
        return _error(e.status_code, e.message)
    except Exception:
        logger.exception("Unexpected error in POST /api/paypal/capture-order/%s", order_id)
        return _error(500, UNKNOWN_CAPTURE_ERROR)
    return JSONResponse(capture)
