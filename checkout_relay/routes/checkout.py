# checkout_relay/routes/checkout.py
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from checkout_relay.core.exceptions import CheckoutSessionError, InvalidOrderError
from checkout_relay.models.checkout import CheckoutSessionResponse, ErrorResponse, OrderRequest
from checkout_relay.services.checkout import SessionInitiator
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def get_session_initiator(request: Request) -> SessionInitiator:
    return request.app.state.session_initiator


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_checkout_session(
    order: OrderRequest,
    initiator: SessionInitiator = Depends(get_session_initiator),
):
    """Create a Stripe Checkout session and hand back its redirect URL"""
    try:
        return initiator.create_session(order)
    except InvalidOrderError as e:
        logger.error(f"Rejected checkout request: {e}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})
    except CheckoutSessionError as e:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)})
