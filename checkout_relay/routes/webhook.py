# checkout_relay/routes/webhook.py
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request, status
from checkout_relay.core.exceptions import WebhookSecretMissingError, WebhookVerificationError
from checkout_relay.models.event import WebhookAck
from checkout_relay.services.dispatcher import EventDispatcher
from checkout_relay.services.verifier import EventVerifier
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def get_verifier(request: Request) -> EventVerifier:
    return request.app.state.event_verifier


def get_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.event_dispatcher


@router.post("/webhook", response_model=WebhookAck, status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    verifier: EventVerifier = Depends(get_verifier),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
):
    """Handle Stripe webhooks. Any verified event is acknowledged."""
    payload = await request.body()

    try:
        event = verifier.verify(payload, stripe_signature)
    except WebhookSecretMissingError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server Error: Webhook secret missing.",
        )
    except WebhookVerificationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Webhook Error: {e}")

    outcome = dispatcher.dispatch(event, background_tasks)

    logger.info(f"Webhook event {event.id} ({event.type}) {outcome.value}")
    return WebhookAck(received=True)
