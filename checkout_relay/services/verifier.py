# checkout_relay/services/verifier.py
import logging
from typing import Optional

import stripe
from pydantic import ValidationError

from checkout_relay.core.config import Settings
from checkout_relay.core.exceptions import WebhookSecretMissingError, WebhookVerificationError
from checkout_relay.models.event import PaymentEvent

logger = logging.getLogger(__name__)


class EventVerifier:
    """Authenticates Stripe webhook deliveries against the signing secret."""

    def __init__(self, settings: Settings):
        self.secret = settings.STRIPE_WEBHOOK_SECRET.strip()
        self.tolerance = settings.STRIPE_WEBHOOK_TOLERANCE

    @property
    def configured(self) -> bool:
        return bool(self.secret)

    def verify(self, payload: bytes, signature: Optional[str]) -> PaymentEvent:
        if not self.configured:
            logger.error("STRIPE_WEBHOOK_SECRET is not set in environment variables.")
            raise WebhookSecretMissingError("Webhook secret missing.")

        if not signature:
            logger.error("Webhook signature verification failed: missing Stripe-Signature header")
            raise WebhookVerificationError("Missing Stripe-Signature header")

        try:
            stripe.Webhook.construct_event(
                payload,
                signature,
                self.secret,
                tolerance=self.tolerance,
            )
        except stripe.SignatureVerificationError as e:
            logger.error(f"Webhook signature verification failed: {e}")
            raise WebhookVerificationError(f"Invalid signature: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid webhook payload: {e}")
            raise WebhookVerificationError("Invalid payload") from e

        try:
            return PaymentEvent.model_validate_json(payload)
        except ValidationError as e:
            logger.error(f"Malformed webhook event: {e}")
            raise WebhookVerificationError("Malformed event") from e
