# checkout_relay/services/dispatcher.py
import logging
from decimal import Decimal
from enum import Enum
from typing import Optional

import stripe
from fastapi import BackgroundTasks
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from checkout_relay.core.config import Settings
from checkout_relay.models.event import CheckoutSessionObject, LineItem, PaymentEvent
from checkout_relay.models.notification import EMAIL_NOT_AVAILABLE, NotificationMessage
from checkout_relay.services.notifier import DiscordNotifier

logger = logging.getLogger(__name__)

UNKNOWN_ITEM = "Unknown Item"


class DispatchOutcome(str, Enum):
    COMPLETED = "completed"
    IGNORED = "ignored"


def format_amount(amount_total: Optional[int]) -> str:
    """Minor units to a two-decimal major-unit string, e.g. 5000 -> "50.00"."""
    cents = Decimal(amount_total or 0)
    return str((cents / 100).quantize(Decimal("0.01")))


def line_item_name(item: Optional[LineItem]) -> str:
    if item is None:
        return UNKNOWN_ITEM
    if item.description:
        return item.description
    product = item.price.product if item.price else None
    if isinstance(product, dict) and product.get("name"):
        return product["name"]
    return UNKNOWN_ITEM


class EventDispatcher:
    """Routes verified events by type. Only completed checkouts trigger a notification."""

    def __init__(self, settings: Settings, notifier: DiscordNotifier):
        self.settings = settings
        self.notifier = notifier

    def dispatch(self, event: PaymentEvent, background_tasks: BackgroundTasks) -> DispatchOutcome:
        if not event.is_checkout_completed:
            logger.info(f"Ignoring webhook event {event.id} of type {event.type}")
            return DispatchOutcome.IGNORED

        try:
            session = event.checkout_session()
        except ValidationError as e:
            logger.error(f"Malformed checkout session in event {event.id}: {e}")
            return DispatchOutcome.IGNORED

        logger.info(f"Checkout session completed for session ID: {session.id}")
        background_tasks.add_task(self.relay_payment, session)
        return DispatchOutcome.COMPLETED

    async def relay_payment(self, session: CheckoutSessionObject) -> None:
        """Build and send the purchase notice. Never raises."""
        try:
            # Stripe SDK calls are blocking
            product = await run_in_threadpool(self.product_name, session)
            message = self.build_message(session, product)
            await self.notifier.send(message)
        except Exception as e:
            logger.error(f"Failed to relay payment for session {session.id}: {e}")

    def product_name(self, session: CheckoutSessionObject) -> str:
        if session.line_items and session.line_items.data:
            return line_item_name(session.line_items.data[0])

        try:
            line_items = stripe.checkout.Session.list_line_items(
                session.id,
                limit=1,
                api_key=self.settings.STRIPE_SECRET_KEY,
            )
        except stripe.StripeError as e:
            logger.error(f"Could not retrieve line items for session {session.id}: {e}")
            return UNKNOWN_ITEM

        data = getattr(line_items, "data", None) or []
        if not data:
            return UNKNOWN_ITEM
        item = data[0]
        description = getattr(item, "description", None)
        if description:
            return description
        product = getattr(getattr(item, "price", None), "product", None)
        return getattr(product, "name", None) or UNKNOWN_ITEM

    def build_message(self, session: CheckoutSessionObject, product: str) -> NotificationMessage:
        email = session.customer_details.email if session.customer_details else None
        currency = session.currency or self.settings.CURRENCY
        return NotificationMessage(
            product=product,
            amount=format_amount(session.amount_total),
            currency=currency.upper(),
            customer_email=email or session.customer_email or EMAIL_NOT_AVAILABLE,
            session_id=session.id,
            metadata=session.metadata,
        )
