# checkout_relay/services/checkout.py
import logging
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

import stripe

from checkout_relay.core.config import Settings
from checkout_relay.core.exceptions import CheckoutSessionError, InvalidOrderError
from checkout_relay.models.checkout import CheckoutSessionResponse, OrderRequest

logger = logging.getLogger(__name__)


def to_minor_units(price: Any, fallback: float) -> int:
    """Convert a major-unit price to integer cents, rounding half up.

    Missing, boolean, non-numeric and non-finite prices use ``fallback``.
    """
    value = _parse_price(price)
    if value is None:
        value = _parse_price(fallback)
    if value is None:
        raise InvalidOrderError("No valid item price available")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _parse_price(price: Any):
    if price is None or isinstance(price, bool):
        return None
    if isinstance(price, float) and not math.isfinite(price):
        return None
    if not isinstance(price, (int, float, str, Decimal)):
        return None
    try:
        value = Decimal(str(price).strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


class SessionInitiator:
    """Creates a one-item Stripe Checkout session for an order."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def success_url(self) -> str:
        return f"{self.settings.domain}/success.html?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.settings.domain}/cancel.html"

    def build_session_params(self, order: OrderRequest) -> dict:
        unit_amount = to_minor_units(order.itemPrice, self.settings.DEFAULT_ITEM_PRICE)
        if unit_amount <= 0:
            raise InvalidOrderError("Item price must be greater than zero")

        name = (order.itemName or "").strip() or self.settings.DEFAULT_ITEM_NAME

        params = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.settings.CURRENCY,
                        "product_data": {"name": name},
                        "unit_amount": unit_amount,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
        }
        if order.metadata:
            params["metadata"] = dict(order.metadata)
        return params

    def create_session(self, order: OrderRequest) -> CheckoutSessionResponse:
        params = self.build_session_params(order)

        try:
            session = stripe.checkout.Session.create(
                api_key=self.settings.STRIPE_SECRET_KEY,
                **params,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe error creating checkout session: {e}")
            raise CheckoutSessionError("Failed to create checkout session. Check Stripe logs.") from e
        except Exception as e:
            logger.error(f"Error creating checkout session: {e}")
            raise CheckoutSessionError("Failed to create checkout session. Check Stripe logs.") from e

        logger.info(
            f"Created checkout session {session.id} for "
            f"{params['line_items'][0]['price_data']['unit_amount']} {self.settings.CURRENCY}"
        )
        return CheckoutSessionResponse(sessionId=session.id, url=session.url)
