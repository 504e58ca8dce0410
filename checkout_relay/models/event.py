# checkout_relay/models/event.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class CustomerDetails(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class LineItemPrice(BaseModel):
    # Only an object when the product was expanded, otherwise the product id
    product: Optional[Any] = None


class LineItem(BaseModel):
    description: Optional[str] = None
    price: Optional[LineItemPrice] = None


class LineItemList(BaseModel):
    data: List[LineItem] = Field(default_factory=list)


class CheckoutSessionObject(BaseModel):
    id: str
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    customer_email: Optional[str] = None
    customer_details: Optional[CustomerDetails] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    payment_status: Optional[str] = None
    line_items: Optional[LineItemList] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, value):
        return value or {}


class EventData(BaseModel):
    object: Dict[str, Any] = Field(default_factory=dict)


class PaymentEvent(BaseModel):
    id: Optional[str] = None
    type: str
    created: Optional[int] = None
    livemode: bool = False
    data: EventData

    @property
    def is_checkout_completed(self) -> bool:
        return self.type == CHECKOUT_SESSION_COMPLETED

    def checkout_session(self) -> CheckoutSessionObject:
        return CheckoutSessionObject.model_validate(self.data.object)


class WebhookAck(BaseModel):
    received: bool = True
