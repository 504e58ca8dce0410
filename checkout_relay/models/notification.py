# checkout_relay/models/notification.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List
from datetime import datetime, timezone

# Discord embed limits
MAX_EMBED_FIELDS = 25
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024

PURCHASE_TITLE = "✅ NEW PURCHASE RECEIVED"
PURCHASE_DESCRIPTION = "A new successful payment was registered!"
PURCHASE_COLOR = 3066993  # green
EMAIL_NOT_AVAILABLE = "not available"


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False

    def to_discord(self) -> Dict[str, Any]:
        return {
            "name": _clip(self.name, MAX_FIELD_NAME_LENGTH) or "-",
            "value": _clip(self.value, MAX_FIELD_VALUE_LENGTH) or "-",
            "inline": self.inline,
        }


class NotificationMessage(BaseModel):
    """Purchase notice built from a completed checkout session."""

    title: str = PURCHASE_TITLE
    description: str = PURCHASE_DESCRIPTION
    color: int = PURCHASE_COLOR
    product: str
    amount: str
    currency: str
    customer_email: str = EMAIL_NOT_AVAILABLE
    session_id: str
    metadata: Dict[str, str] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def fields(self) -> List[EmbedField]:
        fields = [
            EmbedField(name="Product", value=f"**{self.product}**", inline=True),
            EmbedField(name="Amount Paid", value=f"{self.amount} {self.currency}", inline=True),
            EmbedField(name="Customer Email", value=self.customer_email),
            EmbedField(name="Stripe Session ID", value=f"`{self.session_id}`"),
        ]
        for key, value in self.metadata.items():
            fields.append(EmbedField(name=key, value=value, inline=True))
        return fields[:MAX_EMBED_FIELDS]

    def to_discord_payload(self, username: str) -> Dict[str, Any]:
        return {
            "username": username,
            "embeds": [
                {
                    "title": self.title,
                    "description": self.description,
                    "color": self.color,
                    "fields": [field.to_discord() for field in self.fields()],
                    "timestamp": self.timestamp.isoformat(),
                }
            ],
        }
