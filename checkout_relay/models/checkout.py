# checkout_relay/models/checkout.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, Optional

# Stripe metadata limits
MAX_METADATA_KEYS = 50
MAX_METADATA_KEY_LENGTH = 40
MAX_METADATA_VALUE_LENGTH = 500


class OrderRequest(BaseModel):
    # Left untyped so a bad price falls back to the default instead of failing validation
    itemPrice: Optional[Any] = None
    itemName: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    @field_validator("itemName", mode="before")
    @classmethod
    def coerce_name(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_metadata(cls, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("metadata must be an object")
        if len(value) > MAX_METADATA_KEYS:
            raise ValueError(f"metadata can have at most {MAX_METADATA_KEYS} keys")

        cleaned = {}
        for key, item in value.items():
            key = str(key)
            if not key.strip():
                raise ValueError("metadata keys must not be empty")
            if "[" in key or "]" in key:
                raise ValueError(f"metadata key '{key[:20]}' must not contain square brackets")
            if len(key) > MAX_METADATA_KEY_LENGTH:
                raise ValueError(f"metadata key '{key[:20]}...' is longer than {MAX_METADATA_KEY_LENGTH} characters")
            if item is None:
                continue
            item = item if isinstance(item, str) else str(item)
            if len(item) > MAX_METADATA_VALUE_LENGTH:
                raise ValueError(f"metadata value for '{key}' is longer than {MAX_METADATA_VALUE_LENGTH} characters")
            cleaned[key] = item
        return cleaned


class CheckoutSessionResponse(BaseModel):
    sessionId: str
    url: str


class ErrorResponse(BaseModel):
    error: str
