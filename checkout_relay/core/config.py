# checkout_relay/core/config.py
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Checkout Relay"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Base URL used to build Stripe redirect targets
    PUBLIC_BASE_URL: str = Field(
        default="",
        validation_alias=AliasChoices("PUBLIC_BASE_URL", "RENDER_SERVICE_URL"),
    )
    STATIC_DIR: str = "static"

    STRIPE_SECRET_KEY: str = ""
    STRIPE_WEBHOOK_SECRET: str = ""
    STRIPE_WEBHOOK_TOLERANCE: int = 300

    CURRENCY: str = "usd"
    DEFAULT_ITEM_PRICE: float = 4.00
    DEFAULT_ITEM_NAME: str = "Default Product"

    DISCORD_WEBHOOK_URL: str = ""
    DISCORD_USERNAME: str = "Stripe Purchase Bot"
    DISCORD_TIMEOUT_SECONDS: float = 10.0

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
        populate_by_name = True

    @property
    def domain(self) -> str:
        base = self.PUBLIC_BASE_URL or f"http://localhost:{self.PORT}"
        return base.rstrip("/")

    def missing_required(self) -> List[str]:
        """Names of settings the service cannot start without."""
        required = {
            "STRIPE_SECRET_KEY": self.STRIPE_SECRET_KEY,
            "DISCORD_WEBHOOK_URL": self.DISCORD_WEBHOOK_URL,
        }
        return [name for name, value in required.items() if not value.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
