# checkout_relay/main.py
import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from checkout_relay.core.config import Settings, get_settings
from checkout_relay.core.exceptions import ConfigurationError
from checkout_relay.routes import checkout, health, webhook
from checkout_relay.services.checkout import SessionInitiator
from checkout_relay.services.dispatcher import EventDispatcher
from checkout_relay.services.notifier import DiscordNotifier
from checkout_relay.services.verifier import EventVerifier

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, notifier: Optional[DiscordNotifier] = None) -> FastAPI:
    settings = settings or get_settings()

    missing = settings.missing_required()
    if missing:
        logger.critical(f"FATAL ERROR: {', '.join(missing)} not set in environment.")
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
    if not settings.STRIPE_WEBHOOK_SECRET.strip():
        logger.error("STRIPE_WEBHOOK_SECRET is not set; /webhook will answer 500 until it is configured.")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Stripe Checkout sessions with Discord purchase notifications",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    notifier = notifier or DiscordNotifier(settings)
    app.state.settings = settings
    app.state.session_initiator = SessionInitiator(settings)
    app.state.event_verifier = EventVerifier(settings)
    app.state.event_dispatcher = EventDispatcher(settings, notifier)

    app.include_router(webhook.router, tags=["Webhooks"])
    app.include_router(checkout.router, tags=["Checkout"])
    app.include_router(health.router, tags=["Health"])

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Server listening on port {settings.PORT}")
        logger.info(f"Serving static files from: {os.path.abspath(settings.STATIC_DIR)}")
        logger.info(f"Domain used for redirects: {settings.domain}")

    # Mounted last so the API routes above take precedence
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    else:
        logger.warning(f"Static directory {settings.STATIC_DIR} not found; client UI will not be served")

    return app
