import hashlib
import hmac
import json
import time

import pytest
from fastapi.testclient import TestClient

from checkout_relay.core.config import Settings
from checkout_relay.main import create_app

WEBHOOK_SECRET = "whsec_test_secret"


class FakeNotifier:
    def __init__(self, error=None):
        self.messages = []
        self.error = error

    async def send(self, message):
        self.messages.append(message)
        if self.error:
            raise self.error
        return True


def make_settings(tmp_path, **overrides):
    static_dir = tmp_path / "static"
    static_dir.mkdir(exist_ok=True)
    (static_dir / "index.html").write_text("<h1>Order page</h1>")
    values = {
        "STRIPE_SECRET_KEY": "sk_test_123",
        "STRIPE_WEBHOOK_SECRET": WEBHOOK_SECRET,
        "DISCORD_WEBHOOK_URL": "https://discord.test/api/webhooks/1/abc",
        "PUBLIC_BASE_URL": "http://shop.test",
        "STATIC_DIR": str(static_dir),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    timestamp = timestamp or int(time.time())
    signed_payload = f"{timestamp}.{payload.decode()}"
    sig = hmac.new(secret.encode(), signed_payload.encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={sig}"


def event_body(event_type: str, session: dict) -> bytes:
    event = {
        "id": "evt_test",
        "object": "event",
        "type": event_type,
        "created": int(time.time()),
        "livemode": False,
        "data": {"object": session},
    }
    return json.dumps(event).encode()


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(settings, notifier):
    return TestClient(create_app(settings, notifier=notifier))
