import json

import httpx
import pytest

from checkout_relay.models.notification import NotificationMessage
from checkout_relay.services.dispatcher import format_amount
from checkout_relay.services.notifier import DiscordNotifier


def make_message(**overrides):
    values = {
        "product": "Widget",
        "amount": "50.00",
        "currency": "USD",
        "customer_email": "buyer@example.com",
        "session_id": "cs_test_123",
        "metadata": {"discord": "buyer#1234"},
    }
    values.update(overrides)
    return NotificationMessage(**values)


@pytest.mark.parametrize("amount, expected", [(5000, "50.00"), (400, "4.00"), (1, "0.01"), (0, "0.00"), (None, "0.00")])
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_discord_payload():
    payload = make_message().to_discord_payload("Stripe Purchase Bot")

    assert payload["username"] == "Stripe Purchase Bot"
    embed = payload["embeds"][0]
    assert embed["title"] == "✅ NEW PURCHASE RECEIVED"
    assert embed["color"] == 3066993
    assert embed["timestamp"]
    assert [f["name"] for f in embed["fields"]] == [
        "Product",
        "Amount Paid",
        "Customer Email",
        "Stripe Session ID",
        "discord",
    ]
    assert embed["fields"][1]["value"] == "50.00 USD"
    assert embed["fields"][3]["value"] == "`cs_test_123`"


def test_discord_payload_respects_limits():
    metadata = {"n" * 300: "long name"}
    metadata.update({f"key{i}": "x" * 2000 for i in range(40)})
    fields = make_message(metadata=metadata).to_discord_payload("bot")["embeds"][0]["fields"]

    assert len(fields) == 25
    assert all(len(f["value"]) <= 1024 for f in fields)
    assert all(len(f["name"]) <= 256 for f in fields)
    assert fields[4]["name"] == "n" * 253 + "..."
    assert fields[4]["value"] == "long name"


@pytest.mark.asyncio
async def test_send_posts_to_webhook(settings):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(204)

    notifier = DiscordNotifier(settings, transport=httpx.MockTransport(handler))

    assert await notifier.send(make_message()) is True
    assert len(requests) == 1
    assert str(requests[0].url) == settings.DISCORD_WEBHOOK_URL
    body = json.loads(requests[0].content)
    assert body["username"] == settings.DISCORD_USERNAME
    assert body["embeds"][0]["fields"][0]["value"] == "**Widget**"


@pytest.mark.asyncio
async def test_send_remote_error_is_not_raised(settings):
    notifier = DiscordNotifier(settings, transport=httpx.MockTransport(lambda request: httpx.Response(500)))

    assert await notifier.send(make_message()) is False


@pytest.mark.asyncio
async def test_send_network_error_is_not_raised(settings):
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    notifier = DiscordNotifier(settings, transport=httpx.MockTransport(handler))

    assert await notifier.send(make_message()) is False
    assert len(calls) == 1
