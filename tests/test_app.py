import pytest

from checkout_relay.core.config import Settings
from checkout_relay.core.exceptions import ConfigurationError
from checkout_relay.main import create_app
from tests.conftest import make_settings


@pytest.mark.parametrize("missing", ["STRIPE_SECRET_KEY", "DISCORD_WEBHOOK_URL"])
def test_create_app_requires_secrets(tmp_path, missing):
    with pytest.raises(ConfigurationError):
        create_app(make_settings(tmp_path, **{missing: ""}))


def test_create_app_allows_missing_webhook_secret(tmp_path):
    app = create_app(make_settings(tmp_path, STRIPE_WEBHOOK_SECRET=""))
    assert app.state.event_verifier.configured is False


def test_domain_defaults_to_localhost():
    settings = Settings(_env_file=None, PUBLIC_BASE_URL="", PORT=8080)
    assert settings.domain == "http://localhost:8080"


def test_domain_reads_render_service_url(monkeypatch):
    monkeypatch.delenv("PUBLIC_BASE_URL", raising=False)
    monkeypatch.setenv("RENDER_SERVICE_URL", "https://shop.onrender.com/")
    settings = Settings(_env_file=None)
    assert settings.domain == "https://shop.onrender.com"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_landing_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Order page" in response.text


def test_missing_static_dir(tmp_path):
    app = create_app(make_settings(tmp_path, STATIC_DIR=str(tmp_path / "nope")))
    assert all(getattr(route, "name", None) != "static" for route in app.routes)
