import httpx
import pytest

from hue_bridge.client import BridgeClient
from hue_bridge.config import AppConfig
from hue_bridge.modifier import ModifierType
from hue_bridge.resources.light import LightStateModifier


def test_from_env_defaults(monkeypatch):
    for name in (
        "HUE_BRIDGE_HOST",
        "HUE_USERNAME",
        "HUE_BRIDGE_SCHEME",
        "HUE_VERIFY_TLS",
        "HUE_TIMEOUT_SECONDS",
        "HUE_CONNECT_TIMEOUT_SECONDS",
        "HUE_DEVICETYPE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig.from_env()
    assert config.bridge_host is None
    assert config.username is None
    assert config.scheme == "http"
    assert config.verify_tls is False
    assert config.timeout_seconds == 10.0
    assert config.connect_timeout_seconds == 3.0
    assert config.devicetype == "hue-bridge#python"
    assert config.log_level == "INFO"


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("HUE_BRIDGE_HOST", "192.168.1.2")
    monkeypatch.setenv("HUE_USERNAME", "abc")
    monkeypatch.setenv("HUE_BRIDGE_SCHEME", "https")
    monkeypatch.setenv("HUE_VERIFY_TLS", "yes")
    monkeypatch.setenv("HUE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig.from_env()
    assert config.bridge_host == "192.168.1.2"
    assert config.username == "abc"
    assert config.scheme == "https"
    assert config.verify_tls is True
    assert config.timeout_seconds == 2.5
    assert config.log_level == "DEBUG"


@pytest.mark.asyncio
async def test_client_from_config_uses_scheme_and_host(config):
    urls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        urls.append(str(request.url))
        return httpx.Response(200, json=[{"success": {"/lights/7/state/bri": 10}}])

    async with BridgeClient.from_config(config, transport=httpx.MockTransport(handler)) as client:
        await client.set_light_state("7", LightStateModifier().brightness(ModifierType.OVERRIDE, 10))
    assert urls == ["http://bridge.test/api/testuser/lights/7/state"]
