import pytest

from hue_bridge.config import AppConfig


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        bridge_host="bridge.test",
        username="testuser",
        scheme="http",
        verify_tls=False,
        timeout_seconds=10.0,
        connect_timeout_seconds=3.0,
        devicetype="hue-bridge#tests",
        log_level="INFO",
    )
