from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import os


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    bridge_host: Optional[str]
    username: Optional[str]
    scheme: str
    verify_tls: bool
    timeout_seconds: float
    connect_timeout_seconds: float
    devicetype: str
    log_level: str

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            bridge_host=os.getenv("HUE_BRIDGE_HOST"),
            username=os.getenv("HUE_USERNAME"),
            scheme=os.getenv("HUE_BRIDGE_SCHEME", "http"),
            verify_tls=_parse_bool(os.getenv("HUE_VERIFY_TLS")),
            timeout_seconds=float(os.getenv("HUE_TIMEOUT_SECONDS", "10")),
            connect_timeout_seconds=float(os.getenv("HUE_CONNECT_TIMEOUT_SECONDS", "3")),
            devicetype=os.getenv("HUE_DEVICETYPE", "hue-bridge#python"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
