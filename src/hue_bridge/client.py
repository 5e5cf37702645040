from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from hue_bridge.config import AppConfig
from hue_bridge.errors import BridgeError, MalformedResponse, NetworkError, UpstreamError
from hue_bridge.modifier import StateModifier
from hue_bridge.resources.config import ConfigModifier
from hue_bridge.resources.group import GroupAttributeModifier, GroupStateModifier
from hue_bridge.resources.light import LightAttributeModifier, LightStateModifier
from hue_bridge.resources.scene import SceneLightStateModifier, SceneModifier
from hue_bridge.resources.sensor import SensorAttributeModifier, SensorConfigModifier, SensorStateModifier
from hue_bridge.response import ModificationResponse, interpret_bytes
from hue_bridge.schemas import ErrorEnvelope, RegistrationEnvelope

logger = logging.getLogger("hue_bridge")

_T = TypeVar("_T", bound=StateModifier)


@dataclass(frozen=True)
class RegisteredUser:
    username: str
    client_key: str | None = None


def _expect(modifier: StateModifier, kind: type[_T]) -> _T:
    if not isinstance(modifier, kind):
        raise TypeError(f"expected {kind.__name__}, got {type(modifier).__name__}")
    return modifier


class BridgeClient:
    """Talks to one bridge over its v1 REST API.

    Every call is a single request; failures are reported to the caller and never
    retried here.
    """

    def __init__(
        self,
        *,
        bridge_host: str | None,
        username: str | None,
        scheme: str = "http",
        verify: bool = False,
        timeout: float = 10.0,
        connect_timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._bridge_host = bridge_host
        self._username = username
        self._scheme = scheme
        self._verify = verify
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: AppConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> "BridgeClient":
        return cls(
            bridge_host=config.bridge_host,
            username=config.username,
            scheme=config.scheme,
            verify=config.verify_tls,
            timeout=config.timeout_seconds,
            connect_timeout=config.connect_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "BridgeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def configure(self, *, bridge_host: str | None, username: str | None) -> None:
        host_changed = bridge_host != self._bridge_host
        self._bridge_host = bridge_host
        self._username = username
        if host_changed:
            # Recreated against the new host on the next request.
            await self.close()

    @property
    def bridge_host(self) -> str | None:
        return self._bridge_host

    @property
    def username(self) -> str | None:
        return self._username

    def _base_url(self) -> str:
        if not self._bridge_host:
            raise NetworkError("bridge_host not configured")
        return f"{self._scheme}://{self._bridge_host}"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client
        self._client = httpx.AsyncClient(
            base_url=self._base_url(),
            verify=self._verify,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self._client

    def _api_path(self, resource_path: str, *, authenticated: bool) -> str:
        if not authenticated:
            return f"/api{resource_path}"
        if not self._username:
            raise NetworkError("username not configured")
        return f"/api/{self._username}{resource_path}"

    async def send(
        self,
        resource_path: str,
        method: str,
        body: Any | None = None,
        *,
        authenticated: bool = True,
    ) -> bytes:
        """Perform one request and return the raw reply body.

        `resource_path` is relative to `/api/<username>`, e.g. `/lights/1/state`.
        """
        path = self._api_path(resource_path, authenticated=authenticated)
        client = await self._get_client()

        start = time.perf_counter()
        try:
            resp = await client.request(method, path, json=body)
        except httpx.RequestError as exc:
            logger.info("%s %s -> request error: %s", method, resource_path or "/", exc)
            raise NetworkError(str(exc)) from exc
        duration_ms = (time.perf_counter() - start) * 1000
        # The username is part of the URL, so only the resource path is logged.
        logger.info("%s %s -> %s (%.1fms)", method, resource_path or "/", resp.status_code, duration_ms)

        if resp.status_code >= 400:
            reply: Any
            content_type = resp.headers.get("content-type", "")
            if "application/json" in content_type:
                try:
                    reply = resp.json()
                except ValueError:
                    reply = resp.text
            else:
                reply = resp.text
            raise UpstreamError(status_code=resp.status_code, body=reply)

        return resp.content

    async def modify(self, resource_path: str, modifier: StateModifier) -> ModificationResponse:
        """Send a modifier's pending changes and interpret the bridge's reply.

        Local errors (EmptyModification, InvalidAttribute) are raised before any
        request is made. Attributes the bridge rejects come back as `Failure`
        outcomes, not exceptions.
        """
        body = modifier.to_body()
        logger.debug("PUT %s body=%s", resource_path, body)
        raw = await self.send(resource_path, "PUT", body)
        response = interpret_bytes(raw)
        if response.failures:
            logger.warning(
                "%s: bridge rejected %s",
                resource_path,
                ", ".join(f"{f.address} ({f.code}: {f.description})" for f in response.failures),
            )
        return response

    async def set_light_state(self, light_id: str, modifier: LightStateModifier) -> ModificationResponse:
        return await self.modify(f"/lights/{light_id}/state", _expect(modifier, LightStateModifier))

    async def set_light_attributes(self, light_id: str, modifier: LightAttributeModifier) -> ModificationResponse:
        return await self.modify(f"/lights/{light_id}", _expect(modifier, LightAttributeModifier))

    async def set_group_state(self, group_id: str, modifier: GroupStateModifier) -> ModificationResponse:
        return await self.modify(f"/groups/{group_id}/action", _expect(modifier, GroupStateModifier))

    async def set_group_attributes(self, group_id: str, modifier: GroupAttributeModifier) -> ModificationResponse:
        return await self.modify(f"/groups/{group_id}", _expect(modifier, GroupAttributeModifier))

    async def set_scene(self, scene_id: str, modifier: SceneModifier) -> ModificationResponse:
        return await self.modify(f"/scenes/{scene_id}", _expect(modifier, SceneModifier))

    async def set_scene_light_state(
        self, scene_id: str, light_id: str, modifier: SceneLightStateModifier
    ) -> ModificationResponse:
        return await self.modify(
            f"/scenes/{scene_id}/lightstates/{light_id}", _expect(modifier, SceneLightStateModifier)
        )

    async def set_config(self, modifier: ConfigModifier) -> ModificationResponse:
        return await self.modify("/config", _expect(modifier, ConfigModifier))

    async def set_sensor_attributes(self, sensor_id: str, modifier: SensorAttributeModifier) -> ModificationResponse:
        return await self.modify(f"/sensors/{sensor_id}", _expect(modifier, SensorAttributeModifier))

    async def set_sensor_state(self, sensor_id: str, modifier: SensorStateModifier) -> ModificationResponse:
        return await self.modify(f"/sensors/{sensor_id}/state", _expect(modifier, SensorStateModifier))

    async def set_sensor_config(self, sensor_id: str, modifier: SensorConfigModifier) -> ModificationResponse:
        return await self.modify(f"/sensors/{sensor_id}/config", _expect(modifier, SensorConfigModifier))

    async def register_user(self, devicetype: str, *, generate_client_key: bool = False) -> RegisteredUser:
        """Create a whitelisted user; the bridge's link button must have been pressed.

        Raises BridgeError (kind LINK_BUTTON_NOT_PRESSED) while the button is not
        pressed.
        """
        body: dict[str, Any] = {"devicetype": devicetype}
        if generate_client_key:
            body["generateclientkey"] = True
        raw = await self.send("", "POST", body, authenticated=False)

        try:
            reply = json.loads(raw)
        except ValueError as exc:
            raise MalformedResponse(f"Bridge reply is not JSON: {exc}", body=raw) from exc
        # Expected: [{"success": {"username": ...}}] or [{"error": {...}}]
        if not isinstance(reply, list) or not reply or not isinstance(reply[0], dict):
            raise MalformedResponse("Unexpected registration reply from bridge", body=reply)

        first = reply[0]
        try:
            if "error" in first:
                err = ErrorEnvelope.model_validate(first).error
                raise BridgeError(code=err.type, address=err.address, description=err.description)
            success = RegistrationEnvelope.model_validate(first).success
        except ValidationError as exc:
            raise MalformedResponse("Unexpected registration reply from bridge", body=reply) from exc
        return RegisteredUser(username=success.username, client_key=success.clientkey)
