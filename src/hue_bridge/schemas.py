from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ErrorRecord(_WireModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    type: int = Field(..., description="Bridge error code.", examples=[7, 201])
    address: str = Field(
        ...,
        description="Resource path the error applies to (may be the request path itself).",
        examples=["/lights/1/state/sat"],
    )
    description: str = Field(..., description="Human-readable error text from the bridge.")


class ErrorEnvelope(_WireModel):
    error: ErrorRecord


class SuccessEnvelope(_WireModel):
    success: dict[str, Any] = Field(
        ...,
        description="Maps the resource path of an applied attribute to the value the bridge stored.",
        examples=[{"/lights/1/state/bri": 200}],
    )


class RegistrationSuccess(_WireModel):
    username: str = Field(..., description="Whitelisted user used in every `/api/<username>` path.")
    clientkey: str | None = Field(
        default=None,
        description="Entertainment streaming key; only present when `generateclientkey` was requested.",
    )


class RegistrationEnvelope(_WireModel):
    success: RegistrationSuccess


class NupnpBridge(_WireModel):
    id: str = Field(..., description="Bridge id.", examples=["001788fffe100491"])
    internalipaddress: str = Field(..., description="LAN address of the bridge.", examples=["192.168.1.2"])
    port: int | None = Field(default=None, description="HTTPS port, when reported.")
