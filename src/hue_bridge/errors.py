from __future__ import annotations

from enum import IntEnum
from typing import Any


class BridgeErrorType(IntEnum):
    """Error codes the bridge puts in the `type` field of an error record."""

    UNKNOWN = -1
    UNAUTHORIZED_USER = 1
    INVALID_JSON = 2
    RESOURCE_NOT_AVAILABLE = 3
    METHOD_NOT_AVAILABLE = 4
    MISSING_PARAMETERS = 5
    PARAMETER_NOT_AVAILABLE = 6
    INVALID_PARAMETER_VALUE = 7
    PARAMETER_NOT_MODIFIABLE = 8
    TOO_MANY_ITEMS = 11
    PORTAL_CONNECTION_REQUIRED = 12
    LINK_BUTTON_NOT_PRESSED = 101
    DHCP_CANNOT_BE_DISABLED = 110
    INVALID_UPDATE_STATE = 111
    DEVICE_OFF = 201
    GROUP_TABLE_FULL = 301
    DEVICE_GROUP_TABLE_FULL = 302
    DEVICE_UNREACHABLE = 304
    GROUP_TYPE_NOT_MODIFIABLE = 305
    LIGHT_ALREADY_USED = 306
    SCENE_CREATION_IN_PROGRESS = 401
    SCENE_BUFFER_FULL = 402
    SENSOR_TYPE_NOT_ALLOWED = 501
    SENSOR_LIST_FULL = 502
    RULE_ENGINE_FULL = 601
    CONDITION_ERROR = 607
    ACTION_ERROR = 608
    UNABLE_TO_ACTIVATE = 609
    SCHEDULE_LIST_FULL = 701
    SCHEDULE_TIMEZONE_NOT_VALID = 702
    SCHEDULE_TIME_CONFLICT = 703
    SCHEDULE_TAG_NOT_UNIQUE = 704
    SCHEDULE_TIME_IN_PAST = 705
    INTERNAL_ERROR = 901

    @classmethod
    def from_code(cls, code: int) -> "BridgeErrorType":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


class HueError(Exception):
    pass


class InvalidAttribute(HueError, ValueError):
    """One or more pending values are outside their attribute's domain.

    Raised while building the request body, so nothing has been sent.
    """

    def __init__(self, problems: list[tuple[str, str]]) -> None:
        summary = "; ".join(f"{attribute}: {message}" for attribute, message in problems)
        super().__init__(f"Invalid attribute value(s): {summary}")
        self.problems = problems

    @property
    def attributes(self) -> list[str]:
        return [attribute for attribute, _ in self.problems]


class EmptyModification(HueError):
    def __init__(self, resource: str = "modifier") -> None:
        super().__init__(f"{resource} has no pending changes")
        self.resource = resource


class MalformedResponse(HueError):
    def __init__(self, message: str, *, body: Any = None) -> None:
        super().__init__(message)
        self.body = body


class BridgeError(HueError):
    def __init__(self, *, code: int, address: str, description: str) -> None:
        super().__init__(f"Bridge error {code} at {address or '<bridge>'}: {description}")
        self.code = code
        self.address = address
        self.description = description

    @property
    def kind(self) -> BridgeErrorType:
        return BridgeErrorType.from_code(self.code)


class NetworkError(HueError):
    pass


class UpstreamError(NetworkError):
    def __init__(self, *, status_code: int, body: Any) -> None:
        super().__init__(f"Hue upstream error: {status_code}")
        self.status_code = status_code
        self.body = body
