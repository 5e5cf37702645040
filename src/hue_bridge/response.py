from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Iterator, Union, overload

from pydantic import ValidationError

from hue_bridge.errors import BridgeError, BridgeErrorType, MalformedResponse
from hue_bridge.schemas import ErrorEnvelope, SuccessEnvelope

logger = logging.getLogger("hue_bridge")


def _attribute_of(address: str) -> str:
    return address.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Success:
    address: str
    value: Any

    @property
    def attribute(self) -> str:
        return _attribute_of(self.address)


@dataclass(frozen=True)
class Failure:
    address: str
    code: int
    description: str

    @property
    def attribute(self) -> str:
        return _attribute_of(self.address)

    @property
    def kind(self) -> BridgeErrorType:
        return BridgeErrorType.from_code(self.code)

    def to_error(self) -> BridgeError:
        return BridgeError(code=self.code, address=self.address, description=self.description)


@dataclass(frozen=True)
class Malformed:
    index: int
    element: Any
    reason: str

    def to_error(self) -> MalformedResponse:
        return MalformedResponse(f"Reply element {self.index}: {self.reason}", body=self.element)


Outcome = Union[Success, Failure, Malformed]


@dataclass(frozen=True)
class ModificationResponse(Sequence):
    """Per-attribute outcomes of one modification, in the bridge's reply order."""

    outcomes: tuple[Outcome, ...] = ()

    @overload
    def __getitem__(self, index: int) -> Outcome: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Outcome, ...]: ...

    def __getitem__(self, index):
        return self.outcomes[index]

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self.outcomes)

    @property
    def successes(self) -> list[Success]:
        return [o for o in self.outcomes if isinstance(o, Success)]

    @property
    def failures(self) -> list[Failure]:
        return [o for o in self.outcomes if isinstance(o, Failure)]

    @property
    def malformed(self) -> list[Malformed]:
        return [o for o in self.outcomes if isinstance(o, Malformed)]

    @property
    def ok(self) -> bool:
        return all(isinstance(o, Success) for o in self.outcomes)

    @property
    def applied(self) -> dict[str, Any]:
        return {o.address: o.value for o in self.successes}

    def for_attribute(self, attribute: str) -> list[Outcome]:
        # Relative updates may be acknowledged under their `*_inc` field name.
        names = {attribute, f"{attribute}_inc"}
        return [o for o in self.outcomes if not isinstance(o, Malformed) and o.attribute in names]

    def raise_for_errors(self) -> None:
        for outcome in self.outcomes:
            if isinstance(outcome, (Failure, Malformed)):
                raise outcome.to_error()


def _malformed(index: int, element: Any, reason: str) -> Malformed:
    logger.warning("malformed bridge reply element %d: %s (%r)", index, reason, element)
    return Malformed(index=index, element=element, reason=reason)


def _classify(index: int, element: Any) -> Outcome:
    if not isinstance(element, dict):
        return _malformed(index, element, "element is not an object")

    has_success = "success" in element
    has_error = "error" in element
    if has_success and has_error:
        return _malformed(index, element, "element has both 'success' and 'error'")

    if has_error:
        try:
            record = ErrorEnvelope.model_validate(element).error
        except ValidationError as err:
            return _malformed(index, element, f"invalid error record: {err.errors()[0]['msg']}")
        return Failure(address=record.address, code=record.type, description=record.description)

    if has_success:
        try:
            applied = SuccessEnvelope.model_validate(element).success
        except ValidationError as err:
            return _malformed(index, element, f"invalid success record: {err.errors()[0]['msg']}")
        if len(applied) != 1:
            return _malformed(index, element, "success record must name exactly one address")
        ((address, value),) = applied.items()
        return Success(address=address, value=value)

    return _malformed(index, element, "element has neither 'success' nor 'error'")


def interpret(body: Any) -> ModificationResponse:
    """Classify each element of a decoded bridge reply.

    Malformed elements are kept in place as `Malformed` outcomes. Only a body that
    is not an array at all raises MalformedResponse.
    """
    if not isinstance(body, list):
        raise MalformedResponse("Expected a JSON array from the bridge", body=body)
    return ModificationResponse(outcomes=tuple(_classify(i, element) for i, element in enumerate(body)))


def interpret_bytes(raw: bytes | str) -> ModificationResponse:
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise MalformedResponse(f"Bridge reply is not JSON: {exc}", body=raw) from exc
    return interpret(body)
