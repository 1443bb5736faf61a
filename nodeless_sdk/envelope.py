"""
Location: nodeless_sdk/envelope.py

Summary:
    Second stage of the response pipeline. Takes the untyped JSON document
    returned by the transport primitives, pulls the payload out of the
    API envelope and validates it into the requested type.

Usage:
    Used by client.py for every resource operation. Most endpoints wrap
    the payload as {"data": ...}; the status endpoints return it under
    a named top-level field such as "status".

Example:
    from nodeless_sdk.envelope import decode, unwrap
    from nodeless_sdk.types import Store

    store = decode(Store, unwrap({"data": {...}}))
    status = decode(InvoiceStatus, unwrap({"status": "paid"}, "status"))
"""

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import DecodeError, InvalidResponseError

T = TypeVar("T")

DATA_FIELD = "data"


def unwrap(document: Any, field: str = DATA_FIELD) -> Any:
    """
    Extract the payload from an API envelope.

    A missing field is treated as null; whether that is acceptable is up
    to the decode step.

    Args:
        document: Parsed JSON response body
        field: Envelope key holding the payload

    Returns:
        The payload, or None if the key is absent

    Raises:
        InvalidResponseError: If the document is not a JSON object
    """
    if not isinstance(document, dict):
        raise InvalidResponseError(
            f"expected a JSON object envelope, got {type(document).__name__}"
        )
    return document.get(field)


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def decode(target: type[T], payload: Any) -> T:
    """
    Validate a payload into the target type.

    Args:
        target: Model, enum, or typing construct (list[Store], Optional[Paywall], ...)
        payload: Untyped JSON value

    Returns:
        The validated value

    Raises:
        DecodeError: If the payload does not match the target type
    """
    try:
        return _adapter(target).validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(f"could not decode {_type_name(target)}: {exc}") from exc


def encode(model: BaseModel) -> dict[str, Any]:
    """Return the wire (JSON) form of a model."""
    return model.model_dump(mode="json", by_alias=True)


def _type_name(target: Any) -> str:
    if getattr(target, "__origin__", None) is None and hasattr(target, "__name__"):
        return target.__name__
    return str(target)
