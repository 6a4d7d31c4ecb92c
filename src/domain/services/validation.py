"""Boundary validation for decoded API payloads."""

from collections.abc import Mapping
from typing import Any


ENVELOPE_KEY = "data"


class MalformedRecordsError(ValueError):
    """Raised when a decoded payload is not a list of records."""

    def __init__(self, source: str, payload: Any) -> None:
        super().__init__(
            f"Expected a JSON array of records from {source}, "
            f"got {type(payload).__name__}"
        )
        self.source = source


def ensure_record_list(payload: Any, source: str = "payload") -> list[Any]:
    """Validate the top-level shape of a decoded records payload.

    A ``{"data": [...]}`` envelope is unwrapped first. Individual elements
    are not checked here; normalization skips the malformed ones.

    Args:
        payload: Decoded JSON value.
        source: Human-readable origin used in the error message.

    Returns:
        list[Any]: The records list.

    Raises:
        MalformedRecordsError: If the payload is not an array of records.
    """
    if isinstance(payload, Mapping) and isinstance(
        payload.get(ENVELOPE_KEY),
        list,
    ):
        payload = payload[ENVELOPE_KEY]
    if not isinstance(payload, list):
        raise MalformedRecordsError(source, payload)
    return payload


__all__ = ["MalformedRecordsError", "ensure_record_list"]
