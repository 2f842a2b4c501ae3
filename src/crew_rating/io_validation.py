"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter, ValidationError


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class JsonObjectExpectedError(ValueError):
    """Raised when a JSON file does not contain an object at the top level."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"JSON file must contain an object: {path}")


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def format_validation_error(exc: ValidationError) -> str:
    """Summarise the first pydantic error as ``location: message``."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"
