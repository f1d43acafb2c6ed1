"""Book Payload Validation — field-level checks producing ordered violation messages.

Invariants:
    - validate_book_payload is PURE: returns violations, never raises, never mutates input
    - BOOK_FIELDS is the single source of truth for field order and types
    - Required violations come first (declared order), then type/format per field (declared order)
    - Unknown properties never produce violations
    - Message text matches the JSON-schema wording clients already parse

Design Decisions:
    - Explicit field table over a generic schema engine: every rule is visible here
      (ADR: no reflection-driven validation)
    - bool is rejected where an integer is expected: JSON true/false are not numbers
    - 236.0 is an integer, as in JSON Schema; normalize_integers turns it into 236
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class PayloadKind(str, Enum):
    """Which operation a payload is validated for."""
    CREATE = "create"
    UPDATE = "update"


# scheme ":" rest, RFC 3986 scheme characters, no whitespace anywhere
URI_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:[^\s]*$")


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_integer(value: Any) -> bool:
    """JSON integer: an int, or a float with no fractional part. Never a bool."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int)


def is_uri(value: str) -> bool:
    return bool(URI_PATTERN.match(value))


@dataclass(frozen=True)
class FieldSpec:
    """One Book property: its JSON type name, type check, and optional format."""
    name: str
    type_name: str
    type_check: Callable[[Any], bool]
    format_name: str | None = None
    format_check: Callable[[Any], bool] | None = None
    required_on_update: bool = True


BOOK_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("isbn", "string", is_string, required_on_update=False),
    FieldSpec("amazon_url", "string", is_string, "uri", is_uri),
    FieldSpec("author", "string", is_string),
    FieldSpec("language", "string", is_string),
    FieldSpec("pages", "integer", is_integer),
    FieldSpec("publisher", "string", is_string),
    FieldSpec("title", "string", is_string),
    FieldSpec("year", "integer", is_integer),
)

BOOK_FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in BOOK_FIELDS)


def required_fields(kind: PayloadKind) -> list[FieldSpec]:
    """Fields that must be present for the given operation, in declared order."""
    if kind == PayloadKind.CREATE:
        return list(BOOK_FIELDS)
    return [f for f in BOOK_FIELDS if f.required_on_update]


def check_required(payload: dict, kind: PayloadKind) -> list[str]:
    return [
        f'instance requires property "{spec.name}"'
        for spec in required_fields(kind)
        if spec.name not in payload
    ]


def check_type(spec: FieldSpec, value: Any) -> str | None:
    if spec.type_check(value):
        return None
    return f"instance.{spec.name} is not of a type(s) {spec.type_name}"


def check_format(spec: FieldSpec, value: Any) -> str | None:
    if spec.format_check is None or spec.format_check(value):
        return None
    return (
        f'instance.{spec.name} does not conform to the '
        f'"{spec.format_name}" format'
    )


def validate_book_payload(payload: Any, kind: PayloadKind) -> list[str]:
    """Validate a decoded JSON body. Returns [] when valid.

    A missing body (None) is validated as an empty object.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return ["instance is not of a type(s) object"]

    violations = check_required(payload, kind)
    for spec in BOOK_FIELDS:
        if spec.name not in payload:
            continue
        value = payload[spec.name]
        type_error = check_type(spec, value)
        if type_error:
            violations.append(type_error)
            continue
        format_error = check_format(spec, value)
        if format_error:
            violations.append(format_error)
    return violations


def normalize_integers(payload: dict) -> dict:
    """Copy of a validated payload with integral floats on integer fields made ints."""
    normalized = dict(payload)
    for spec in BOOK_FIELDS:
        value = normalized.get(spec.name)
        if spec.type_name == "integer" and isinstance(value, float):
            normalized[spec.name] = int(value)
    return normalized
