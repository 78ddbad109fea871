"""Shape checks for inbound JSON request bodies.

Validators take the request body and a field key and return a `ValidationResult`.
They never raise. `validate` runs an ordered mapping of field name to validator and
stops at the first failure, so callers only ever see one error message.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
import math
import re

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validator or of a whole rule set."""

    valid: bool
    error: str | None = None


Validator = Callable[[Mapping[str, Any], str], ValidationResult]

PASSED = ValidationResult(valid=True)


def _failed(message: str) -> ValidationResult:
    return ValidationResult(valid=False, error=message)


def _is_number_value(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not numbers.
    # json.loads turns 1e400 into inf and accepts NaN.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integer_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_hex(value: Any) -> bool:
    """Return True for strings of one or more hex digits with an optional 0x prefix."""
    if not isinstance(value, str):
        return False
    digits = value[2:] if value[:2].lower() == "0x" else value
    return _HEX_PATTERN.fullmatch(digits) is not None


def is_number(body: Mapping[str, Any], key: str) -> ValidationResult:
    if not _is_number_value(body.get(key)):
        return _failed(f"Invalid input. Expected a number for {key}.")
    return PASSED


def is_string(body: Mapping[str, Any], key: str) -> ValidationResult:
    if not isinstance(body.get(key), str):
        return _failed(f"Invalid input. Expected a string for {key}.")
    return PASSED


def is_hex_string(body: Mapping[str, Any], key: str) -> ValidationResult:
    if not is_hex(body.get(key)):
        return _failed(f"Invalid input. Expected a hex string for {key}.")
    return PASSED


def is_byte_array(body: Mapping[str, Any], key: str) -> ValidationResult:
    value = body.get(key)
    if not isinstance(value, list) or not all(_is_integer_value(item) for item in value):
        return _failed(f"Invalid input. Expected an array of bytes for {key}.")
    return PASSED


def is_cast_id(body: Mapping[str, Any], key: str) -> ValidationResult:
    """Check for a ``{"fid": <integer>, "hash": <hex string>}`` object."""
    value = body.get(key)
    if not isinstance(value, Mapping) or not _is_integer_value(value.get("fid")) or not is_hex(value.get("hash")):
        return _failed(
            f"Invalid input. Expected a cast id object with a number fid and a hex string hash for {key}."
        )
    return PASSED


def is_optional_number(body: Mapping[str, Any], key: str) -> ValidationResult:
    if body.get(key) is None:
        return PASSED
    return is_number(body, key)


def is_optional_string(body: Mapping[str, Any], key: str) -> ValidationResult:
    if body.get(key) is None:
        return PASSED
    return is_string(body, key)


def is_optional_boolean(body: Mapping[str, Any], key: str) -> ValidationResult:
    value = body.get(key)
    if value is None or isinstance(value, bool):
        return PASSED
    return _failed(f"Invalid input. Expected a boolean for {key}.")


def validate(body: Mapping[str, Any], rules: Mapping[str, Validator]) -> ValidationResult:
    """Run rules in declaration order and return the first failure, if any."""
    for key, validator in rules.items():
        result = validator(body, key)
        if not result.valid:
            return result
    return PASSED
