"""Success/failure container returned by hub calls and conversion helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Generic
from typing import TypeVar

T = TypeVar("T")

_MISSING: Any = object()


@dataclass(frozen=True)
class HubError:
    """Error reported by the hub or by a local conversion."""

    err_code: str
    message: str

    def to_payload(self) -> dict[str, str]:
        """Return the JSON shape used in error envelopes."""
        return {"errCode": self.err_code, "message": self.message}


@dataclass(frozen=True)
class HubResult(Generic[T]):
    """Either a value or a `HubError`, never both."""

    _value: Any = _MISSING
    _error: HubError | None = None

    @classmethod
    def ok(cls, value: T) -> HubResult[T]:
        return cls(_value=value)

    @classmethod
    def err(cls, error: HubError) -> HubResult[T]:
        return cls(_error=error)

    @property
    def is_ok(self) -> bool:
        return self._error is None

    @property
    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError("Called value on HubResult.err")
        return self._value

    @property
    def error(self) -> HubError:
        if self._error is None:
            raise ValueError("Called error on HubResult.ok")
        return self._error


def invalid_param(message: str) -> HubResult[Any]:
    """Shortcut for the error local conversions report on bad input."""
    return HubResult.err(HubError(err_code="bad_request.invalid_param", message=message))
