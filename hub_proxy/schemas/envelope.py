"""Response envelope schemas shared across proxy routes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class HubErrorObject(BaseModel):
    """Error reported by the hub or by a local conversion."""

    model_config = ConfigDict(populate_by_name=True)

    err_code: str = Field(alias="errCode")
    message: str


class ResultResponse(BaseModel):
    """Successful call envelope."""

    result: Any


class ErrorResponse(BaseModel):
    """Failure envelope: a plain message for proxy errors, an object for hub errors."""

    error: str | HubErrorObject


class RootResponse(BaseModel):
    """Liveness payload served at the root path."""

    message: str
