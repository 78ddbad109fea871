"""Generic request pipeline shared by every proxy route.

validate body -> run one operation -> normalize its `HubResult` into an envelope.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import Any

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from hub_proxy.core.errors import InternalProxyError
from hub_proxy.core.errors import InvalidInputError
from hub_proxy.core.validators import Validator
from hub_proxy.core.validators import validate
from hub_proxy.hub.client import HubClient
from hub_proxy.hub.result import HubResult
from hub_proxy.schemas.envelope import ErrorResponse
from hub_proxy.schemas.envelope import HubErrorObject
from hub_proxy.schemas.envelope import ResultResponse
from hub_proxy.services.operations import Operation

logger = logging.getLogger(__name__)

# Hub failures are outside the proxy's control, so they are reported in the body
# with a 200 rather than as a client error.
HUB_FAILURE_STATUS_CODE = status.HTTP_200_OK


@dataclass(frozen=True)
class RouteSpec:
    """One proxy endpoint: where it lives, what it checks and what it calls."""

    path: str
    operation: Operation
    summary: str
    method: str = "POST"
    rules: Mapping[str, Validator] = field(default_factory=dict)


def normalize_result(result: HubResult[Any]) -> JSONResponse:
    """Render a hub or conversion outcome as a response envelope."""
    if result.is_err:
        payload = ErrorResponse(error=HubErrorObject.model_validate(result.error.to_payload()))
        return JSONResponse(status_code=HUB_FAILURE_STATUS_CODE, content=payload.model_dump(by_alias=True))

    return JSONResponse(status_code=status.HTTP_200_OK, content=ResultResponse(result=result.value).model_dump())


def dispatch(route: RouteSpec, body: Any, hub: HubClient) -> JSONResponse:
    """Run one request through validation, its operation and normalization."""
    fields = body if isinstance(body, Mapping) else {}

    verdict = validate(fields, route.rules)
    if not verdict.valid:
        logger.info("%s %s rejected: %s", route.method, route.path, verdict.error)
        raise InvalidInputError(message=verdict.error or "Invalid input.")

    try:
        result = route.operation(hub, fields)
    except Exception as exc:
        logger.exception("%s %s failed", route.method, route.path)
        raise InternalProxyError() from exc

    if result.is_err:
        logger.warning("%s %s hub error %s: %s", route.method, route.path, result.error.err_code, result.error.message)
    else:
        logger.debug("%s %s succeeded", route.method, route.path)
    return normalize_result(result)
