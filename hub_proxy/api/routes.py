"""Proxy API routes, declared as a table and served by one generic handler."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi.responses import JSONResponse

from hub_proxy.core.validators import Validator
from hub_proxy.core.validators import is_byte_array
from hub_proxy.core.validators import is_cast_id
from hub_proxy.core.validators import is_hex_string
from hub_proxy.core.validators import is_number
from hub_proxy.core.validators import is_optional_boolean
from hub_proxy.core.validators import is_optional_number
from hub_proxy.core.validators import is_optional_string
from hub_proxy.core.validators import is_string
from hub_proxy.hub.client import HubClient
from hub_proxy.hub.client import get_hub_client
from hub_proxy.schemas.envelope import ErrorResponse
from hub_proxy.schemas.envelope import ResultResponse
from hub_proxy.services import operations
from hub_proxy.services.dispatcher import RouteSpec
from hub_proxy.services.dispatcher import dispatch

PAGING_RULES: dict[str, Validator] = {
    "pageSize": is_optional_number,
    "pageToken": is_optional_string,
    "reverse": is_optional_boolean,
}

FID_RULES: dict[str, Validator] = {"fid": is_number}

ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec(
        path="/get-farcaster-time",
        method="GET",
        operation=operations.get_farcaster_time,
        summary="Get the current Farcaster timestamp.",
    ),
    RouteSpec(
        path="/to-farcaster-time",
        rules={"msTimestamp": is_number},
        operation=operations.to_farcaster_time,
        summary="Convert a Unix timestamp in milliseconds to a Farcaster timestamp.",
    ),
    RouteSpec(
        path="/from-farcaster-time",
        rules={"farcasterTimestamp": is_number},
        operation=operations.from_farcaster_time,
        summary="Convert a Farcaster timestamp to a Unix timestamp in milliseconds.",
    ),
    RouteSpec(
        path="/bytes-to-hex-string",
        rules={"byteArray": is_byte_array},
        operation=operations.bytes_to_hex_string,
        summary="Convert a byte array to a hex string.",
    ),
    RouteSpec(
        path="/hex-string-to-bytes",
        rules={"hexString": is_string},
        operation=operations.hex_string_to_bytes,
        summary="Convert a hex string to a byte array.",
    ),
    RouteSpec(
        path="/bytes-to-utf8-string",
        rules={"byteArray": is_byte_array},
        operation=operations.bytes_to_utf8_string,
        summary="Convert a byte array to a UTF-8 string.",
    ),
    RouteSpec(
        path="/get-signer",
        rules={"fid": is_number, "signerPubKeyHex": is_hex_string},
        operation=operations.get_signer,
        summary="Get an active signer for an fid and signer public key.",
    ),
    RouteSpec(
        path="/get-signers-by-fid",
        rules=FID_RULES,
        operation=operations.get_signers_by_fid,
        summary="Get all active signers created by an fid.",
    ),
    RouteSpec(
        path="/get-all-signer-messages-by-fid",
        rules=FID_RULES,
        operation=operations.get_all_signer_messages_by_fid,
        summary="Get all active and inactive signers created by an fid.",
    ),
    RouteSpec(
        path="/get-user-data",
        rules={"fid": is_number, "userDataType": is_string},
        operation=operations.get_user_data,
        summary="Get one piece of metadata about a user.",
    ),
    RouteSpec(
        path="/get-user-data-by-fid",
        rules=FID_RULES,
        operation=operations.get_user_data_by_fid,
        summary="Get all metadata about a user.",
    ),
    RouteSpec(
        path="/get-all-user-data-messages-by-fid",
        rules=FID_RULES,
        operation=operations.get_all_user_data_messages_by_fid,
        summary="Get all user data messages for an fid.",
    ),
    RouteSpec(
        path="/get-id-registry-event",
        rules=FID_RULES,
        operation=operations.get_id_registry_event,
        summary="Get the on-chain event that most recently changed an fid's ownership.",
    ),
    RouteSpec(
        path="/get-name-registry-event",
        rules={"fname": is_string},
        operation=operations.get_name_registry_event,
        summary="Get the registration record for an fname.",
    ),
    RouteSpec(
        path="/get-cast",
        rules={"fid": is_number, "hash": is_hex_string},
        operation=operations.get_cast,
        summary="Get an active cast by fid and hash.",
    ),
    RouteSpec(
        path="/get-casts-by-fid",
        rules={**FID_RULES, **PAGING_RULES},
        operation=operations.get_casts_by_fid,
        summary="Get active casts for a user in reverse chronological order.",
    ),
    RouteSpec(
        path="/get-casts-by-mention",
        rules={**FID_RULES, **PAGING_RULES},
        operation=operations.get_casts_by_mention,
        summary="Get active casts that mention an fid.",
    ),
    RouteSpec(
        path="/get-casts-by-parent",
        rules={"fid": is_number, "hash": is_hex_string, **PAGING_RULES},
        operation=operations.get_casts_by_parent,
        summary="Get active replies to a cast.",
    ),
    RouteSpec(
        path="/get-all-cast-messages-by-fid",
        rules={**FID_RULES, **PAGING_RULES},
        operation=operations.get_all_cast_messages_by_fid,
        summary="Get all active and inactive casts for a user.",
    ),
    RouteSpec(
        path="/get-reaction",
        rules={"fid": is_number, "reactionType": is_string, "castId": is_cast_id},
        operation=operations.get_reaction,
        summary="Get a user's reaction of one type to a cast.",
    ),
    RouteSpec(
        path="/get-reactions-by-cast",
        rules={"reactionType": is_string, "castId": is_cast_id},
        operation=operations.get_reactions_by_cast,
        summary="Get all active reactions to a cast.",
    ),
    RouteSpec(
        path="/get-reactions-by-fid",
        rules={"fid": is_number, "reactionType": is_optional_string},
        operation=operations.get_reactions_by_fid,
        summary="Get active reactions made by a user.",
    ),
    RouteSpec(
        path="/get-all-reaction-messages-by-fid",
        rules={"fid": is_number, "reactionType": is_optional_string},
        operation=operations.get_all_reaction_messages_by_fid,
        summary="Get all active and inactive reactions made by a user.",
    ),
    RouteSpec(
        path="/get-verification",
        rules={"fid": is_number, "address": is_hex_string},
        operation=operations.get_verification,
        summary="Get a user's verification for one Ethereum address.",
    ),
    RouteSpec(
        path="/get-verifications-by-fid",
        rules=FID_RULES,
        operation=operations.get_verifications_by_fid,
        summary="Get all active verifications made by a user.",
    ),
    RouteSpec(
        path="/get-all-verification-messages-by-fid",
        rules=FID_RULES,
        operation=operations.get_all_verification_messages_by_fid,
        summary="Get all active and inactive verifications made by a user.",
    ),
)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request body"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


def _build_endpoint(route: RouteSpec) -> Callable[..., JSONResponse]:
    if route.method == "GET":

        def get_endpoint(hub: HubClient = Depends(get_hub_client)) -> JSONResponse:
            return dispatch(route, {}, hub)

        return get_endpoint

    def post_endpoint(
        payload: Any = Body(default=None),
        hub: HubClient = Depends(get_hub_client),
    ) -> JSONResponse:
        return dispatch(route, payload, hub)

    return post_endpoint


def build_router(routes: tuple[RouteSpec, ...] = ROUTES) -> APIRouter:
    """Register one endpoint per route spec."""
    router = APIRouter(tags=["hub"])
    for route in routes:
        router.add_api_route(
            route.path,
            _build_endpoint(route),
            methods=[route.method],
            name=route.operation.__name__,
            summary=route.summary,
            response_model=ResultResponse,
            responses=ERROR_RESPONSES,
        )
    return router


router = build_router()
