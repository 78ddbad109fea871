"""Proxy operations: turn a validated request body into one hub call or conversion.

Each operation has the signature ``(hub, body) -> HubResult``. Bodies have already
passed their route's validation rules, so required keys are present and well-formed.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from typing import Any

from hub_proxy.hub import conversions
from hub_proxy.hub.client import HubClient
from hub_proxy.hub.result import HubResult

Body = Mapping[str, Any]
Operation = Callable[[HubClient, Body], HubResult[Any]]


def _paging(body: Body) -> dict[str, Any]:
    return {
        "page_size": body.get("pageSize"),
        "page_token": body.get("pageToken"),
        "reverse": body.get("reverse"),
    }


def _with_bytes(hex_string: str, call: Callable[[bytes], HubResult[Any]]) -> HubResult[Any]:
    decoded = conversions.hex_string_to_bytes(hex_string)
    if decoded.is_err:
        return decoded
    return call(decoded.value)


def _with_byte_array(values: list[int], call: Callable[[bytes], HubResult[Any]]) -> HubResult[Any]:
    packed = conversions.to_bytes(values)
    if packed.is_err:
        return packed
    return call(packed.value)


# Local conversions


def get_farcaster_time(_: HubClient, __: Body) -> HubResult[Any]:
    return conversions.get_farcaster_time()


def to_farcaster_time(_: HubClient, body: Body) -> HubResult[Any]:
    return conversions.to_farcaster_time(body["msTimestamp"])


def from_farcaster_time(_: HubClient, body: Body) -> HubResult[Any]:
    return conversions.from_farcaster_time(body["farcasterTimestamp"])


def bytes_to_hex_string(_: HubClient, body: Body) -> HubResult[Any]:
    return _with_byte_array(body["byteArray"], conversions.bytes_to_hex_string)


def hex_string_to_bytes(_: HubClient, body: Body) -> HubResult[Any]:
    decoded = conversions.hex_string_to_bytes(body["hexString"])
    if decoded.is_err:
        return decoded
    return HubResult.ok(list(decoded.value))


def bytes_to_utf8_string(_: HubClient, body: Body) -> HubResult[Any]:
    return _with_byte_array(body["byteArray"], conversions.bytes_to_utf8_string)


# Signers


def get_signer(hub: HubClient, body: Body) -> HubResult[Any]:
    return _with_bytes(
        body["signerPubKeyHex"],
        lambda signer: hub.get_signer(fid=body["fid"], signer=signer),
    )


def get_signers_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_signers_by_fid(fid=body["fid"])


def get_all_signer_messages_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_all_signer_messages_by_fid(fid=body["fid"])


# User data


def get_user_data(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_user_data(fid=body["fid"], user_data_type=body["userDataType"])


def get_user_data_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_user_data_by_fid(fid=body["fid"])


def get_all_user_data_messages_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_all_user_data_messages_by_fid(fid=body["fid"])


# Registry events


def get_id_registry_event(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_id_registry_event(fid=body["fid"])


def get_name_registry_event(hub: HubClient, body: Body) -> HubResult[Any]:
    name = conversions.utf8_string_to_bytes(body["fname"])
    if name.is_err:
        return name
    return hub.get_name_registry_event(name=name.value)


# Casts


def get_cast(hub: HubClient, body: Body) -> HubResult[Any]:
    return _with_bytes(body["hash"], lambda cast_hash: hub.get_cast(fid=body["fid"], hash=cast_hash))


def get_casts_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_casts_by_fid(fid=body["fid"], **_paging(body))


def get_casts_by_mention(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_casts_by_mention(fid=body["fid"], **_paging(body))


def get_casts_by_parent(hub: HubClient, body: Body) -> HubResult[Any]:
    return _with_bytes(
        body["hash"],
        lambda parent_hash: hub.get_casts_by_parent(fid=body["fid"], hash=parent_hash, **_paging(body)),
    )


def get_all_cast_messages_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_all_cast_messages_by_fid(fid=body["fid"], **_paging(body))


# Reactions


def get_reaction(hub: HubClient, body: Body) -> HubResult[Any]:
    cast_id = body["castId"]
    return _with_bytes(
        cast_id["hash"],
        lambda target_hash: hub.get_reaction(
            fid=body["fid"],
            reaction_type=body["reactionType"],
            target_fid=cast_id["fid"],
            target_hash=target_hash,
        ),
    )


def get_reactions_by_cast(hub: HubClient, body: Body) -> HubResult[Any]:
    cast_id = body["castId"]
    return _with_bytes(
        cast_id["hash"],
        lambda target_hash: hub.get_reactions_by_cast(
            reaction_type=body["reactionType"],
            target_fid=cast_id["fid"],
            target_hash=target_hash,
        ),
    )


def get_reactions_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_reactions_by_fid(fid=body["fid"], reaction_type=body.get("reactionType"))


def get_all_reaction_messages_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_all_reaction_messages_by_fid(fid=body["fid"], reaction_type=body.get("reactionType"))


# Verifications


def get_verification(hub: HubClient, body: Body) -> HubResult[Any]:
    return _with_bytes(
        body["address"],
        lambda address: hub.get_verification(fid=body["fid"], address=address),
    )


def get_verifications_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_verifications_by_fid(fid=body["fid"])


def get_all_verification_messages_by_fid(hub: HubClient, body: Body) -> HubResult[Any]:
    return hub.get_all_verification_messages_by_fid(fid=body["fid"])
