"""Unit tests for the hub HTTP client request mapping and failure handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest
import requests

from hub_proxy.hub.client import HubHttpClient
from hub_proxy.hub.client import normalize_base_url


@dataclass
class _FakeResponse:
    status_code: int
    body: Any

    def json(self) -> Any:
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class _SessionStub:
    def __init__(self, request_fn: Callable[..., _FakeResponse]) -> None:
        self._request_fn = request_fn
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, *, headers: dict[str, str], params: dict[str, Any] | None, timeout: float):
        self.calls.append(
            {
                "url": url,
                "headers": headers,
                "params": params,
                "timeout": timeout,
            }
        )
        return self._request_fn(url=url, headers=headers, params=params, timeout=timeout)

    def close(self) -> None:
        self.closed = True


def _client(session: _SessionStub, **kwargs: Any) -> HubHttpClient:
    return HubHttpClient(
        base_url="https://hub.example.com:2281",
        session=session,  # type: ignore[arg-type]
        **kwargs,
    )


def _ok_session(body: Any = None) -> _SessionStub:
    return _SessionStub(lambda **_: _FakeResponse(200, {"messages": []} if body is None else body))


def test_get_cast_sends_hash_as_prefixed_hex_with_timeout() -> None:
    session = _ok_session({"data": {"fid": 2}})
    client = _client(session, timeout_seconds=4.0)

    result = client.get_cast(fid=2, hash=bytes.fromhex("460a87ace7014adefe4a2944fb62833b1bf2a6be"))

    assert result.is_ok
    assert result.value == {"data": {"fid": 2}}
    assert session.calls == [
        {
            "url": "https://hub.example.com:2281/v1/castById",
            "headers": {"Accept": "application/json", "User-Agent": "hub-proxy/0.1"},
            "params": {"fid": 2, "hash": "0x460a87ace7014adefe4a2944fb62833b1bf2a6be"},
            "timeout": 4.0,
        }
    ]


def test_paging_parameters_are_forwarded_only_when_given() -> None:
    session = _ok_session()
    client = _client(session)

    client.get_casts_by_fid(fid=2)
    client.get_casts_by_mention(fid=3, page_size=10, page_token="abc", reverse=True)

    assert session.calls[0]["params"] == {"fid": 2}
    assert session.calls[1]["url"].endswith("/v1/castsByMention")
    assert session.calls[1]["params"] == {"fid": 3, "pageSize": 10, "pageToken": "abc", "reverse": "true"}


def test_cast_and_reaction_lookups_map_to_hub_parameters() -> None:
    session = _ok_session()
    client = _client(session)

    client.get_casts_by_parent(fid=2, hash=b"\xee\x04", reverse=False)
    client.get_reaction(fid=8150, reaction_type="REACTION_TYPE_LIKE", target_fid=2, target_hash=b"\xee\x04")
    client.get_reactions_by_cast(reaction_type="REACTION_TYPE_RECAST", target_fid=2, target_hash=b"\x01")
    client.get_all_reaction_messages_by_fid(fid=2)

    assert [call["url"].rsplit("/", 1)[-1] for call in session.calls] == [
        "castsByParent",
        "reactionById",
        "reactionsByCast",
        "reactionsByFid",
    ]
    assert session.calls[0]["params"] == {"fid": 2, "hash": "0xee04", "reverse": "false"}
    assert session.calls[1]["params"] == {
        "fid": 8150,
        "reaction_type": "REACTION_TYPE_LIKE",
        "target_fid": 2,
        "target_hash": "0xee04",
    }
    assert session.calls[2]["params"]["target_hash"] == "0x01"
    assert session.calls[3]["params"] == {"fid": 2}


def test_registry_signer_and_verification_lookups() -> None:
    session = _ok_session()
    client = _client(session)

    client.get_id_registry_event(fid=2)
    client.get_name_registry_event(name="v".encode("utf-8"))
    client.get_signer(fid=2, signer=b"\x5f\xeb")
    client.get_user_data(fid=2, user_data_type="USER_DATA_TYPE_DISPLAY")
    client.get_verification(fid=2, address=b"\x2d\x59")

    params = [call["params"] for call in session.calls]
    assert params == [
        {"fid": 2, "event_type": "EVENT_TYPE_ID_REGISTER"},
        {"name": "v"},
        {"fid": 2, "signer": "0x5feb"},
        {"fid": 2, "user_data_type": "USER_DATA_TYPE_DISPLAY"},
        {"fid": 2, "address": "0x2d59"},
    ]


def test_hub_error_payload_becomes_error_result() -> None:
    session = _SessionStub(
        lambda **_: _FakeResponse(
            400,
            {"errCode": "not_found", "presentableError": "", "details": "cast not found"},
        )
    )
    client = _client(session)

    result = client.get_cast(fid=2, hash=b"\x01")

    assert result.is_err
    assert result.error.err_code == "not_found"
    assert result.error.message == "cast not found"


def test_non_json_error_payload_falls_back_to_status() -> None:
    session = _SessionStub(lambda **_: _FakeResponse(502, ValueError("not json")))
    client = _client(session)

    result = client.get_verifications_by_fid(fid=2)

    assert result.error.err_code == "unavailable"
    assert result.error.message == "HTTP 502"


def test_connection_errors_become_network_failures_without_retry() -> None:
    def request_fn(**_: Any) -> _FakeResponse:
        raise requests.ConnectionError("connection refused")

    session = _SessionStub(request_fn)
    client = _client(session)

    result = client.get_user_data_by_fid(fid=2)

    assert result.is_err
    assert result.error.err_code == "unavailable.network_failure"
    assert len(session.calls) == 1


def test_timeouts_become_network_failures() -> None:
    def request_fn(**_: Any) -> _FakeResponse:
        raise requests.Timeout("read timed out")

    client = _client(_SessionStub(request_fn))

    assert client.get_signers_by_fid(fid=2).error.err_code == "unavailable.network_failure"


def test_non_json_success_payload_is_reported() -> None:
    client = _client(_SessionStub(lambda **_: _FakeResponse(200, ValueError("not json"))))

    assert client.get_all_verification_messages_by_fid(fid=2).error.err_code == "unavailable.decode_failure"


def test_close_closes_session() -> None:
    session = _ok_session()
    client = _client(session)

    client.close()

    assert session.closed


def test_constructor_validates_settings() -> None:
    with pytest.raises(ValueError):
        HubHttpClient(base_url="hub.example.com", timeout_seconds=0)
    with pytest.raises(ValueError):
        HubHttpClient(base_url="  ")


def test_normalize_base_url_adds_scheme_for_host_port_endpoints() -> None:
    assert normalize_base_url("testnet1.farcaster.xyz:2281") == "https://testnet1.farcaster.xyz:2281"
    assert normalize_base_url("http://127.0.0.1:2281/") == "http://127.0.0.1:2281"
