"""HTTP client for the hub's read API with bounded timeouts.

Each method mirrors one hub RPC. Hashes, keys and addresses are passed as bytes and sent
to the hub as ``0x`` hex. Failures are returned as `HubResult.err` values rather than
raised, so the proxy can forward them to its callers unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any
from typing import Protocol

import logging

import requests

from hub_proxy.core.config import get_settings
from hub_proxy.hub.result import HubError
from hub_proxy.hub.result import HubResult

logger = logging.getLogger(__name__)

ID_REGISTER_EVENT_TYPE = "EVENT_TYPE_ID_REGISTER"


class HubClient(Protocol):
    """Read operations the proxy forwards to a hub."""

    def get_signer(self, *, fid: int, signer: bytes) -> HubResult[Any]: ...

    def get_signers_by_fid(self, *, fid: int) -> HubResult[Any]: ...

    def get_all_signer_messages_by_fid(self, *, fid: int) -> HubResult[Any]: ...

    def get_user_data(self, *, fid: int, user_data_type: str) -> HubResult[Any]: ...

    def get_user_data_by_fid(self, *, fid: int) -> HubResult[Any]: ...

    def get_all_user_data_messages_by_fid(self, *, fid: int) -> HubResult[Any]: ...

    def get_id_registry_event(self, *, fid: int) -> HubResult[Any]: ...

    def get_name_registry_event(self, *, name: bytes) -> HubResult[Any]: ...

    def get_cast(self, *, fid: int, hash: bytes) -> HubResult[Any]: ...

    def get_casts_by_fid(
        self,
        *,
        fid: int,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]: ...

    def get_casts_by_mention(
        self,
        *,
        fid: int,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]: ...

    def get_casts_by_parent(
        self,
        *,
        fid: int,
        hash: bytes,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]: ...

    def get_all_cast_messages_by_fid(
        self,
        *,
        fid: int,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]: ...

    def get_reaction(
        self,
        *,
        fid: int,
        reaction_type: str,
        target_fid: int,
        target_hash: bytes,
    ) -> HubResult[Any]: ...

    def get_reactions_by_cast(
        self,
        *,
        reaction_type: str,
        target_fid: int,
        target_hash: bytes,
    ) -> HubResult[Any]: ...

    def get_reactions_by_fid(self, *, fid: int, reaction_type: str | None = None) -> HubResult[Any]: ...

    def get_all_reaction_messages_by_fid(
        self,
        *,
        fid: int,
        reaction_type: str | None = None,
    ) -> HubResult[Any]: ...

    def get_verification(self, *, fid: int, address: bytes) -> HubResult[Any]: ...

    def get_verifications_by_fid(self, *, fid: int) -> HubResult[Any]: ...

    def get_all_verification_messages_by_fid(self, *, fid: int) -> HubResult[Any]: ...


def _hex(value: bytes) -> str:
    return "0x" + value.hex()


def _paging(page_size: int | None, page_token: str | None, reverse: bool | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if page_size is not None:
        params["pageSize"] = page_size
    if page_token is not None:
        params["pageToken"] = page_token
    if reverse is not None:
        params["reverse"] = "true" if reverse else "false"
    return params


def normalize_base_url(endpoint: str) -> str:
    """Accept ``host:port`` endpoints as well as full URLs."""
    normalized = endpoint.strip().rstrip("/")
    if not normalized:
        raise ValueError("hub endpoint is required")
    if "://" not in normalized:
        normalized = f"https://{normalized}"
    return normalized


class HubHttpClient:
    """`HubClient` backed by the hub HTTP API (``/v1/...``)."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._base_url = normalize_base_url(base_url)
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._session.close()

    def get_signer(self, *, fid: int, signer: bytes) -> HubResult[Any]:
        return self._get("onChainSignersByFid", {"fid": fid, "signer": _hex(signer)})

    def get_signers_by_fid(self, *, fid: int) -> HubResult[Any]:
        return self._get("onChainSignersByFid", {"fid": fid})

    def get_all_signer_messages_by_fid(self, *, fid: int) -> HubResult[Any]:
        return self._get("onChainSignersByFid", {"fid": fid})

    def get_user_data(self, *, fid: int, user_data_type: str) -> HubResult[Any]:
        return self._get("userDataByFid", {"fid": fid, "user_data_type": user_data_type})

    def get_user_data_by_fid(self, *, fid: int) -> HubResult[Any]:
        return self._get("userDataByFid", {"fid": fid})

    def get_all_user_data_messages_by_fid(self, *, fid: int) -> HubResult[Any]:
        return self._get("userDataByFid", {"fid": fid})

    def get_id_registry_event(self, *, fid: int) -> HubResult[Any]:
        return self._get("onChainEventsByFid", {"fid": fid, "event_type": ID_REGISTER_EVENT_TYPE})

    def get_name_registry_event(self, *, name: bytes) -> HubResult[Any]:
        return self._get("userNameProofByName", {"name": name.decode("utf-8")})

    def get_cast(self, *, fid: int, hash: bytes) -> HubResult[Any]:
        return self._get("castById", {"fid": fid, "hash": _hex(hash)})

    def get_casts_by_fid(
        self,
        *,
        fid: int,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]:
        return self._get("castsByFid", {"fid": fid, **_paging(page_size, page_token, reverse)})

    def get_casts_by_mention(
        self,
        *,
        fid: int,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]:
        return self._get("castsByMention", {"fid": fid, **_paging(page_size, page_token, reverse)})

    def get_casts_by_parent(
        self,
        *,
        fid: int,
        hash: bytes,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]:
        return self._get(
            "castsByParent",
            {"fid": fid, "hash": _hex(hash), **_paging(page_size, page_token, reverse)},
        )

    def get_all_cast_messages_by_fid(
        self,
        *,
        fid: int,
        page_size: int | None = None,
        page_token: str | None = None,
        reverse: bool | None = None,
    ) -> HubResult[Any]:
        return self._get("castsByFid", {"fid": fid, **_paging(page_size, page_token, reverse)})

    def get_reaction(
        self,
        *,
        fid: int,
        reaction_type: str,
        target_fid: int,
        target_hash: bytes,
    ) -> HubResult[Any]:
        return self._get(
            "reactionById",
            {
                "fid": fid,
                "reaction_type": reaction_type,
                "target_fid": target_fid,
                "target_hash": _hex(target_hash),
            },
        )

    def get_reactions_by_cast(
        self,
        *,
        reaction_type: str,
        target_fid: int,
        target_hash: bytes,
    ) -> HubResult[Any]:
        return self._get(
            "reactionsByCast",
            {
                "reaction_type": reaction_type,
                "target_fid": target_fid,
                "target_hash": _hex(target_hash),
            },
        )

    def get_reactions_by_fid(self, *, fid: int, reaction_type: str | None = None) -> HubResult[Any]:
        params: dict[str, Any] = {"fid": fid}
        if reaction_type is not None:
            params["reaction_type"] = reaction_type
        return self._get("reactionsByFid", params)

    def get_all_reaction_messages_by_fid(
        self,
        *,
        fid: int,
        reaction_type: str | None = None,
    ) -> HubResult[Any]:
        return self.get_reactions_by_fid(fid=fid, reaction_type=reaction_type)

    def get_verification(self, *, fid: int, address: bytes) -> HubResult[Any]:
        return self._get("verificationsByFid", {"fid": fid, "address": _hex(address)})

    def get_verifications_by_fid(self, *, fid: int) -> HubResult[Any]:
        return self._get("verificationsByFid", {"fid": fid})

    def get_all_verification_messages_by_fid(self, *, fid: int) -> HubResult[Any]:
        return self._get("verificationsByFid", {"fid": fid})

    def _get(self, method: str, params: Mapping[str, Any]) -> HubResult[Any]:
        url = f"{self._base_url}/v1/{method}"
        try:
            response = self._session.get(
                url,
                headers=self._headers(),
                params=dict(params),
                timeout=self._timeout_seconds,
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            logger.warning("Hub request %s failed: %s", method, exc)
            return HubResult.err(
                HubError(err_code="unavailable.network_failure", message=f"Hub unreachable: {exc}")
            )
        except requests.RequestException as exc:
            logger.warning("Hub request %s failed: %s", method, exc)
            return HubResult.err(HubError(err_code="unavailable", message=f"Hub request failed: {exc}"))

        if response.status_code >= 400:
            return HubResult.err(self._error_from_response(response))

        try:
            return HubResult.ok(response.json())
        except ValueError:
            return HubResult.err(
                HubError(err_code="unavailable.decode_failure", message="Hub returned a non-JSON payload")
            )

    @staticmethod
    def _headers() -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": "hub-proxy/0.1",
        }

    @staticmethod
    def _error_from_response(response: requests.Response) -> HubError:
        fallback = HubError(err_code="unavailable", message=f"HTTP {response.status_code}")
        try:
            raw = response.json()
        except ValueError:
            return fallback
        if not isinstance(raw, dict):
            return fallback

        err_code = raw.get("errCode") or fallback.err_code
        message = raw.get("details") or raw.get("presentableError") or raw.get("message") or fallback.message
        return HubError(err_code=str(err_code), message=str(message))


@lru_cache(maxsize=1)
def get_hub_client() -> HubHttpClient:
    """Build the process-wide hub client from settings."""
    settings = get_settings()
    client = HubHttpClient(
        base_url=settings.hub_rpc_url,
        timeout_seconds=settings.http_timeout_seconds,
    )
    logger.info("Connecting to %s...", client.base_url)
    return client
