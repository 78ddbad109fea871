"""Farcaster timestamp, hex and byte helpers.

Every helper returns a `HubResult` so route handlers can normalize local conversions
and remote hub calls the same way.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Sequence
import re
import time

from hub_proxy.hub.result import HubResult
from hub_proxy.hub.result import invalid_param

FARCASTER_EPOCH_MS = 1609459200000
MAX_FARCASTER_TIME = 2**32 - 1

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def _now_ms() -> int:
    return int(time.time() * 1000)


def to_farcaster_time(ms_timestamp: float) -> HubResult[int]:
    """Convert a Unix timestamp in milliseconds to Farcaster seconds since epoch."""
    seconds_since_epoch = int((ms_timestamp - FARCASTER_EPOCH_MS) // 1000)
    if seconds_since_epoch < 0:
        return invalid_param("time must be after Farcaster epoch (01/01/2021)")
    if seconds_since_epoch > MAX_FARCASTER_TIME:
        return invalid_param("time too far in future")
    return HubResult.ok(seconds_since_epoch)


def from_farcaster_time(farcaster_timestamp: float) -> HubResult[int]:
    """Convert Farcaster seconds since epoch back to a Unix timestamp in milliseconds."""
    if farcaster_timestamp < 0:
        return invalid_param("time must be positive")
    return HubResult.ok(int(farcaster_timestamp * 1000 + FARCASTER_EPOCH_MS))


def get_farcaster_time(now_ms: Callable[[], int] = _now_ms) -> HubResult[int]:
    """Return the current Farcaster time."""
    return to_farcaster_time(now_ms())


def to_bytes(values: Sequence[int]) -> HubResult[bytes]:
    """Pack a list of integers into bytes, rejecting values outside 0..255."""
    for value in values:
        if not 0 <= value <= 255:
            return invalid_param(f"byte value out of range: {value}")
    return HubResult.ok(bytes(int(value) for value in values))


def bytes_to_hex_string(data: bytes) -> HubResult[str]:
    return HubResult.ok("0x" + data.hex())


def hex_string_to_bytes(hex_string: str) -> HubResult[bytes]:
    """Decode a hex string with an optional ``0x`` prefix."""
    digits = hex_string[2:] if hex_string[:2].lower() == "0x" else hex_string
    if not _HEX_DIGITS.fullmatch(digits):
        return invalid_param(f"invalid hex string: {hex_string}")
    if len(digits) % 2:
        digits = "0" + digits
    return HubResult.ok(bytes.fromhex(digits))


def bytes_to_utf8_string(data: bytes) -> HubResult[str]:
    try:
        return HubResult.ok(data.decode("utf-8"))
    except UnicodeDecodeError:
        return invalid_param("bytes are not valid utf-8")


def utf8_string_to_bytes(text: str) -> HubResult[bytes]:
    # JSON "\ud800" escapes decode to lone surrogates, which have no utf-8 form
    try:
        return HubResult.ok(text.encode("utf-8"))
    except UnicodeEncodeError:
        return invalid_param("string is not valid utf-8")
