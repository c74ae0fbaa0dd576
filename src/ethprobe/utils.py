from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

WEI_PER_ETHER = 10**18
WEI_PER_GWEI = 10**9


def hex_to_int(value: Any) -> int:
    """Decode a JSON-RPC quantity (``"0x1a"``) into an int."""
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected hex quantity, got {value!r}")
    if value in ("0x", ""):
        return 0
    return int(value, 16)


def optional_hex_to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return hex_to_int(value)


def format_ether(wei: int) -> str:
    ether = Decimal(wei) / Decimal(WEI_PER_ETHER)
    text = format(ether.normalize(), "f")
    return f"{text} ETH"


def format_gwei(wei: int) -> str:
    gwei = Decimal(wei) / Decimal(WEI_PER_GWEI)
    return f"{format(gwei.normalize(), 'f')} gwei"


def timestamp_to_rfc3339(ts: int) -> str:
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")
