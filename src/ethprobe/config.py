"""
Runtime configuration for ethprobe.

Defaults target the Sepolia testnet.  Each value can be overridden from the
process environment or from ``~/.ethprobe/.env`` (process env wins).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

ETHPROBE_DIR = Path.home() / ".ethprobe"
ETHPROBE_ENV = ETHPROBE_DIR / ".env"

# ---- Sepolia defaults ----
DEFAULT_RPC_URL = "https://1rpc.io/sepolia"
DEFAULT_BLOCK_NUMBER = 9899209
DEFAULT_RECIPIENT = "0x4592d8f8d7b001e72cb26a73e4fa1806a51ac79d"
DEFAULT_VALUE_WEI = 10_000_000_000_000_000  # 0.01 ETH
DEFAULT_GAS_LIMIT = 21_000
DEFAULT_COUNTER_ADDRESS = "0xBc78860D20775E4cbbA1D6Ad5e434094bF9f72ef"
DEFAULT_RECEIPT_TIMEOUT = 180
DEFAULT_POLL_INTERVAL = 2.0


def load_env_file(env_path: Optional[Path] = None) -> None:
    """Load ``~/.ethprobe/.env`` into ``os.environ`` if it exists."""
    env_path = env_path or ETHPROBE_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip(), 0)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class ProbeConfig:
    rpc_url: str = DEFAULT_RPC_URL
    block_number: int = DEFAULT_BLOCK_NUMBER
    recipient: str = DEFAULT_RECIPIENT
    value_wei: int = DEFAULT_VALUE_WEI
    gas_limit: int = DEFAULT_GAS_LIMIT
    counter_address: str = DEFAULT_COUNTER_ADDRESS
    private_key: str = ""
    receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "ProbeConfig":
        load_env_file(env_path)
        return cls(
            rpc_url=os.environ.get("ETHPROBE_RPC_URL") or DEFAULT_RPC_URL,
            block_number=_env_int("ETHPROBE_BLOCK_NUMBER", DEFAULT_BLOCK_NUMBER),
            recipient=os.environ.get("ETHPROBE_RECIPIENT") or DEFAULT_RECIPIENT,
            value_wei=_env_int("ETHPROBE_VALUE_WEI", DEFAULT_VALUE_WEI),
            gas_limit=_env_int("ETHPROBE_GAS_LIMIT", DEFAULT_GAS_LIMIT),
            counter_address=os.environ.get("COUNTER_ADDRESS") or DEFAULT_COUNTER_ADDRESS,
            private_key=os.environ.get("PRIVATE_KEY", ""),
            receipt_timeout=_env_int("ETHPROBE_RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT),
        )
