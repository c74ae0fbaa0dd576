"""
Error taxonomy for ethprobe.

Every failure a routine can report derives from ``ProbeError`` and carries
the process exit code the CLI should use for it.
"""

from __future__ import annotations

from typing import Any, Optional


class ProbeError(RuntimeError):
    exit_code: int = 1


class ConfigError(ProbeError):
    exit_code = 2


class RpcError(ProbeError):
    """JSON-RPC error object returned by the node."""

    exit_code = 3

    def __init__(
        self,
        method: str,
        message: str,
        *,
        code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(f"RPC error calling {method}: {message}")
        self.method = method
        self.code = code
        self.data = data


class RpcTransportError(ProbeError):
    """HTTP or connection failure talking to the RPC endpoint."""

    exit_code = 3


class BlockNotFoundError(ProbeError):
    exit_code = 4


class KeyMissingError(ProbeError):
    exit_code = 5


class InvalidKeyError(ProbeError):
    exit_code = 5


class SigningError(ProbeError):
    exit_code = 6


class BroadcastMismatchError(SigningError):
    """The node accepted a transaction other than the one we signed."""


class ReceiptTimeoutError(ProbeError):
    exit_code = 7


class ContractError(ProbeError):
    """The target address does not behave like the expected contract."""

    exit_code = 8
