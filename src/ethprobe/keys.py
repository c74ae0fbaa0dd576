"""
ECDSA / secp256k1 key handling for ethprobe.

Two kinds of keys are used:
- a throwaway key generated per transfer run, kept in memory only
- the contract-call key, read from ``PRIVATE_KEY`` (env or ~/.ethprobe/.env)

Keys are never printed or written to disk by this module.
"""

from __future__ import annotations

import os
import secrets
from pathlib import Path
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys.exceptions import ValidationError as KeyValidationError

from .config import ETHPROBE_ENV, load_env_file
from .errors import InvalidKeyError, KeyMissingError


def generate_eoa() -> tuple[str, str]:
    """
    Generate a new ECDSA/secp256k1 keypair (EOA).

    Returns:
        Tuple of (private_key_hex, address)
    """
    private_key = "0x" + secrets.token_hex(32)
    account = Account.from_key(private_key)
    return private_key, account.address


def normalize_private_key(private_key: str) -> str:
    """Return the key 0x-prefixed, or raise InvalidKeyError if malformed."""
    key = private_key.strip()
    if key.startswith(("0x", "0X")):
        key = key[2:]
    if len(key) != 64:
        raise InvalidKeyError("Private key must be 32 bytes (64 hex characters)")
    try:
        bytes.fromhex(key)
    except ValueError as exc:
        raise InvalidKeyError("Private key is not valid hex") from exc
    return "0x" + key.lower()


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load the configured private key from the environment.

    Raises:
        KeyMissingError: If PRIVATE_KEY is unset or empty
        InvalidKeyError: If PRIVATE_KEY is not a 32-byte hex string
    """
    load_env_file(env_path)
    private_key = os.environ.get("PRIVATE_KEY", "")
    if not private_key.strip():
        raise KeyMissingError(
            f"PRIVATE_KEY not set. Export it or add it to {env_path or ETHPROBE_ENV}"
        )
    return normalize_private_key(private_key)


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: hex private key. If None, loads PRIVATE_KEY.
    """
    if private_key is None:
        private_key = load_private_key()
    key = normalize_private_key(private_key)
    try:
        return Account.from_key(key)
    except (ValueError, KeyValidationError) as exc:
        raise InvalidKeyError("Private key is outside the secp256k1 range") from exc


def get_address(private_key: Optional[str] = None) -> str:
    """Checksummed address for a private key."""
    return get_account(private_key).address
