"""
ABI Loader - Loads contract ABIs shipped with the package.

Artifacts live in ``ethprobe/chain/abis/<Name>.json`` as
``{"contractName": ..., "abi": [...]}``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

ABI_DIR = Path(__file__).resolve().parent / "abis"


@lru_cache(maxsize=16)
def load_abi(contract_name: str) -> list[dict[str, Any]]:
    """
    Load ABI for a contract.

    Args:
        contract_name: Contract name (e.g., "Counter")

    Raises:
        FileNotFoundError: If no artifact exists for the contract
    """
    abi_path = ABI_DIR / f"{contract_name}.json"
    if not abi_path.exists():
        raise FileNotFoundError(f"ABI not found: {abi_path}")

    with abi_path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    return artifact["abi"]


def find_function(abi: list, function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def counter_abi() -> list[dict[str, Any]]:
    """Load Counter ABI."""
    return load_abi("Counter")
