"""
Chain - On-chain interaction layer for ethprobe.

JSON-RPC client, ABI loading, transaction signing and the Counter
binding.  Uses httpx + eth-account + eth-abi rather than web3.py.
"""
