"""Typed models for Ethereum JSON-RPC data: hashes, integers, blocks, logs, transactions, traces."""

__version__ = "0.1.0"