"""
OpenSVM MCP server package.

This package exposes the OpenSVM Solana blockchain API as LLM-friendly tools
over a newline-delimited JSON-RPC protocol. See DESIGN.md for full details.
"""

__all__ = ["config"]
