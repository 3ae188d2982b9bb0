"""
MCP Server module for cppgrep.

This module provides the Model Context Protocol server implementation
for declaration-aware grep over C++ sources.

Exports:
    - mcp: FastMCP server instance
    - main: Entry point for running the MCP server
    - get_state: Get MCP session state
    - reset_state: Reset MCP session state (for testing)
    - MCPSessionState: Session state dataclass
"""

from cppgrep.mcp.server import mcp, main
from cppgrep.mcp.state import get_state, reset_state, MCPSessionState

__all__ = [
    "mcp",
    "main",
    "get_state",
    "reset_state",
    "MCPSessionState",
]
