"""
MCP Server for cppgrep - declaration-aware grep over C++ sources.

This module exposes the grep engine through the Model Context Protocol
using stdio transport, so an assistant can ask for the classes, functions or
variables of a file by name fragment.

Usage:
    cppgrep-mcp  # Run as stdio MCP server

Tools:
    - grep_declarations: Grep C++ files for declarations matching a query
    - list_categories: List the category buckets and the declaration kinds in each
    - list_frontends: List the available front ends and C++ file extensions
"""

import logging
from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from cppgrep.config import get_config
from cppgrep.core.exceptions import ConfigurationError, FrontEndError
from cppgrep.core.models import CategoryGroup, FilterSpec, GrepRequest, GrepResult, QuerySpec
from cppgrep.grep.driver import grep_all
from cppgrep.mcp.state import get_state
from cppgrep.parsers import FRONTEND_NAMES
from cppgrep.parsers.language_configs import EXTENSION_MAP

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP(
    name="cppgrep",
    instructions="Declaration-aware grep over C++ source files"
)


@mcp.tool(
    name="grep_declarations",
    description=(
        "Find C++ declarations (classes, structs, functions, variables, fields, parameters) "
        "whose name contains a query string. Results are grouped per file in source order."
    )
)
def grep_declarations(
    files: Annotated[List[str], Field(description="C++ source files to search, in order")],
    query: Annotated[
        str,
        Field(description="Substring the declared name must contain (empty matches everything)")
    ] = "",
    ignore_case: Annotated[
        bool,
        Field(description="Compare ignoring ASCII letter case")
    ] = False,
    categories: Annotated[
        Optional[List[str]],
        Field(description="Buckets to include: class, struct, function, variable (default: all)")
    ] = None,
    frontend: Annotated[
        Optional[str],
        Field(description="Front end: 'treesitter' or 'clang' (default: configured)")
    ] = None,
) -> Dict[str, Any]:
    """Grep files for declarations."""
    state = get_state()

    try:
        filter_spec = FilterSpec.from_names(categories)
    except ValueError as e:
        raise ToolError(str(e))

    try:
        engine = state.frontend(frontend or get_config().frontend)
    except (ConfigurationError, FrontEndError) as e:
        raise ToolError(str(e))

    request = GrepRequest(
        files=tuple(files),
        filter_spec=filter_spec,
        query_spec=QuerySpec(substring=query, ignore_case=ignore_case),
    )
    results: List[GrepResult] = []
    missing: List[str] = []
    grep_all(request, results.append, frontend=engine, on_missing=missing.append)
    state.runs += 1

    return {
        "results": [r.to_dict() for r in results],
        "missing": missing,
        "total_entries": sum(r.entry_count for r in results),
    }


@mcp.tool(
    name="list_categories",
    description="List the category buckets accepted by grep_declarations and the declaration kinds in each."
)
def list_categories() -> Dict[str, Any]:
    """List buckets and their declaration kinds."""
    return {
        "categories": {
            group.value: [kind.value for kind in group.kinds]
            for group in CategoryGroup
        }
    }


@mcp.tool(
    name="list_frontends",
    description="List the available C++ front ends and the file extensions treated as C++."
)
def list_frontends() -> Dict[str, Any]:
    """List front ends and C++ extensions."""
    return {
        "frontends": list(FRONTEND_NAMES),
        "default": get_config().frontend,
        "extensions": sorted(EXTENSION_MAP.keys()),
    }


def main():  # pragma: no cover
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
