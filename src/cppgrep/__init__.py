"""
cppgrep - declaration-aware grep for C++ source files.

Searches C++ files for declarations (classes, structs, templates, functions,
conversion operators, variables, fields, parameters) whose name contains a
query, and reports each match's kind, line, column and identifier.

Usage:
    # Command line
    cppgrep --class -q person people.cpp

    # As an MCP server
    cppgrep-mcp

    # Programmatic usage
    from cppgrep import GrepRequest, QuerySpec, grep_files
    results = grep_files(GrepRequest(files=("people.cpp",), query_spec=QuerySpec("person")))
"""

__version__ = "0.1.0"
__author__ = "cppgrep Contributors"


# Lazy imports to avoid loading the parser libraries at import time
def __getattr__(name: str):
    """Lazy import heavy modules only when accessed."""
    if name in ("grep_files", "grep_all", "grep_file"):
        from cppgrep.grep import driver

        return getattr(driver, name)
    elif name == "get_frontend":
        from cppgrep.parsers import get_frontend

        return get_frontend
    elif name == "TreeSitterFrontEnd":
        from cppgrep.parsers.treesitter_frontend import TreeSitterFrontEnd

        return TreeSitterFrontEnd
    elif name in (
        "DeclarationEntry",
        "DeclarationKind",
        "CategoryGroup",
        "FilterSpec",
        "QuerySpec",
        "GrepRequest",
        "GrepResult",
    ):
        from cppgrep.core import models

        return getattr(models, name)
    elif name == "IFrontEnd":
        from cppgrep.core.interfaces import IFrontEnd

        return IFrontEnd
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "__author__",
    "grep_files",
    "grep_all",
    "grep_file",
    "get_frontend",
    "TreeSitterFrontEnd",
    "DeclarationEntry",
    "DeclarationKind",
    "CategoryGroup",
    "FilterSpec",
    "QuerySpec",
    "GrepRequest",
    "GrepResult",
    "IFrontEnd",
]
