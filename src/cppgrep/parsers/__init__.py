"""
C++ front ends for cppgrep.

This module provides the front ends that turn C++ source files into cursor
trees: tree-sitter (default, no preprocessing) and libclang (full semantic
analysis). The libclang front end is imported on demand because it loads a
native library.
"""

from typing import Optional

from cppgrep.config import get_config
from cppgrep.core.exceptions import ConfigurationError
from cppgrep.core.interfaces import IFrontEnd

from .treesitter_frontend import TreeSitterFrontEnd, TreeSitterCursor
from .language_configs import (
    is_cpp_file,
    get_supported_extensions,
    EXTENSION_MAP,
    CPP_NODE_TYPES,
)

FRONTEND_NAMES = ("treesitter", "clang")


def get_frontend(name: Optional[str] = None) -> IFrontEnd:
    """
    Create a front end by name.

    Args:
        name: "treesitter" or "clang"; the configured front end if None

    Returns:
        A fresh front end instance

    Raises:
        ConfigurationError: If the name is unknown
        FrontEndError: If the front end cannot be initialized
    """
    config = get_config()
    name = (name or config.frontend).lower()

    if name == "treesitter":
        return TreeSitterFrontEnd()
    if name == "clang":
        from .clang_frontend import ClangFrontEnd

        return ClangFrontEnd(libclang_path=config.libclang_path)
    raise ConfigurationError(
        f"Unknown front end: {name}. Supported front ends: {', '.join(FRONTEND_NAMES)}"
    )


__all__ = [
    "TreeSitterFrontEnd",
    "TreeSitterCursor",
    "get_frontend",
    "FRONTEND_NAMES",
    "is_cpp_file",
    "get_supported_extensions",
    "EXTENSION_MAP",
    "CPP_NODE_TYPES",
]
