"""
Configuration management for cppgrep.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_FRONTEND = "treesitter"
DEFAULT_CLANG_ARGS = "-std=c++17"


def _split_args(value: str) -> List[str]:
    return [arg for arg in value.split() if arg]


@dataclass
class GrepConfig:
    """Runtime configuration."""

    # Which C++ front end parses the files
    frontend: str = field(default_factory=lambda: os.getenv("CPPGREP_FRONTEND", DEFAULT_FRONTEND))

    # Arguments handed to the front end's parse call (libclang honors them)
    clang_args: List[str] = field(
        default_factory=lambda: _split_args(os.getenv("CPPGREP_CLANG_ARGS", DEFAULT_CLANG_ARGS))
    )

    # Explicit libclang shared library; None lets clang.cindex find its own
    libclang_path: Optional[str] = field(default_factory=lambda: os.getenv("CPPGREP_LIBCLANG_PATH") or None)


# Global config instance
_config: Optional[GrepConfig] = None


def get_config() -> GrepConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = GrepConfig()
    return _config


def set_config(config: GrepConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the global configuration so the next get_config() rereads the environment."""
    global _config
    _config = None
