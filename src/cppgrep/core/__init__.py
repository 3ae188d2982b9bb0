"""
Core data models and structures for cppgrep.

This module provides the data structures and front-end contracts used
throughout the declaration grep engine.
"""

from .models import (
    CursorKind,
    DeclarationKind,
    CategoryGroup,
    SourceLocation,
    DeclarationEntry,
    FilterSpec,
    QuerySpec,
    GrepResult,
    GrepRequest,
)
from .interfaces import ChildVisit, ICursor, IFrontEnd

__all__ = [
    "CursorKind",
    "DeclarationKind",
    "CategoryGroup",
    "SourceLocation",
    "DeclarationEntry",
    "FilterSpec",
    "QuerySpec",
    "GrepResult",
    "GrepRequest",
    "ChildVisit",
    "ICursor",
    "IFrontEnd",
]
