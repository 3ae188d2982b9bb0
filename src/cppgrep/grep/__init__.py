"""
Declaration grep engine.

Classifier, category filter, query matcher, tree walker and the multi-file
driver that ties them together.
"""

from .classifier import classify, declaration_kind_of, DECLARATION_KINDS
from .filters import accepts
from .matcher import matches, has_substring
from .walker import walk, collect, make_visitor
from .driver import grep_file, grep_all, grep_files

__all__ = [
    "classify",
    "declaration_kind_of",
    "DECLARATION_KINDS",
    "accepts",
    "matches",
    "has_substring",
    "walk",
    "collect",
    "make_visitor",
    "grep_file",
    "grep_all",
    "grep_files",
]
