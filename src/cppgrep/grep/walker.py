"""
Tree walking for one translation unit.

The walker decides, per node, whether the node is eligible (main file, not a
system header) and whether it is a match. Iteration itself belongs to the
front end's ``visit_children``; the walker only supplies the per-node
decision and forwards matches to a callback.
"""

import logging
from typing import Callable, List

from cppgrep.core.interfaces import ChildVisit, ICursor, IFrontEnd
from cppgrep.core.models import DeclarationEntry, FilterSpec, QuerySpec
from cppgrep.grep.classifier import classify
from cppgrep.grep.filters import accepts
from cppgrep.grep.matcher import matches

logger = logging.getLogger(__name__)


def make_visitor(
    filter_spec: FilterSpec,
    query_spec: QuerySpec,
    on_entry: Callable[[DeclarationEntry], None],
) -> Callable[[ICursor], ChildVisit]:
    """
    Build the per-node decision function for one walk.

    Nodes outside the main file or inside system headers are skipped along
    with their whole subtree. Every other node is classified, filtered and
    matched (stopping at the first failure) and the walk always descends
    into its children, whether or not it matched.
    """
    def visit(cursor: ICursor) -> ChildVisit:
        if cursor.is_in_system_header() or not cursor.is_in_main_file():
            return ChildVisit.CONTINUE

        entry = classify(cursor)
        if entry is not None and accepts(filter_spec, entry) and matches(query_spec, entry.identifier):
            on_entry(entry)
        return ChildVisit.RECURSE

    return visit


def walk(
    frontend: IFrontEnd,
    root: ICursor,
    filter_spec: FilterSpec,
    query_spec: QuerySpec,
    on_entry: Callable[[DeclarationEntry], None],
) -> None:
    """Walk the children of ``root`` in pre-order, passing each match to ``on_entry``."""
    frontend.visit_children(root, make_visitor(filter_spec, query_spec, on_entry))


def collect(
    frontend: IFrontEnd,
    root: ICursor,
    filter_spec: FilterSpec,
    query_spec: QuerySpec,
) -> List[DeclarationEntry]:
    """Walk ``root`` and return the matches in traversal order."""
    entries: List[DeclarationEntry] = []
    walk(frontend, root, filter_spec, query_spec, entries.append)
    return entries
