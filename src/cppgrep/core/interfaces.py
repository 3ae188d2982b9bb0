"""
Abstract interfaces for cppgrep components.

This module defines the contract between the grep engine and the C++ front
ends that supply syntax trees. The engine never talks to tree-sitter or
libclang directly; it only sees cursors and a visitation primitive.

When to implement each interface:
    - ICursor: When wrapping the node handle of a new front end
    - IFrontEnd: When adding a new way to parse C++ (a different parser
      library, a cached AST store, an in-memory fake for tests)
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence

from .models import CursorKind, SourceLocation

logger = logging.getLogger(__name__)


class ChildVisit(Enum):
    """What a visitor wants done after seeing a node."""
    CONTINUE = "continue"  # skip this node's children, go on with its siblings
    RECURSE = "recurse"    # visit this node's children, then its siblings


class ICursor(ABC):
    """Abstract handle to one node of a front end's tree.

    A cursor is only guaranteed to be valid while the visitor that received
    it is running. Anything that must outlive the callback has to be copied
    out (see ``DeclarationEntry``).
    """

    @property
    @abstractmethod
    def kind(self) -> CursorKind:
        """The node's kind, normalized to CursorKind."""
        pass  # pragma: no cover

    @property
    @abstractmethod
    def spelling(self) -> str:
        """The declared identifier, or an empty string."""
        pass  # pragma: no cover

    @property
    @abstractmethod
    def location(self) -> SourceLocation:
        """Where the node's name is spelled (1-based line and column)."""
        pass  # pragma: no cover

    @abstractmethod
    def is_in_system_header(self) -> bool:
        """True if the node comes from a toolchain or standard library header."""
        pass  # pragma: no cover

    @abstractmethod
    def is_in_main_file(self) -> bool:
        """True if the node belongs to the file that was asked to be parsed."""
        pass  # pragma: no cover


class IFrontEnd(ABC):
    """Abstract interface for C++ front ends.

    A front end turns a source file into a tree of cursors. The lifecycle
    for one file is create_session, parse, root_cursor, visitation, then
    dispose_tree and dispose_session; ``open_unit`` wraps it so that nothing
    from one file survives into the next.

    Implementation considerations:
        - parse() should return a partial tree for malformed input and
          ``None`` only when nothing could be produced at all
        - children_of() must yield children in source order
        - cursors should be cheap; the walker creates one per node
    """

    #: Short name used in configuration and on the command line
    name: str = ""

    @abstractmethod
    def create_session(self) -> Any:
        """Create the per-file parsing context (an index, a parser object)."""
        pass  # pragma: no cover

    @abstractmethod
    def parse(self, session: Any, filepath: str, args: Sequence[str] = ()) -> Optional[Any]:
        """Parse a file into a tree, or return None when no tree is available.

        Args:
            session: Object returned by create_session()
            filepath: Path of the file to parse
            args: Extra front-end arguments (language flags)
        """
        pass  # pragma: no cover

    @abstractmethod
    def root_cursor(self, tree: Any) -> ICursor:
        """Return the translation-unit cursor of a parsed tree."""
        pass  # pragma: no cover

    @abstractmethod
    def children_of(self, cursor: ICursor) -> Iterable[ICursor]:
        """Return the direct children of a cursor in source order."""
        pass  # pragma: no cover

    def dispose_tree(self, tree: Any) -> None:
        """Release native resources held by a tree."""

    def dispose_session(self, session: Any) -> None:
        """Release native resources held by a session."""

    def visit_children(self, cursor: ICursor, visitor: Callable[[ICursor], ChildVisit]) -> None:
        """Visit the descendants of ``cursor`` in pre-order.

        The visitor is called once per node. Returning RECURSE descends into
        that node's children before moving on to its next sibling; returning
        CONTINUE skips the subtree. The cursor itself is not passed to the
        visitor.
        """
        frontier: List[Iterator[ICursor]] = [iter(self.children_of(cursor))]
        while frontier:
            child = next(frontier[-1], None)
            if child is None:
                frontier.pop()
                continue
            if visitor(child) is ChildVisit.RECURSE:
                frontier.append(iter(self.children_of(child)))

    @contextmanager
    def open_unit(self, filepath: str, args: Sequence[str] = ()) -> Iterator[Optional[ICursor]]:
        """Parse ``filepath`` and yield its root cursor, disposing everything on exit.

        Yields None when the front end produced no tree.
        """
        session = self.create_session()
        try:
            tree = self.parse(session, filepath, args)
            if tree is None:
                logger.warning(f"No syntax tree produced for {filepath}")
                yield None
                return
            try:
                yield self.root_cursor(tree)
            finally:
                self.dispose_tree(tree)
        finally:
            self.dispose_session(session)
