"""
TreeSitterFrontEnd - C++ front end built on tree-sitter.

This module implements the IFrontEnd interface on top of the tree-sitter-cpp
grammar. tree-sitter gives a concrete syntax tree without preprocessing or
semantic analysis, so the front end reconstructs libclang-style declaration
cursors from the shape of the tree:

    - class/struct specifiers become class, struct, class template or partial
      specialization cursors depending on their template context
    - each declarator of a declaration becomes its own variable, field or
      function cursor, so `int a, b;` yields two variables
    - function definitions inside class bodies are methods and are not
      reported as free functions

Because nothing is preprocessed, included headers are never expanded: every
node is in the main file and none is in a system header.

Performance:
    - One parser per session, no caching across files
    - Cursors are created lazily while the tree is visited

Usage:
    >>> frontend = TreeSitterFrontEnd()
    >>> with frontend.open_unit("people.cpp") as root:
    ...     for child in frontend.children_of(root):
    ...         print(child.kind, child.spelling)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence, Tuple

import tree_sitter_cpp as tscpp
from tree_sitter import Language, Node, Parser, Tree

from cppgrep.core.exceptions import FrontEndError
from cppgrep.core.interfaces import ICursor, IFrontEnd
from cppgrep.core.models import CursorKind, SourceLocation
from cppgrep.parsers.language_configs import CPP_NODE_TYPES

# Configure logging
logger = logging.getLogger(__name__)

RECORD_TYPES = CPP_NODE_TYPES['record_types']
DECLARATION_SCOPES = CPP_NODE_TYPES['declaration_scopes']
DECLARATOR_OWNERS = CPP_NODE_TYPES['declarator_owners']
PARAMETER_TYPES = CPP_NODE_TYPES['parameter_types']
NAME_TYPES = CPP_NODE_TYPES['name_types']
SCOPED_NAME_TYPES = CPP_NODE_TYPES['scoped_name_types']
NAMESPACE_TYPES = CPP_NODE_TYPES['namespace_types']
TEMPLATE_TYPES = CPP_NODE_TYPES['template_types']
FUNCTION_TYPES = CPP_NODE_TYPES['function_types']

# Named children of a declarator that are never the inner declarator
_NON_DECLARATOR_CHILDREN = frozenset({
    'parameter_list',
    'type_qualifier',
    'attribute_declaration',
    'attribute_specifier',
    'ms_pointer_modifier',
    'ms_based_modifier',
    'virtual_specifier',
    'noexcept',
    'throw_specifier',
    'trailing_return_type',
    'ref_qualifier',
})


@dataclass
class ParsedUnit:
    """A parsed file: the tree plus what is needed to read text out of it."""
    filepath: str
    content: bytes
    tree: Tree


class TreeSitterCursor(ICursor):
    """
    Cursor over a tree-sitter node.

    ``node`` is the node the cursor's children are taken from; ``name_node``
    is the node whose text and position are reported (the declared name).
    """

    __slots__ = ('unit', 'node', '_kind', 'name_node')

    def __init__(self, unit: ParsedUnit, node: Node, kind: CursorKind, name_node: Optional[Node] = None):
        self.unit = unit
        self.node = node
        self._kind = kind
        self.name_node = name_node

    @property
    def kind(self) -> CursorKind:
        return self._kind

    @property
    def spelling(self) -> str:
        name = self.name_node
        if name is None:
            return ""
        if name.type == 'operator_cast':
            target = name.child_by_field_name('type')
            return "operator " + (_node_text(target, self.unit.content) if target is not None else "")
        return _node_text(name, self.unit.content)

    @property
    def location(self) -> SourceLocation:
        anchor = self.name_node if self.name_node is not None else self.node
        row, column = anchor.start_point[0], anchor.start_point[1]
        return SourceLocation(file=self.unit.filepath, line=row + 1, column=column + 1)

    def is_in_system_header(self) -> bool:
        return False

    def is_in_main_file(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"TreeSitterCursor({self._kind.value}, {self.spelling!r}, {self.node.type})"


def _node_text(node: Node, content: bytes) -> str:
    """
    Extract text content from a node.

    Args:
        node: Tree-sitter node
        content: File content as bytes

    Returns:
        Node text as string
    """
    return content[node.start_byte:node.end_byte].decode('utf-8', errors='ignore')


class TreeSitterFrontEnd(IFrontEnd):
    """
    C++ front end using tree-sitter-cpp.

    Thread Safety:
        Sessions are independent parsers, so separate files may be parsed
        from separate threads. A single session is NOT thread-safe.
    """

    name = "treesitter"

    def __init__(self):
        """Load the C++ grammar once for all sessions."""
        try:
            self._language = Language(tscpp.language())
        except Exception as e:  # pragma: no cover
            raise FrontEndError(self.name, f"cannot load tree-sitter-cpp grammar: {e}") from e
        logger.debug("TreeSitterFrontEnd initialized")

    # =========================================================================
    # IFrontEnd
    # =========================================================================

    def create_session(self) -> Parser:
        return Parser(self._language)

    def parse(self, session: Parser, filepath: str, args: Sequence[str] = ()) -> Optional[ParsedUnit]:
        """
        Parse a C++ file.

        ``args`` is accepted for interface compatibility; tree-sitter does not
        preprocess, so compiler flags have no effect.

        Returns:
            ParsedUnit, or None if the file could not be read
        """
        try:
            content = Path(filepath).read_bytes()
        except OSError as e:
            logger.warning(f"Error reading file: {e}")
            return None

        tree = session.parse(content)
        if tree.root_node.has_error:
            logger.debug(f"Syntax errors in {filepath}; grepping the partial tree")
        return ParsedUnit(filepath=str(filepath), content=content, tree=tree)

    def root_cursor(self, tree: ParsedUnit) -> TreeSitterCursor:
        return TreeSitterCursor(tree, tree.tree.root_node, CursorKind.TRANSLATION_UNIT)

    def children_of(self, cursor: TreeSitterCursor) -> Iterator[TreeSitterCursor]:
        unit = cursor.unit
        for child in cursor.node.named_children:
            if child.type in DECLARATOR_OWNERS:
                # The declaration itself is not a cursor; its type and each
                # of its declarators are, in source order.
                yield from self._owner_children(unit, child)
            else:
                yield self._cursor_for(unit, child)

    # =========================================================================
    # Cursor Construction
    # =========================================================================

    def _owner_children(self, unit: ParsedUnit, owner: Node) -> Iterator[TreeSitterCursor]:
        declarators = {
            (d.start_byte, d.end_byte) for d in owner.children_by_field_name('declarator')
        }
        for child in owner.named_children:
            if (child.start_byte, child.end_byte) in declarators:
                yield self._declarator_cursor(unit, owner, child)
            else:
                yield self._cursor_for(unit, child)

    def _cursor_for(self, unit: ParsedUnit, node: Node) -> TreeSitterCursor:
        node_type = node.type

        if node_type == 'translation_unit':
            kind, name = CursorKind.TRANSLATION_UNIT, None
        elif node_type in NAMESPACE_TYPES:
            kind, name = CursorKind.NAMESPACE, node.child_by_field_name('name')
        elif node_type in RECORD_TYPES:
            kind, name = self._record_kind(node)
        elif node_type in FUNCTION_TYPES:
            kind, name = self._function_kind(node, node.child_by_field_name('declarator'))
        elif node_type in PARAMETER_TYPES:
            kind, name = self._parameter_kind(node)
        else:
            kind, name = CursorKind.UNEXPOSED, None

        return TreeSitterCursor(unit, node, kind, name)

    def _declarator_cursor(self, unit: ParsedUnit, owner: Node, declarator: Node) -> TreeSitterCursor:
        if self._is_function_declarator(declarator):
            kind, name = self._function_kind(owner, declarator)
        else:
            name = _leaf_name(_declared_name(declarator))
            if owner.type == 'field_declaration' and not self._is_static(owner, unit.content):
                kind = CursorKind.FIELD_DECL
            else:
                kind = CursorKind.VAR_DECL
        return TreeSitterCursor(unit, declarator, kind, name)

    # =========================================================================
    # Kind Resolution
    # =========================================================================

    def _record_kind(self, node: Node) -> Tuple[CursorKind, Optional[Node]]:
        """
        Classify a class_specifier or struct_specifier.

        A record without a body is only a declaration when it stands alone
        (a forward declaration); otherwise it is a type reference such as
        the `struct S` in `struct S s;`.
        """
        name = node.child_by_field_name('name')
        leaf = _leaf_name(name)
        is_struct = node.type == 'struct_specifier'

        if node.child_by_field_name('body') is None and not self._is_forward_declaration(node):
            return CursorKind.UNEXPOSED, leaf

        parent = node.parent
        if parent is not None and parent.type in TEMPLATE_TYPES:
            if name is not None and _is_specialization_name(name):
                params = parent.child_by_field_name('parameters')
                if params is not None and params.named_child_count > 0:
                    return CursorKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION, leaf
                # template<> full specialization: an ordinary record
            elif is_struct:
                return CursorKind.STRUCT_DECL, leaf
            else:
                return CursorKind.CLASS_TEMPLATE, leaf

        return (CursorKind.STRUCT_DECL if is_struct else CursorKind.CLASS_DECL), leaf

    def _is_forward_declaration(self, node: Node) -> bool:
        parent = node.parent
        if parent is None:
            return False
        if parent.type in DECLARATION_SCOPES:
            return True
        return parent.type in DECLARATOR_OWNERS and parent.child_by_field_name('declarator') is None

    def _function_kind(self, owner: Node, declarator: Optional[Node]) -> Tuple[CursorKind, Optional[Node]]:
        """
        Classify a function definition or a function declarator of a declaration.

        Args:
            owner: The function_definition, declaration or field_declaration
            declarator: The owner's declarator
        """
        name = _declared_name(declarator)
        leaf = _leaf_name(name)

        if leaf is not None and leaf.type == 'operator_cast':
            return CursorKind.CONVERSION_FUNCTION, leaf
        if owner.parent is not None and owner.parent.type in TEMPLATE_TYPES:
            return CursorKind.FUNCTION_TEMPLATE, leaf
        if leaf is not None and leaf.type == 'destructor_name':
            return CursorKind.DESTRUCTOR, leaf
        # Out-of-class member definitions carry a qualified name
        if _in_class_scope(owner) or (name is not None and name.type == 'qualified_identifier'):
            return CursorKind.CXX_METHOD, leaf
        return CursorKind.FUNCTION_DECL, leaf

    def _parameter_kind(self, node: Node) -> Tuple[CursorKind, Optional[Node]]:
        declarator = node.child_by_field_name('declarator')
        name = _leaf_name(_declared_name(declarator))

        parent = node.parent
        if parent is not None and parent.type == 'template_parameter_list':
            return CursorKind.TEMPLATE_PARAMETER, name
        owner = parent.parent if parent is not None else None
        if owner is not None and owner.type == 'catch_clause':
            return CursorKind.VAR_DECL, name
        return CursorKind.PARM_DECL, name

    def _is_function_declarator(self, declarator: Node) -> bool:
        """True if the declarator declares a function rather than an object.

        `int (*fp)(int)` is an object: its function_declarator wraps a
        parenthesized pointer.
        """
        node: Optional[Node] = declarator
        while node is not None and node.type not in NAME_TYPES:
            if node.type == 'function_declarator':
                inner = node.child_by_field_name('declarator')
                return inner is None or inner.type != 'parenthesized_declarator'
            node = _inner_declarator(node)
        leaf = _leaf_name(node)
        return leaf is not None and leaf.type == 'operator_cast'

    def _is_static(self, owner: Node, content: bytes) -> bool:
        return any(
            child.type == 'storage_class_specifier' and _node_text(child, content) == 'static'
            for child in owner.children
        )


# =============================================================================
# Tree Helpers
# =============================================================================


def _inner_declarator(node: Node) -> Optional[Node]:
    inner = node.child_by_field_name('declarator')
    if inner is not None:
        return inner
    # reference_declarator, parenthesized_declarator and friends have no field
    for child in node.named_children:
        if child.type not in _NON_DECLARATOR_CHILDREN:
            return child
    return None


def _declared_name(declarator: Optional[Node]) -> Optional[Node]:
    """Follow a declarator chain down to the node spelling the declared name."""
    node = declarator
    while node is not None and node.type not in NAME_TYPES:
        node = _inner_declarator(node)
    return node


def _leaf_name(name: Optional[Node]) -> Optional[Node]:
    """Strip scopes and template arguments: `a::b<int>` gives `b`."""
    while name is not None and name.type in SCOPED_NAME_TYPES:
        name = name.child_by_field_name('name')
    return name


def _is_specialization_name(name: Node) -> bool:
    while name is not None and name.type == 'qualified_identifier':
        name = name.child_by_field_name('name')
    return name is not None and name.type == 'template_type'


def _in_class_scope(owner: Node) -> bool:
    parent = owner.parent
    while parent is not None and (parent.type in TEMPLATE_TYPES or parent.type.startswith('preproc_')):
        parent = parent.parent
    return parent is not None and parent.type == 'field_declaration_list'
