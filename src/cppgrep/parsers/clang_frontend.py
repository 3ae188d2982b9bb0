"""
ClangFrontEnd - C++ front end using libclang.

This module implements the IFrontEnd interface with the libclang Python
bindings (``clang.cindex``, shipped by the ``libclang`` distribution).
libclang preprocesses and semantically analyzes the file, so included
headers are part of the tree; the system-header and main-file predicates
come straight from libclang's source locations.

Each file gets its own index and translation unit, both dropped as soon as
the file has been grepped.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from clang.cindex import Config, Cursor, Index, LibclangError, TranslationUnit, TranslationUnitLoadError, conf
from clang.cindex import CursorKind as ClangCursorKind

from cppgrep.core.exceptions import FrontEndError
from cppgrep.core.interfaces import ICursor, IFrontEnd
from cppgrep.core.models import CursorKind, SourceLocation

logger = logging.getLogger(__name__)

CURSOR_KINDS: Dict[ClangCursorKind, CursorKind] = {
    ClangCursorKind.CLASS_DECL: CursorKind.CLASS_DECL,
    ClangCursorKind.CLASS_TEMPLATE: CursorKind.CLASS_TEMPLATE,
    ClangCursorKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION: CursorKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,
    ClangCursorKind.STRUCT_DECL: CursorKind.STRUCT_DECL,
    ClangCursorKind.FUNCTION_DECL: CursorKind.FUNCTION_DECL,
    ClangCursorKind.FUNCTION_TEMPLATE: CursorKind.FUNCTION_TEMPLATE,
    ClangCursorKind.CONVERSION_FUNCTION: CursorKind.CONVERSION_FUNCTION,
    ClangCursorKind.VAR_DECL: CursorKind.VAR_DECL,
    ClangCursorKind.FIELD_DECL: CursorKind.FIELD_DECL,
    ClangCursorKind.PARM_DECL: CursorKind.PARM_DECL,
    ClangCursorKind.TRANSLATION_UNIT: CursorKind.TRANSLATION_UNIT,
    ClangCursorKind.NAMESPACE: CursorKind.NAMESPACE,
    ClangCursorKind.CXX_METHOD: CursorKind.CXX_METHOD,
    ClangCursorKind.CONSTRUCTOR: CursorKind.CONSTRUCTOR,
    ClangCursorKind.DESTRUCTOR: CursorKind.DESTRUCTOR,
    ClangCursorKind.TEMPLATE_TYPE_PARAMETER: CursorKind.TEMPLATE_PARAMETER,
    ClangCursorKind.TEMPLATE_NON_TYPE_PARAMETER: CursorKind.TEMPLATE_PARAMETER,
    ClangCursorKind.TEMPLATE_TEMPLATE_PARAMETER: CursorKind.TEMPLATE_PARAMETER,
}


def declared_with_struct(cursor: Cursor) -> bool:
    """True if a class template's primary declaration uses the `struct` keyword.

    The template parameter list is skipped by tracking angle-bracket depth,
    so `template <class T> struct S` reads as struct.
    """
    depth = 0
    for token in cursor.get_tokens():
        spelling = token.spelling
        if spelling == '<':
            depth += 1
        elif spelling == '>':
            depth -= 1
        elif spelling == '>>':
            depth -= 2
        elif depth == 0 and spelling in ('class', 'struct'):
            return spelling == 'struct'
    return False


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


@dataclass
class ClangSession:
    index: Optional[Index]


@dataclass
class ClangUnit:
    translation_unit: Optional[TranslationUnit]
    main_file: str


class ClangCursor(ICursor):
    """Cursor over a clang.cindex.Cursor."""

    __slots__ = ('cursor', 'main_file')

    def __init__(self, cursor: Cursor, main_file: str):
        self.cursor = cursor
        self.main_file = main_file

    @property
    def kind(self) -> CursorKind:
        try:
            clang_kind = self.cursor.kind
        except ValueError:
            # Cursor kinds newer than the bindings know about
            return CursorKind.UNEXPOSED
        kind = CURSOR_KINDS.get(clang_kind, CursorKind.UNEXPOSED)
        if kind is CursorKind.CLASS_TEMPLATE and declared_with_struct(self.cursor):
            return CursorKind.STRUCT_DECL
        return kind

    @property
    def spelling(self) -> str:
        return self.cursor.spelling or ""

    @property
    def location(self) -> SourceLocation:
        location = self.cursor.location
        filename = location.file.name if location.file is not None else ""
        return SourceLocation(file=filename, line=location.line, column=location.column)

    def is_in_system_header(self) -> bool:
        return bool(conf.lib.clang_Location_isInSystemHeader(self.cursor.location))

    def is_in_main_file(self) -> bool:
        location_file = self.cursor.location.file
        return location_file is not None and _normalize(location_file.name) == self.main_file


class ClangFrontEnd(IFrontEnd):
    """
    C++ front end using libclang.

    Args:
        libclang_path: Explicit path to the libclang shared library; only
            honored before the bindings have loaded a library

    Raises:
        FrontEndError: If libclang cannot be loaded
    """

    name = "clang"

    def __init__(self, libclang_path: Optional[str] = None):
        if libclang_path and not Config.loaded:
            Config.set_library_file(libclang_path)
        try:
            # Forces the shared library to load now rather than mid-run
            Index.create()
        except LibclangError as e:
            raise FrontEndError(self.name, str(e)) from e
        logger.debug("ClangFrontEnd initialized")

    def create_session(self) -> ClangSession:
        return ClangSession(index=Index.create(excludeDecls=True))

    def parse(self, session: ClangSession, filepath: str, args: Sequence[str] = ()) -> Optional[ClangUnit]:
        """
        Parse a file into a translation unit.

        Returns:
            ClangUnit, or None when libclang could not produce a translation unit
        """
        parse_args: List[str] = list(args)
        if '-x' not in parse_args:
            parse_args = ['-x', 'c++'] + parse_args

        try:
            translation_unit = session.index.parse(str(filepath), args=parse_args)
        except TranslationUnitLoadError as e:
            logger.warning(f"libclang could not parse {filepath}: {e}")
            return None

        errors = [d for d in translation_unit.diagnostics if d.severity >= 3]
        if errors:
            logger.debug(f"{len(errors)} errors while parsing {filepath}; grepping the partial tree")
        return ClangUnit(translation_unit=translation_unit, main_file=_normalize(str(filepath)))

    def root_cursor(self, tree: ClangUnit) -> ClangCursor:
        return ClangCursor(tree.translation_unit.cursor, tree.main_file)

    def children_of(self, cursor: ClangCursor) -> Iterator[ClangCursor]:
        for child in cursor.cursor.get_children():
            yield ClangCursor(child, cursor.main_file)

    def dispose_tree(self, tree: ClangUnit) -> None:
        # The bindings dispose the native translation unit when the last
        # reference goes away
        tree.translation_unit = None

    def dispose_session(self, session: ClangSession) -> None:
        session.index = None
