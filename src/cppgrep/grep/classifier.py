"""
Cursor classification.

Maps a cursor's kind onto one of the ten declaration kinds and copies the
cursor's location and spelling into an immutable DeclarationEntry. Every
other kind is rejected; most nodes of a C++ tree are not declarations of
interest, so rejection is the common case and not an error.
"""

from typing import Dict, Optional

from cppgrep.core.interfaces import ICursor
from cppgrep.core.models import CursorKind, DeclarationEntry, DeclarationKind

DECLARATION_KINDS: Dict[CursorKind, DeclarationKind] = {
    CursorKind.CLASS_DECL: DeclarationKind.CLASS_DECL,
    CursorKind.CLASS_TEMPLATE: DeclarationKind.CLASS_TEMPLATE,
    CursorKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION: DeclarationKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,
    CursorKind.STRUCT_DECL: DeclarationKind.STRUCT_DECL,
    CursorKind.FUNCTION_DECL: DeclarationKind.FUNCTION_DECL,
    CursorKind.FUNCTION_TEMPLATE: DeclarationKind.FUNCTION_TEMPLATE,
    CursorKind.CONVERSION_FUNCTION: DeclarationKind.CONVERSION_FUNCTION,
    CursorKind.VAR_DECL: DeclarationKind.VAR_DECL,
    CursorKind.FIELD_DECL: DeclarationKind.FIELD_DECL,
    CursorKind.PARM_DECL: DeclarationKind.PARAM_DECL,
}


def declaration_kind_of(kind: CursorKind) -> Optional[DeclarationKind]:
    """Return the declaration kind for a cursor kind, or None if it is not one."""
    return DECLARATION_KINDS.get(kind)


def classify(cursor: ICursor) -> Optional[DeclarationEntry]:
    """
    Build a DeclarationEntry for ``cursor`` if its kind is a recognized declaration.

    Args:
        cursor: Cursor handed to the visitor

    Returns:
        A new entry holding copies of the cursor's line, column and spelling,
        or None for any other kind of node
    """
    kind = declaration_kind_of(cursor.kind)
    if kind is None:
        return None
    location = cursor.location
    return DeclarationEntry(
        kind=kind,
        line=location.line,
        column=location.column,
        identifier=cursor.spelling,
    )
