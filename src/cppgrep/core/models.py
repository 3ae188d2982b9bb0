"""
Core data models for cppgrep.

This module defines the data structures that flow through the grep engine:
front-end cursor kinds, the closed set of declaration kinds, the category
buckets that group them, and the request/result types handed to the
presentation layer.

All models are designed for:
- Immutability (frozen dataclasses)
- Serialization (JSON-compatible via to_dict/from_dict)
- Independence from the front end (entries copy primitives out of cursors)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple


class CursorKind(Enum):
    """
    Front-end neutral kind of a syntax tree node.

    The first ten members are the declaration kinds cppgrep reports. The rest
    are kinds a front end may hand out for nodes the walker only passes
    through.
    """
    CLASS_DECL = "class_decl"
    CLASS_TEMPLATE = "class_template"
    CLASS_TEMPLATE_PARTIAL_SPECIALIZATION = "class_template_partial_specialization"
    STRUCT_DECL = "struct_decl"
    FUNCTION_DECL = "function_decl"
    FUNCTION_TEMPLATE = "function_template"
    CONVERSION_FUNCTION = "conversion_function"
    VAR_DECL = "var_decl"
    FIELD_DECL = "field_decl"
    PARM_DECL = "parm_decl"

    TRANSLATION_UNIT = "translation_unit"
    NAMESPACE = "namespace"
    CXX_METHOD = "cxx_method"
    CONSTRUCTOR = "constructor"
    DESTRUCTOR = "destructor"
    TEMPLATE_PARAMETER = "template_parameter"
    UNEXPOSED = "unexposed"


class DeclarationKind(Enum):
    """
    The closed set of declaration kinds a grep entry can carry.

    Attributes:
        CLASS_DECL: class declaration or definition
        CLASS_TEMPLATE: primary class template
        CLASS_TEMPLATE_PARTIAL_SPECIALIZATION: partial specialization of a class template
        STRUCT_DECL: struct declaration or definition (including struct templates)
        FUNCTION_DECL: free function
        FUNCTION_TEMPLATE: function template, free or member
        CONVERSION_FUNCTION: conversion operator (operator T)
        VAR_DECL: variable, static data member or catch parameter
        FIELD_DECL: non-static data member
        PARAM_DECL: function or lambda parameter
    """
    CLASS_DECL = "class_decl"
    CLASS_TEMPLATE = "class_template"
    CLASS_TEMPLATE_PARTIAL_SPECIALIZATION = "class_template_partial_specialization"
    STRUCT_DECL = "struct_decl"
    FUNCTION_DECL = "function_decl"
    FUNCTION_TEMPLATE = "function_template"
    CONVERSION_FUNCTION = "conversion_function"
    VAR_DECL = "var_decl"
    FIELD_DECL = "field_decl"
    PARAM_DECL = "param_decl"

    def __str__(self) -> str:
        """String representation for serialization."""
        return self.value

    @property
    def category(self) -> 'CategoryGroup':
        """The filter bucket this kind belongs to."""
        return CATEGORY_OF_KIND[self]

    @classmethod
    def from_string(cls, value: str) -> 'DeclarationKind':
        """
        Create DeclarationKind from string value.

        Raises:
            ValueError: If value doesn't match any DeclarationKind
        """
        for member in cls:
            if member.value == value.lower():
                return member
        raise ValueError(f"Invalid DeclarationKind: {value}")


class CategoryGroup(Enum):
    """User-facing filter buckets."""
    CLASS = "class"
    STRUCT = "struct"
    FUNCTION = "function"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value

    @property
    def kinds(self) -> Tuple[DeclarationKind, ...]:
        """Declaration kinds gathered under this bucket, in declaration order."""
        return tuple(k for k in DeclarationKind if CATEGORY_OF_KIND[k] is self)

    @classmethod
    def from_string(cls, value: str) -> 'CategoryGroup':
        """
        Create CategoryGroup from string value.

        Raises:
            ValueError: If value doesn't match any CategoryGroup
        """
        for member in cls:
            if member.value == value.lower():
                return member
        raise ValueError(
            f"Invalid CategoryGroup: {value}. "
            f"Expected one of: {', '.join(m.value for m in cls)}"
        )


CATEGORY_OF_KIND: Dict[DeclarationKind, CategoryGroup] = {
    DeclarationKind.CLASS_DECL: CategoryGroup.CLASS,
    DeclarationKind.CLASS_TEMPLATE: CategoryGroup.CLASS,
    DeclarationKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION: CategoryGroup.CLASS,
    DeclarationKind.STRUCT_DECL: CategoryGroup.STRUCT,
    DeclarationKind.FUNCTION_DECL: CategoryGroup.FUNCTION,
    DeclarationKind.FUNCTION_TEMPLATE: CategoryGroup.FUNCTION,
    DeclarationKind.CONVERSION_FUNCTION: CategoryGroup.FUNCTION,
    DeclarationKind.VAR_DECL: CategoryGroup.VARIABLE,
    DeclarationKind.FIELD_DECL: CategoryGroup.VARIABLE,
    DeclarationKind.PARAM_DECL: CategoryGroup.VARIABLE,
}


@dataclass(frozen=True)
class SourceLocation:
    """A 1-based position inside a source file."""
    file: str
    line: int
    column: int


@dataclass(frozen=True)
class DeclarationEntry:
    """
    One classified, filtered and matched declaration.

    The entry is the tagged union over the ten declaration kinds: ``kind`` is
    the tag and every variant carries the same payload. It owns plain copies
    of the cursor's data and never refers back into the front end's tree.

    Attributes:
        kind: Which of the ten declaration kinds this is
        line: 1-based line of the declared name
        column: 1-based column of the declared name
        identifier: Spelling of the declared name (may be empty for unnamed
            parameters and anonymous records)
    """
    kind: DeclarationKind
    line: int
    column: int
    identifier: str

    def __post_init__(self):
        if not isinstance(self.kind, DeclarationKind):
            raise ValueError(f"kind must be DeclarationKind enum, got {type(self.kind)}")
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.column < 1:
            raise ValueError(f"column must be >= 1, got {self.column}")

    @property
    def category(self) -> CategoryGroup:
        return self.kind.category

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'category': self.category.value,
            'line': self.line,
            'column': self.column,
            'identifier': self.identifier,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeclarationEntry':
        return cls(
            kind=DeclarationKind.from_string(data['kind']),
            line=data['line'],
            column=data['column'],
            identifier=data['identifier'],
        )


@dataclass(frozen=True)
class FilterSpec:
    """
    The set of enabled category buckets.

    An empty set means "no bucket explicitly requested" and is treated as all
    buckets enabled. With explicit set, the groups are taken as given even
    when empty, and an empty explicit selection matches nothing.
    """
    groups: FrozenSet[CategoryGroup] = frozenset()
    explicit: bool = False

    @property
    def enabled_groups(self) -> FrozenSet[CategoryGroup]:
        """The buckets actually in effect."""
        if self.groups or self.explicit:
            return self.groups
        return frozenset(CategoryGroup)

    def is_enabled(self, group: CategoryGroup) -> bool:
        return group in self.enabled_groups

    @classmethod
    def of(cls, groups: Iterable[CategoryGroup], explicit: bool = False) -> 'FilterSpec':
        return cls(groups=frozenset(groups), explicit=explicit)

    @classmethod
    def from_names(cls, names: Optional[Iterable[str]]) -> 'FilterSpec':
        """
        Build a FilterSpec from bucket names ("class", "struct", ...).

        Raises:
            ValueError: If a name is not a known bucket
        """
        if not names:
            return cls()
        return cls.of(CategoryGroup.from_string(name) for name in names)

    def to_dict(self) -> Dict[str, Any]:
        return {'groups': sorted(g.value for g in self.groups)}


@dataclass(frozen=True)
class QuerySpec:
    """
    Identifier query.

    Attributes:
        substring: Text the identifier must contain; empty matches everything
        ignore_case: Compare with ASCII case folding
    """
    substring: str = ""
    ignore_case: bool = False

    @property
    def is_wildcard(self) -> bool:
        return not self.substring

    def to_dict(self) -> Dict[str, Any]:
        return {'substring': self.substring, 'ignore_case': self.ignore_case}


@dataclass(frozen=True)
class GrepResult:
    """
    All matches found in one source file, in traversal order.

    A result with no entries is invalid: files without matches are dropped
    before they ever reach a sink.

    Attributes:
        source_path: Path of the file as it was requested
        entries: Matches in pre-order traversal order
    """
    source_path: str
    entries: Tuple[DeclarationEntry, ...] = ()

    def __post_init__(self):
        """
        Validate grep result data.

        Raises:
            ValueError: If validation fails
        """
        if not self.source_path:
            raise ValueError("GrepResult source_path cannot be empty")
        if not self.entries:
            raise ValueError(f"GrepResult for {self.source_path} must have at least one entry")
        # Lists are accepted for convenience but stored as a tuple
        object.__setattr__(self, 'entries', tuple(self.entries))

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def get_entries_by_category(self, group: CategoryGroup) -> List[DeclarationEntry]:
        """Entries whose kind falls under the given bucket."""
        return [e for e in self.entries if e.category is group]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_path': self.source_path,
            'entries': [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GrepResult':
        return cls(
            source_path=data['source_path'],
            entries=tuple(DeclarationEntry.from_dict(e) for e in data['entries']),
        )


@dataclass(frozen=True)
class GrepRequest:
    """
    A complete grep run: which files, which buckets, which query.

    Attributes:
        files: Source paths, processed in this order
        filter_spec: Enabled buckets
        query_spec: Identifier query
    """
    files: Tuple[str, ...]
    filter_spec: FilterSpec = field(default_factory=FilterSpec)
    query_spec: QuerySpec = field(default_factory=QuerySpec)

    def __post_init__(self):
        object.__setattr__(self, 'files', tuple(str(f) for f in self.files))
