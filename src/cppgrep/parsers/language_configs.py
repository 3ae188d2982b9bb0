"""
C++ configuration for tree-sitter parsing.

This module provides the tree-sitter-cpp node type tables the tree-sitter
front end uses to decide which nodes are declarations, plus the file
extensions cppgrep recognizes as C++.

Usage:
    >>> is_cpp_file("people.cpp")
    True
    >>> 'class_specifier' in CPP_NODE_TYPES['record_types']
    True

Grammar notes (tree-sitter-cpp):
    class_specifier / struct_specifier:
        name: type_identifier | template_type | qualified_identifier
        body: field_declaration_list
    template_declaration:
        parameters: template_parameter_list
        (class_specifier | struct_specifier | function_definition | declaration)
    function_definition:
        declarator: function_declarator | operator_cast | ...
    declaration / field_declaration:
        type: ...
        declarator: (repeated) identifier | init_declarator | function_declarator | ...
    parameter_declaration:
        declarator: optional
"""

from pathlib import Path
from typing import Dict, FrozenSet, Set


# ==============================================================================
# Extension Mapping
# ==============================================================================

EXTENSION_MAP: Dict[str, str] = {
    '.cpp': 'cpp',
    '.cc': 'cpp',
    '.cxx': 'cpp',
    '.c++': 'cpp',
    '.hpp': 'cpp',
    '.hh': 'cpp',
    '.hxx': 'cpp',
    '.h++': 'cpp',
    '.h': 'cpp',  # may be C, parsed as C++ anyway
    '.ipp': 'cpp',
    '.tpp': 'cpp',
    '.inl': 'cpp',
}


# ==============================================================================
# Node Type Tables
# ==============================================================================

CPP_NODE_TYPES: Dict[str, FrozenSet[str]] = {
    # class Foo { ... } / struct Foo { ... }
    'record_types': frozenset({'class_specifier', 'struct_specifier'}),

    # Scopes in which a record without body is a forward declaration
    'declaration_scopes': frozenset({
        'translation_unit',
        'declaration_list',
        'field_declaration_list',
        'template_declaration',
        'linkage_specification',
    }),

    # Nodes whose declarators each become a cursor of their own
    'declarator_owners': frozenset({'declaration', 'field_declaration'}),

    # Parameters of functions, lambdas, catch clauses and templates
    'parameter_types': frozenset({
        'parameter_declaration',
        'optional_parameter_declaration',
        'variadic_parameter_declaration',
    }),

    # Leaf nodes that spell a declared name
    'name_types': frozenset({
        'identifier',
        'field_identifier',
        'type_identifier',
        'namespace_identifier',
        'operator_name',
        'destructor_name',
        'operator_cast',
        'qualified_identifier',
        'template_type',
        'template_function',
        'template_method',
    }),

    # Name wrappers whose own `name` field holds the spelled name
    'scoped_name_types': frozenset({
        'qualified_identifier',
        'template_type',
        'template_function',
        'template_method',
    }),

    'namespace_types': frozenset({'namespace_definition'}),
    'template_types': frozenset({'template_declaration'}),
    'function_types': frozenset({'function_definition'}),
}


def is_cpp_file(filepath: str) -> bool:
    """
    Check whether a path has a C++ source or header extension.

    Args:
        filepath: Path to a file (doesn't need to exist)

    Returns:
        True for known C++ extensions (case-insensitive)
    """
    return Path(filepath).suffix.lower() in EXTENSION_MAP


def get_supported_extensions() -> Set[str]:
    """
    Get a set of all supported file extensions.

    Returns:
        Set of file extensions (including the dot)
    """
    return set(EXTENSION_MAP.keys())
