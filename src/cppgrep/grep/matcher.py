"""
Identifier query matching.

Plain substring containment, no regular expressions. Case-insensitive
matching folds ASCII letters only; any other character must match exactly.
"""

import string

from cppgrep.core.models import QuerySpec

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def ascii_upper(text: str) -> str:
    """Uppercase the ASCII letters of ``text``, leaving everything else alone."""
    return text.translate(_ASCII_UPPER)


def has_substring(needle: str, haystack: str, ignore_case: bool = False) -> bool:
    if ignore_case:
        return ascii_upper(needle) in ascii_upper(haystack)
    return needle in haystack


def matches(query_spec: QuerySpec, identifier: str) -> bool:
    """
    Return True if ``identifier`` satisfies the query.

    An empty substring matches every identifier, including an empty one.
    """
    if query_spec.is_wildcard:
        return True
    return has_substring(query_spec.substring, identifier, query_spec.ignore_case)
