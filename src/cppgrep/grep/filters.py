"""Category filtering of declaration entries."""

from cppgrep.core.models import DeclarationEntry, FilterSpec


def accepts(filter_spec: FilterSpec, entry: DeclarationEntry) -> bool:
    """
    Return True if the entry's bucket is enabled in ``filter_spec``.

    The decision depends only on the entry's kind, never on its identifier.
    An empty FilterSpec enables every bucket.
    """
    return filter_spec.is_enabled(entry.category)
