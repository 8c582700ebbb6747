"""Command implementations for pagelookup CLI."""

from .lookup import add_lookup_arguments, handle_lookup
from .references import add_reference_arguments, handle_backlinks, handle_mediause

__all__ = [
    "add_lookup_arguments",
    "handle_lookup",
    "add_reference_arguments",
    "handle_backlinks",
    "handle_mediause",
]
