"""Page id helpers.

Page ids are hierarchical: segments are joined by ``:`` and every segment
but the last names a namespace (``wiki:syntax:tables``).
"""

import re

from ..core.types import NAMESPACE_SEPARATOR

# Anything that is not a word character or one of the id punctuation marks
_DISALLOWED_CHARS = re.compile(r"[^\w.\-:]")
_REPEATED_COLONS = re.compile(r":+")
_COLON_THEN_PUNCT = re.compile(r":[:._\-]+")
_PUNCT_THEN_COLON = re.compile(r"[:._\-]+:")


def clean_id(raw: str | None, separator_char: str = "_", use_slash: bool = False) -> str:
    """Canonicalize a raw string into a page id.

    Lowercases, maps ``;`` (and ``/`` when ``use_slash`` is set) to the
    namespace separator, replaces disallowed characters with
    ``separator_char`` and collapses redundant separators.

    Args:
        raw: Raw id or query text.
        separator_char: Replacement for disallowed characters.
        use_slash: Treat ``/`` as a namespace separator.

    Returns:
        Cleaned page id, possibly empty.

    Example:
        >>> clean_id("  Wiki;Some Page!  ")
        'wiki:some_page'
    """
    if not raw:
        return ""

    page_id = raw.strip().lower()
    page_id = page_id.replace(";", NAMESPACE_SEPARATOR)
    if use_slash:
        page_id = page_id.replace("/", NAMESPACE_SEPARATOR)

    page_id = _DISALLOWED_CHARS.sub(separator_char, page_id)
    page_id = re.sub(f"{re.escape(separator_char)}+", separator_char, page_id)
    page_id = _REPEATED_COLONS.sub(NAMESPACE_SEPARATOR, page_id)
    page_id = page_id.strip(":._-")
    page_id = _COLON_THEN_PUNCT.sub(NAMESPACE_SEPARATOR, page_id)
    page_id = _PUNCT_THEN_COLON.sub(NAMESPACE_SEPARATOR, page_id)
    return page_id


def namespace_depth(page_id: str) -> int:
    """Number of separator-delimited segments in a page id."""
    return len(page_id.split(NAMESPACE_SEPARATOR))


def strip_leading_namespace(page_id: str) -> str:
    """Drop the first segment of a namespaced id (``a:b:c`` -> ``b:c``)."""
    _, sep, rest = page_id.partition(NAMESPACE_SEPARATOR)
    return rest if sep else page_id


def get_namespace(page_id: str) -> str | None:
    """Namespace part of a page id, or None for top-level pages."""
    namespace, sep, _ = page_id.rpartition(NAMESPACE_SEPARATOR)
    return namespace if sep else None


def in_namespace(page_id: str, namespace: str) -> bool:
    """True when ``page_id`` lives somewhere below ``namespace``."""
    return page_id.startswith(namespace + NAMESPACE_SEPARATOR)
