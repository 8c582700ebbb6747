"""Query parsing for page lookups.

Splits a raw query into namespace scopes and the remaining highlight terms.
Supported syntax:

    ns:wiki  @wiki      restrict to a namespace
    -ns:wiki ^wiki      exclude a namespace
    "two words"         phrase (kept as one highlight term)
    -word  -"a phrase"  exclude a term

Parsing never fails. Namespace tokens are kept as typed; cleaning them
into page ids happens in the match step.
"""

import re

from ..core.types import StructuredQuery, TimeBound

_TOKEN_PATTERN = re.compile(r'-?"[^"]*"?|\S+')


def _unquote(token: str) -> str:
    return token.strip('"').strip()


def parse_query(
    raw: str | None,
    in_title: bool = False,
    in_namespace: bool = False,
    after: TimeBound = None,
    before: TimeBound = None,
) -> StructuredQuery:
    """Parse a raw query string into a StructuredQuery.

    Args:
        raw: Query text as typed by the user.
        in_title: Also match page titles.
        in_namespace: Match against the full id, namespace included.
        after: Lower modification-time bound, passed through unparsed.
        before: Upper modification-time bound, passed through unparsed.

    Returns:
        StructuredQuery. Empty input yields a query without terms or scope.

    Example:
        >>> q = parse_query('ns:wiki "page title" -draft')
        >>> q.namespaces, q.highlight, q.excluded_terms
        (['wiki'], ['page title'], ['draft'])
    """
    query = StructuredQuery(
        in_title=in_title,
        in_namespace=in_namespace,
        after=after,
        before=before,
    )
    if not raw:
        return query

    for token in _TOKEN_PATTERN.findall(raw):
        if token.startswith("-ns:") and len(token) > 4:
            query.excluded_namespaces.append(token[4:])
        elif token.startswith("^") and len(token) > 1:
            query.excluded_namespaces.append(token[1:])
        elif token.startswith("ns:") and len(token) > 3:
            query.namespaces.append(token[3:])
        elif token.startswith("@") and len(token) > 1:
            query.namespaces.append(token[1:])
        elif token.startswith('-"'):
            if phrase := _unquote(token[1:]):
                query.excluded_terms.append(phrase)
        elif token.startswith('"'):
            if phrase := _unquote(token):
                query.highlight.append(phrase)
        elif token.startswith("-") and len(token) > 1:
            query.excluded_terms.append(token[1:])
        else:
            query.highlight.append(token)

    return query
