"""Result filtering for page lookups and reference queries.

Filters only ever remove entries; surviving entries keep their relative
order and values. Applying a filter twice gives the same result as
applying it once.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Mapping, TypeVar

from loguru import logger

from ..core.exceptions import PageLookupError
from ..core.types import TimeBound
from .dates import resolve_date

if TYPE_CHECKING:
    from .ports import AccessGate, DateResolver, TimeSource

V = TypeVar("V")


def resolve_time_bound(
    bound: TimeBound,
    date_resolver: "DateResolver" = resolve_date,
) -> float | None:
    """Resolve a time bound to epoch seconds.

    Numbers are taken as epoch seconds, datetimes are converted, and strings
    are handed to ``date_resolver``. A bound that cannot be resolved is
    logged and treated as unset.

    Args:
        bound: Bound as given by the caller.
        date_resolver: Resolver for free-form date expressions.

    Returns:
        Epoch seconds, or None if the bound is unset or unresolvable.
    """
    if bound is None or bound == "":
        return None
    if isinstance(bound, bool):
        logger.warning(f"Ignoring boolean time bound {bound!r}")
        return None
    if isinstance(bound, (int, float)):
        return float(bound)
    if isinstance(bound, datetime):
        return bound.timestamp()
    if isinstance(bound, str):
        resolved = date_resolver(bound)
        if resolved is None:
            logger.warning(f"Could not resolve date expression {bound!r}, ignoring bound")
        return resolved

    logger.warning(f"Ignoring time bound of unsupported type {type(bound).__name__}")
    return None


class ResultFilter:
    """Removes results the current user may not see or that fall outside a time range.

    Example:
        >>> result_filter = ResultFilter(gate, times)
        >>> result_filter.apply({"wiki:start": "Welcome"}, after="-1 week")
        {'wiki:start': 'Welcome'}
    """

    def __init__(
        self,
        gate: "AccessGate",
        times: "TimeSource | None" = None,
        date_resolver: "DateResolver" = resolve_date,
    ):
        """Initialize the filter.

        Args:
            gate: Visibility, existence and permission checks.
            times: Page modification times. Only needed for time bounding.
            date_resolver: Resolver for free-form date bounds.
        """
        self.gate = gate
        self.times = times
        self.date_resolver = date_resolver

    def filter_access(
        self,
        results: Mapping[str, V],
        ignore_permissions: bool = False,
    ) -> dict[str, V]:
        """Drop hidden, missing and unreadable pages.

        Args:
            results: Mapping keyed by page id.
            ignore_permissions: Skip the visibility and read checks. Only an
                actual ``True`` counts; any other value applies permissions.

        Returns:
            Surviving entries in their original order.
        """
        check_permissions = ignore_permissions is not True
        kept: dict[str, V] = {}

        for page_id, value in results.items():
            if check_permissions and not self.gate.is_visible(page_id):
                continue
            if not self.gate.exists(page_id):
                continue
            if check_permissions and not self.gate.is_readable(page_id):
                continue
            kept[page_id] = value

        dropped = len(results) - len(kept)
        if dropped:
            logger.debug(f"Access filter dropped {dropped} of {len(results)} pages")
        return kept

    def filter_by_time(
        self,
        results: Mapping[str, V],
        after: TimeBound = None,
        before: TimeBound = None,
    ) -> dict[str, V]:
        """Keep pages modified within ``[after, before]``.

        Both bounds are inclusive. An unset or unresolvable bound does not
        restrict the range.

        Args:
            results: Mapping keyed by page id.
            after: Earliest accepted modification time.
            before: Latest accepted modification time.

        Returns:
            Surviving entries in their original order.

        Raises:
            PageLookupError: If a bound is set but no TimeSource is configured.
        """
        after_ts = resolve_time_bound(after, self.date_resolver)
        before_ts = resolve_time_bound(before, self.date_resolver)
        if after_ts is None and before_ts is None:
            return dict(results)

        if self.times is None:
            raise PageLookupError("Time bounds require a TimeSource")

        kept: dict[str, V] = {}
        for page_id, value in results.items():
            modified = self.times.modification_time(page_id)
            if after_ts is not None and modified < after_ts:
                continue
            if before_ts is not None and modified > before_ts:
                continue
            kept[page_id] = value

        logger.debug(
            f"Time filter kept {len(kept)} of {len(results)} pages "
            f"(after={after_ts}, before={before_ts})"
        )
        return kept

    def apply(
        self,
        results: Mapping[str, V],
        after: TimeBound = None,
        before: TimeBound = None,
    ) -> dict[str, V]:
        """Run the access filter, then the time filter."""
        return self.filter_by_time(self.filter_access(results), after, before)
