"""
Lawyer directory: filter/sort engine and the store that owns the visible view
"""

import logging
from typing import Iterable, Optional

from lawconsult.models.lawyer import (
    Lawyer,
    LawyerFilters,
    SortDirection,
    SortOption,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    SortOption.RATING: lambda lawyer: lawyer.rating,
    SortOption.PRICE: lambda lawyer: lawyer.hourly_rate,
    SortOption.EXPERIENCE: lambda lawyer: lawyer.experience,
    SortOption.REVIEWS: lambda lawyer: lawyer.review_count,
}


def _in_range(value: float, bounds) -> bool:
    low, high = bounds
    return low <= value <= high


def matches(lawyer: Lawyer, filters: LawyerFilters, search: str = "") -> bool:
    """Whether a lawyer passes the search text and every active filter."""
    if search:
        needle = search.lower()
        if needle not in lawyer.name.lower() and not any(
            needle in specialty.lower() for specialty in lawyer.specialties
        ):
            return False

    if filters.specialties and not any(
        specialty in lawyer.specialties for specialty in filters.specialties
    ):
        return False

    if not _in_range(lawyer.experience, filters.experience_range):
        return False
    if not _in_range(lawyer.rating, filters.rating_range):
        return False
    if not _in_range(lawyer.hourly_rate, filters.price_range):
        return False

    if filters.location and filters.location not in lawyer.location:
        return False

    if filters.is_online is not None and lawyer.is_online != filters.is_online:
        return False

    return True


def filter_and_sort(
    lawyers: Iterable[Lawyer],
    filters: Optional[LawyerFilters] = None,
    sort_by: SortOption = SortOption.RATING,
    direction: SortDirection = SortDirection.DESC,
    search: str = "",
) -> list[Lawyer]:
    """
    Produce the ordered visible subset of a lawyer collection.

    Args:
        lawyers: Full collection
        filters: Filter set; defaults apply when omitted
        sort_by: Numeric field to order by
        direction: ``asc`` or ``desc``
        search: Case-insensitive text matched against name or any specialty

    Returns:
        Lawyers passing every predicate, ordered by ``sort_by``. Lawyers with
        equal sort values are ordered by id ascending in both directions.
    """
    filters = filters or LawyerFilters()
    key = SORT_FIELDS[SortOption(sort_by)]

    visible = [lawyer for lawyer in lawyers if matches(lawyer, filters, search)]
    visible.sort(key=lambda lawyer: lawyer.id)
    visible.sort(key=key, reverse=SortDirection(direction) == SortDirection.DESC)
    return visible


class DirectoryStore:
    """
    Owns the lawyer collection and the last-applied query state.

    Every mutator ends with :meth:`recompute`, so ``visible`` always reflects
    the current collection, filters, sort and search text.
    """

    def __init__(self, lawyers: Optional[Iterable[Lawyer]] = None):
        self.lawyers: list[Lawyer] = list(lawyers or [])
        self.filters = LawyerFilters()
        self.sort_by = SortOption.RATING
        self.direction = SortDirection.DESC
        self.search = ""
        self.selected: Optional[Lawyer] = None
        self.visible: list[Lawyer] = []
        self.recompute()

    def set_collection(self, lawyers: Iterable[Lawyer]) -> None:
        self.lawyers = list(lawyers)
        self.recompute()

    def set_filters(self, changes: Optional[dict] = None, **kwargs) -> None:
        """Shallow-merge filter changes; fields not given keep their value."""
        merged = dict(changes or {})
        merged.update(kwargs)
        self.filters = self.filters.merged(merged)
        self.recompute()

    def set_sort(self, sort_by, direction) -> None:
        self.sort_by = SortOption(sort_by)
        self.direction = SortDirection(direction)
        self.recompute()

    def set_search(self, text: str) -> None:
        self.search = text or ""
        self.recompute()

    def select(self, lawyer_id: Optional[str]) -> Optional[Lawyer]:
        if lawyer_id is None:
            self.selected = None
        else:
            self.selected = next(
                (lawyer for lawyer in self.lawyers if lawyer.id == lawyer_id), None)
        return self.selected

    def recompute(self) -> list[Lawyer]:
        self.visible = filter_and_sort(
            self.lawyers, self.filters, self.sort_by, self.direction, self.search
        )
        logger.debug("Directory recomputed: %d of %d lawyers visible",
                     len(self.visible), len(self.lawyers))
        return self.visible
