"""Filtering and sorting of the point collection.

``project`` is the only way the board derives what it shows: it never
mutates its input and relies on :func:`sorted` being stable, so points with
equal keys keep their collection order.

Filter boundaries are inclusive for PRESENT: a point is present when
``date_from <= now <= date_to``, future when ``date_from > now`` and past when
``date_to < now``.  Every point therefore lands in exactly one of the three.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from .models import FilterType, Point, SortType


def is_point_future(point: Point, now: datetime) -> bool:
    return point.date_from > now


def is_point_present(point: Point, now: datetime) -> bool:
    return point.date_from <= now <= point.date_to


def is_point_past(point: Point, now: datetime) -> bool:
    return point.date_to < now


FILTERS: Dict[FilterType, Callable[[Point, datetime], bool]] = {
    FilterType.EVERYTHING: lambda point, now: True,
    FilterType.FUTURE: is_point_future,
    FilterType.PRESENT: is_point_present,
    FilterType.PAST: is_point_past,
}


def filter_points(
    points: Iterable[Point], filter_type: FilterType, now: datetime
) -> List[Point]:
    predicate = FILTERS[FilterType(filter_type)]
    return [point for point in points if predicate(point, now)]


def sort_points(points: Iterable[Point], sort_type: SortType) -> List[Point]:
    """Return *points* ordered for *sort_type*.

    DAY is ascending start, TIME is descending duration and PRICE descending
    base price.  EVENT and OFFER have no ordering and keep the input order.
    """
    sort_type = SortType(sort_type)
    if sort_type is SortType.DAY:
        return sorted(points, key=lambda point: point.date_from)
    if sort_type is SortType.TIME:
        return sorted(points, key=lambda point: point.duration, reverse=True)
    if sort_type is SortType.PRICE:
        return sorted(points, key=lambda point: point.base_price, reverse=True)
    return list(points)


def project(
    points: Iterable[Point],
    filter_type: FilterType,
    sort_type: SortType,
    now: Optional[datetime] = None,
) -> List[Point]:
    """Return the filtered and sorted view of *points* evaluated at *now*."""
    now = now or datetime.now(timezone.utc)
    return sort_points(filter_points(points, filter_type, now), sort_type)


def generate_filters(
    points: Iterable[Point], now: Optional[datetime] = None
) -> Dict[FilterType, bool]:
    """Map every filter to whether at least one point currently passes it."""
    now = now or datetime.now(timezone.utc)
    points = list(points)
    return {
        filter_type: filter_type is FilterType.EVERYTHING
        or any(predicate(point, now) for point in points)
        for filter_type, predicate in FILTERS.items()
    }


__all__ = [
    "is_point_future",
    "is_point_present",
    "is_point_past",
    "FILTERS",
    "filter_points",
    "sort_points",
    "project",
    "generate_filters",
]
