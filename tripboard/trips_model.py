from __future__ import annotations

import logging
from typing import Optional, Tuple

from .errors import LoadFailure, PreconditionViolation, TripApiError, WriteFailure
from .models import Point, UpdateType
from .observable import Observable

logger = logging.getLogger(__name__)


class TripsModel(Observable):
    """Server-confirmed list of points.

    Writes go to the gateway first; the in-memory collection changes only
    after the service has accepted them, and every change is published with
    the update type given by the caller.
    """

    def __init__(self, gateway) -> None:
        super().__init__()
        self._gateway = gateway
        self._points: Tuple[Point, ...] = ()
        self._has_error = False
        self._is_loaded = False

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    def get_by_id(self, point_id: Optional[str]) -> Optional[Point]:
        index = self._index_of(point_id)
        return self._points[index] if index != -1 else None

    def init(self) -> None:
        logger.info("Loading points")
        try:
            points = tuple(self._gateway.fetch_points())
        except TripApiError as exc:
            logger.warning("Failed to load points: %s", exc)
            self._points = ()
            self._has_error = True
            self._is_loaded = True
            self._notify(UpdateType.ERROR)
            raise LoadFailure("Failed to load latest route information") from exc

        self._points = points
        self._has_error = False
        self._is_loaded = True
        logger.info("Loaded %d points", len(points))
        self._notify(UpdateType.INIT)

    def create(self, draft: Point, update_type: UpdateType = UpdateType.MINOR) -> Point:
        """Create *draft* on the service and put the result first."""
        logger.info("Creating %s point", draft.type.value)
        try:
            created = self._gateway.create_point(draft)
        except TripApiError as exc:
            logger.warning("Failed to add point: %s", exc)
            raise WriteFailure("Failed to add point. Please try again.") from exc

        self._points = (created,) + self._points
        self._notify(update_type, created)
        return created

    def update(self, point: Point, update_type: UpdateType = UpdateType.MINOR) -> Point:
        """Replace the stored point with the service's copy of *point*."""
        if self._index_of(point.id) == -1:
            raise PreconditionViolation(f"Can't update unexisting point {point.id}")

        logger.info("Updating point %s (%s)", point.id, update_type.value)
        try:
            updated = self._gateway.update_point(point)
        except TripApiError as exc:
            logger.warning("Failed to update point %s: %s", point.id, exc)
            raise WriteFailure("Failed to update point. Please try again.") from exc

        # the collection may have changed while the request was in flight
        index = self._index_of(updated.id)
        if index == -1:
            raise PreconditionViolation(f"Point {updated.id} disappeared during update")
        self._points = self._points[:index] + (updated,) + self._points[index + 1 :]
        self._notify(update_type, updated)
        return updated

    def delete(self, point_id: str, update_type: UpdateType = UpdateType.MINOR) -> None:
        index = self._index_of(point_id)
        if index == -1:
            raise PreconditionViolation(f"Can't delete unexisting point {point_id}")

        logger.info("Deleting point %s", point_id)
        try:
            self._gateway.delete_point(point_id)
        except TripApiError as exc:
            logger.warning("Failed to delete point %s: %s", point_id, exc)
            raise WriteFailure("Failed to delete point. Please try again.") from exc

        removed = self._points[index]
        self._points = tuple(p for p in self._points if p.id != point_id)
        self._notify(update_type, removed)

    def _index_of(self, point_id: Optional[str]) -> int:
        for index, point in enumerate(self._points):
            if point.id == point_id:
                return index
        return -1


__all__ = ["TripsModel"]
