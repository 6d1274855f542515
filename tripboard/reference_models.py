"""Read-only datasets loaded once from the service: destinations and offers."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

from .errors import LoadFailure, TripApiError
from .models import Destination, Offer, OfferGroup, PointType, UpdateType
from .observable import Observable

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ReferenceDataModel(Observable, Generic[T]):
    """Cache of one dataset; empty until :meth:`init` succeeds."""

    def __init__(self, loader: Callable[[], Iterable[T]], name: str) -> None:
        super().__init__()
        self._loader = loader
        self._name = name
        self._data: Tuple[T, ...] = ()
        self._has_error = False
        self._is_loaded = False

    @property
    def data(self) -> Tuple[T, ...]:
        return self._data

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    def init(self) -> None:
        """Load the dataset; raise :class:`LoadFailure` after publishing ERROR."""
        logger.info("Loading %s", self._name)
        try:
            data = tuple(self._loader())
        except TripApiError as exc:
            logger.warning("Failed to load %s: %s", self._name, exc)
            self._data = ()
            self._has_error = True
            self._is_loaded = True
            self._notify(UpdateType.ERROR)
            raise LoadFailure(f"Failed to load {self._name}") from exc

        self._data = data
        self._has_error = False
        self._is_loaded = True
        logger.info("Loaded %d %s", len(data), self._name)
        self._notify(UpdateType.INIT)


class DestinationsModel(ReferenceDataModel[Destination]):
    def __init__(self, gateway) -> None:
        super().__init__(gateway.fetch_destinations, "destinations")

    @property
    def destinations(self) -> Tuple[Destination, ...]:
        return self.data

    def get_by_id(self, destination_id: Optional[str]) -> Optional[Destination]:
        for destination in self._data:
            if destination.id == destination_id:
                return destination
        return None

    def get_by_name(self, name: str) -> Optional[Destination]:
        wanted = name.strip().casefold()
        for destination in self._data:
            if destination.name.casefold() == wanted:
                return destination
        return None


class OffersModel(ReferenceDataModel[OfferGroup]):
    def __init__(self, gateway) -> None:
        super().__init__(gateway.fetch_offers, "offers")

    @property
    def offers(self) -> Tuple[OfferGroup, ...]:
        return self.data

    def get_offers_by_type(self, point_type: PointType) -> Tuple[Offer, ...]:
        for group in self._data:
            if group.type == point_type:
                return group.offers
        return ()

    def get_selected(self, point_type: PointType, offer_ids: Iterable[str]) -> List[Offer]:
        """Return the offers of *point_type* whose ids are in *offer_ids*."""
        selected = set(offer_ids)
        return [offer for offer in self.get_offers_by_type(point_type) if offer.id in selected]

    def valid_offer_ids(self, point_type: PointType) -> Tuple[str, ...]:
        return tuple(offer.id for offer in self.get_offers_by_type(point_type))


__all__ = ["ReferenceDataModel", "DestinationsModel", "OffersModel"]
