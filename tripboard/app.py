"""Wires models and presenters together for one board."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .board_presenter import BoardPresenter, Clock, utc_now
from .errors import LoadFailure
from .filter_presenter import FilterPresenter
from .reference_models import DestinationsModel, OffersModel
from .render import Container, KeyBindings
from .selection_models import FilterModel, SortModel
from .trip_info import TripInfoPresenter
from .trips_model import TripsModel

logger = logging.getLogger(__name__)


@dataclass
class TripBoardApp:
    destinations_model: DestinationsModel
    offers_model: OffersModel
    trips_model: TripsModel
    filter_model: FilterModel
    sort_model: SortModel
    board: BoardPresenter
    filters: FilterPresenter
    trip_info: TripInfoPresenter
    key_bindings: KeyBindings
    header: Container = field(default_factory=lambda: Container("trip-main"))
    controls: Container = field(default_factory=lambda: Container("trip-controls__filters"))
    events: Container = field(default_factory=lambda: Container("trip-events"))

    def load(self) -> bool:
        """Load reference data, then points.  ``False`` if anything failed."""
        ok = True
        for model in (self.destinations_model, self.offers_model, self.trips_model):
            try:
                model.init()
            except LoadFailure as exc:
                logger.warning("%s", exc)
                ok = False
        return ok

    def screen(self) -> str:
        parts = [self.header.text, self.controls.text, self.events.text]
        return "\n\n".join(part for part in parts if part)


def build_app(gateway, clock: Optional[Clock] = None) -> TripBoardApp:
    header = Container("trip-main")
    controls = Container("trip-controls__filters")
    events = Container("trip-events")
    key_bindings = KeyBindings()

    destinations_model = DestinationsModel(gateway)
    offers_model = OffersModel(gateway)
    trips_model = TripsModel(gateway)
    filter_model = FilterModel()
    sort_model = SortModel()

    board = BoardPresenter(
        container=events,
        trips_model=trips_model,
        destinations_model=destinations_model,
        offers_model=offers_model,
        filter_model=filter_model,
        sort_model=sort_model,
        key_bindings=key_bindings,
        clock=clock or utc_now,
    )
    filters = FilterPresenter(
        container=controls,
        filter_model=filter_model,
        trips_model=trips_model,
        board_presenter=board,
    )
    trip_info = TripInfoPresenter(
        container=header,
        trips_model=trips_model,
        destinations_model=destinations_model,
        offers_model=offers_model,
    )

    board.init()
    filters.init()
    trip_info.init()

    return TripBoardApp(
        destinations_model=destinations_model,
        offers_model=offers_model,
        trips_model=trips_model,
        filter_model=filter_model,
        sort_model=sort_model,
        board=board,
        filters=filters,
        trip_info=trip_info,
        key_bindings=key_bindings,
        header=header,
        controls=controls,
        events=events,
    )


__all__ = ["TripBoardApp", "build_app"]
