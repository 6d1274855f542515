"""Route, dates and total cost shown in the header."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .date_utils import DateFormat, format_date
from .models import Point
from .render import Container, RenderPosition, remove, render, replace
from .views import TripInfoView

MAX_ROUTE_NAMES = 3


@dataclass(frozen=True, slots=True)
class TripSummary:
    title: str
    dates: str
    total_cost: int


def route_title(names: list[str]) -> str:
    if len(names) <= MAX_ROUTE_NAMES:
        return " — ".join(names)
    return f"{names[0]} — ... — {names[-1]}"


def summarize(points: Iterable[Point], destinations_model, offers_model) -> Optional[TripSummary]:
    """Return the trip summary, or ``None`` when there are no points."""
    ordered = sorted(points, key=lambda point: point.date_from)
    if not ordered:
        return None

    names = []
    for point in ordered:
        destination = destinations_model.get_by_id(point.destination_id)
        if destination is not None:
            names.append(destination.name)

    total = 0
    for point in ordered:
        total += point.base_price
        total += sum(
            offer.price for offer in offers_model.get_selected(point.type, point.offer_ids)
        )

    dates = (
        f"{format_date(ordered[0].date_from, DateFormat.TRIP_INFO)} — "
        f"{format_date(max(p.date_to for p in ordered), DateFormat.TRIP_INFO)}"
    )
    return TripSummary(title=route_title(names), dates=dates, total_cost=total)


class TripInfoPresenter:
    def __init__(self, *, container: Container, trips_model, destinations_model, offers_model) -> None:
        self._container = container
        self._trips_model = trips_model
        self._destinations_model = destinations_model
        self._offers_model = offers_model
        self._trip_info_component: Optional[TripInfoView] = None

        self._trips_model.add_observer(self._handle_model_event)

    @property
    def component(self) -> Optional[TripInfoView]:
        return self._trip_info_component

    def init(self) -> None:
        previous = self._trip_info_component
        self._trip_info_component = TripInfoView(
            summarize(self._trips_model.points, self._destinations_model, self._offers_model)
        )
        if previous is None:
            render(self._trip_info_component, self._container, RenderPosition.AFTERBEGIN)
            return
        replace(self._trip_info_component, previous)
        remove(previous)

    def _handle_model_event(self, update_type: Any, data: Any = None) -> None:
        self.init()


__all__ = ["TripSummary", "route_title", "summarize", "TripInfoPresenter"]
