"""Text views for the board.

Views know how to draw themselves and expose the user intents their
controls support (``click_*``, ``change_*``, ``submit`` ...).  They never talk
to models; every intent goes to a callback supplied by a presenter.
"""

from __future__ import annotations

from dataclasses import replace as replace_point
from typing import Any, Callable, Dict, Mapping, Optional

from .adapter import OUTBOUND_PRICE_FLOOR, coerce_price, parse_datetime
from .date_utils import DateFormat, format_date, format_duration
from .models import (
    CREATING_MESSAGE,
    EMPTY_LIST_MESSAGE,
    SORT_TYPE_ENABLED,
    FilterType,
    Point,
    PointType,
    SortType,
)
from .render import Component, ContainerComponent, StatefulComponent


def _title(value: str) -> str:
    return value[:1].upper() + value[1:]


class BoardView(ContainerComponent):
    def __init__(self) -> None:
        super().__init__("trip-events__list")


class LoadingView(Component):
    @property
    def template(self) -> str:
        return "Loading..."


class ErrorView(Component):
    @property
    def template(self) -> str:
        return "Failed to load latest route information"


class EmptyListView(Component):
    def __init__(self, filter_type: FilterType, is_creating: bool = False) -> None:
        super().__init__()
        self.filter_type = FilterType(filter_type)
        self.is_creating = is_creating

    @property
    def message(self) -> str:
        if self.is_creating:
            return CREATING_MESSAGE
        return EMPTY_LIST_MESSAGE[self.filter_type]

    @property
    def template(self) -> str:
        return self.message


class SortView(Component):
    def __init__(
        self,
        current_sort_type: SortType,
        on_sort_type_change: Callable[[SortType], Any],
        sort_types: Mapping[SortType, bool] = SORT_TYPE_ENABLED,
    ) -> None:
        super().__init__()
        self.current_sort_type = current_sort_type
        self.sort_types = dict(sort_types)
        self._handle_sort_type_change = on_sort_type_change

    @property
    def template(self) -> str:
        items = []
        for sort_type, enabled in self.sort_types.items():
            mark = "(*)" if sort_type is self.current_sort_type else "( )"
            label = _title(sort_type.value)
            items.append(f"{mark} {label}" if enabled else f"{mark} {label} [disabled]")
        return "Sort: " + "  ".join(items)

    def select(self, sort_type: SortType) -> Any:
        sort_type = SortType(sort_type)
        if not self.sort_types.get(sort_type, False):
            return None
        return self._handle_sort_type_change(sort_type)


class FilterView(Component):
    def __init__(
        self,
        filters: Mapping[FilterType, bool],
        current_filter_type: FilterType,
        on_filter_type_change: Callable[[FilterType], Any],
    ) -> None:
        super().__init__()
        self.filters = dict(filters)
        self.current_filter_type = current_filter_type
        self._handle_filter_type_change = on_filter_type_change

    @property
    def template(self) -> str:
        items = []
        for filter_type, enabled in self.filters.items():
            mark = "(*)" if filter_type is self.current_filter_type else "( )"
            label = _title(filter_type.value)
            items.append(f"{mark} {label}" if enabled else f"{mark} {label} [disabled]")
        return "Filter: " + "  ".join(items)

    def select(self, filter_type: FilterType) -> Any:
        filter_type = FilterType(filter_type)
        if not self.filters.get(filter_type, False):
            return None
        return self._handle_filter_type_change(filter_type)


class TripInfoView(Component):
    def __init__(self, summary) -> None:
        super().__init__()
        self.summary = summary

    @property
    def template(self) -> str:
        if self.summary is None:
            return ""
        return (
            f"{self.summary.title}\n"
            f"{self.summary.dates}\n"
            f"Total: €{self.summary.total_cost}"
        )


class PointView(StatefulComponent):
    """Collapsed row of one point."""

    def __init__(
        self,
        *,
        point: Point,
        destinations_model,
        offers_model,
        on_rollup_click: Callable[[], Any],
        on_favorite_click: Callable[[], Any],
    ) -> None:
        super().__init__({"is_favorite": point.is_favorite, "is_disabled": False})
        self.point = point
        self._destinations_model = destinations_model
        self._offers_model = offers_model
        self._handle_rollup_click = on_rollup_click
        self._handle_favorite_click = on_favorite_click

    @property
    def template(self) -> str:
        point = self.point
        destination = self._destinations_model.get_by_id(point.destination_id)
        name = destination.name if destination else ""
        offers = self._offers_model.get_selected(point.type, point.offer_ids)
        star = "★" if self.state["is_favorite"] else "☆"
        line = (
            f"{format_date(point.date_from, DateFormat.MONTH_DAY)}  "
            f"{_title(point.type.value)} {name}  "
            f"{format_date(point.date_from, DateFormat.HOURS_MINUTES)} — "
            f"{format_date(point.date_to, DateFormat.HOURS_MINUTES)} "
            f"({format_duration(point.date_from, point.date_to)})  "
            f"€{point.base_price}  {star}"
        )
        lines = [line]
        lines.extend(f"    + {offer.title} €{offer.price}" for offer in offers)
        return "\n".join(lines)

    def click_rollup(self) -> Any:
        if self.state["is_disabled"]:
            return None
        return self._handle_rollup_click()

    def click_favorite(self) -> Any:
        if self.state["is_disabled"]:
            return None
        return self._handle_favorite_click()


class PointEditView(StatefulComponent):
    """Edit form, used both for existing points and for the draft.

    The form works on its own copy of the point's fields; nothing reaches
    the point until :meth:`submit`.
    """

    def __init__(
        self,
        *,
        point: Point,
        destinations_model,
        offers_model,
        on_submit: Callable[[Point], Any],
        on_rollup_click: Callable[[], Any],
        on_delete_click: Callable[[], Any],
        is_new: bool = False,
    ) -> None:
        super().__init__(self._state_from_point(point))
        self.point = point
        self.is_new = is_new
        self._destinations_model = destinations_model
        self._offers_model = offers_model
        self._handle_submit = on_submit
        self._handle_rollup_click = on_rollup_click
        self._handle_delete_click = on_delete_click

    @staticmethod
    def _state_from_point(point: Point) -> Dict[str, Any]:
        return {
            "type": point.type,
            "destination_id": point.destination_id,
            "date_from": point.date_from,
            "date_to": point.date_to,
            "base_price": point.base_price,
            "offer_ids": tuple(point.offer_ids),
            "is_disabled": False,
            "is_saving": False,
            "is_deleting": False,
        }

    @property
    def template(self) -> str:
        state = self.state
        point_type: PointType = state["type"]
        destination = self._destinations_model.get_by_id(state["destination_id"])
        lines = [
            f"[{'new' if self.is_new else 'edit'}] {_title(point_type.value)} "
            f"{destination.name if destination else '—'}",
            f"  From: {format_date(state['date_from'], DateFormat.DATE_DISPLAY)}"
            f"  To: {format_date(state['date_to'], DateFormat.DATE_DISPLAY)}",
            f"  Price: €{state['base_price']}",
        ]
        offers = self._offers_model.get_offers_by_type(point_type)
        if offers:
            lines.append("  Offers:")
            for offer in offers:
                mark = "[x]" if offer.id in state["offer_ids"] else "[ ]"
                lines.append(f"    {mark} {offer.title} +€{offer.price}")
        if destination and destination.description:
            lines.append(f"  {destination.description}")
        if destination:
            for picture in destination.pictures:
                lines.append(f"  [img] {picture.src} {picture.description}".rstrip())

        save_label = "Saving..." if state["is_saving"] else "Save"
        if self.is_new:
            reset_label = "Cancel"
        else:
            reset_label = "Deleting..." if state["is_deleting"] else "Delete"
        buttons = f"  [{save_label}] [{reset_label}]"
        if state["is_disabled"]:
            buttons += " (disabled)"
        lines.append(buttons)
        return "\n".join(lines)

    def reset(self, point: Point) -> None:
        self.point = point
        self.state = self._state_from_point(point)

    def to_point(self) -> Point:
        """Return the point described by the form."""
        state = self.state
        valid = set(self._offers_model.valid_offer_ids(state["type"]))
        return replace_point(
            self.point,
            type=state["type"],
            destination_id=state["destination_id"],
            date_from=state["date_from"],
            date_to=state["date_to"],
            base_price=coerce_price(state["base_price"], OUTBOUND_PRICE_FLOOR),
            offer_ids=tuple(offer_id for offer_id in state["offer_ids"] if offer_id in valid),
        )

    # ── user intents ─────────────────────────────────────────

    def change_type(self, point_type: PointType | str) -> bool:
        if self.state["is_disabled"]:
            return False
        self.update_element(type=PointType(point_type), offer_ids=())
        return True

    def change_destination(self, name: str) -> bool:
        if self.state["is_disabled"]:
            return False
        destination = self._destinations_model.get_by_name(name)
        if destination is None:
            return False
        self.update_element(destination_id=destination.id)
        return True

    def change_price(self, value: Any) -> bool:
        if self.state["is_disabled"]:
            return False
        self.update_element(base_price=value)
        return True

    def change_dates(self, date_from: Any = None, date_to: Any = None) -> bool:
        if self.state["is_disabled"]:
            return False
        if date_from is not None:
            self.update_element(date_from=parse_datetime(date_from))
        if date_to is not None:
            self.update_element(date_to=parse_datetime(date_to))
        return True

    def toggle_offer(self, offer_id: str) -> bool:
        if self.state["is_disabled"]:
            return False
        if offer_id not in self._offers_model.valid_offer_ids(self.state["type"]):
            return False
        selected = list(self.state["offer_ids"])
        if offer_id in selected:
            selected.remove(offer_id)
        else:
            selected.append(offer_id)
        self.update_element(offer_ids=tuple(selected))
        return True

    def submit(self) -> Any:
        if self.state["is_disabled"]:
            return None
        return self._handle_submit(self.to_point())

    def rollup(self) -> Any:
        return self._handle_rollup_click()

    def delete(self) -> Any:
        if self.state["is_disabled"]:
            return None
        return self._handle_delete_click()


__all__ = [
    "BoardView",
    "LoadingView",
    "ErrorView",
    "EmptyListView",
    "SortView",
    "FilterView",
    "TripInfoView",
    "PointView",
    "PointEditView",
]
