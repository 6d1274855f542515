from __future__ import annotations

import logging
from typing import Any, Optional

from .models import FilterType, UpdateType
from .projection import generate_filters
from .render import Container, remove, render, replace
from .views import FilterView

logger = logging.getLogger(__name__)


class FilterPresenter:
    """Filter controls above the board."""

    def __init__(self, *, container: Container, filter_model, trips_model, board_presenter) -> None:
        self._container = container
        self._filter_model = filter_model
        self._trips_model = trips_model
        self._board_presenter = board_presenter
        self._filter_component: Optional[FilterView] = None

        self._filter_model.add_observer(self._handle_model_event)
        self._trips_model.add_observer(self._handle_model_event)
        self._board_presenter.add_creating_listener(self._handle_creating_change)

    @property
    def component(self) -> Optional[FilterView]:
        return self._filter_component

    def init(self) -> None:
        filters = generate_filters(self._trips_model.points, self._board_presenter.now())
        previous = self._filter_component
        self._filter_component = FilterView(
            filters=filters,
            current_filter_type=self._filter_model.filter_type,
            on_filter_type_change=self.handle_filter_type_change,
        )
        if previous is None:
            render(self._filter_component, self._container)
            return
        replace(self._filter_component, previous)
        remove(previous)

    def handle_filter_type_change(self, filter_type: FilterType) -> bool:
        filter_type = FilterType(filter_type)
        if self._board_presenter.is_creating:
            logger.info("Filter change to %s ignored while creating", filter_type.value)
            return False
        if self._filter_model.filter_type is filter_type:
            return False
        filters = generate_filters(self._trips_model.points, self._board_presenter.now())
        if not filters[filter_type]:
            logger.info("Filter %s has no points, ignored", filter_type.value)
            return False
        self._board_presenter.reset_sort_type(silent=True)
        self._filter_model.set(filter_type)
        return True

    def _handle_model_event(self, update_type: UpdateType, data: Any = None) -> None:
        self.init()

    def _handle_creating_change(self, is_creating: bool) -> None:
        self.init()


__all__ = ["FilterPresenter"]
