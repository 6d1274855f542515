from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .errors import WriteFailure
from .models import SORT_TYPE_ENABLED, FilterType, Point, SortType, UpdateType, UserAction
from .new_point_presenter import NewPointPresenter
from .point_presenter import PointPresenter, PointState
from .projection import project
from .render import Container, KeyBindings, remove, render, replace
from .views import BoardView, EmptyListView, ErrorView, LoadingView, SortView

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BoardPresenter:
    """Owns the list of points on screen.

    Keeps one :class:`PointPresenter` per projected point plus the draft
    presenter, re-projects on every model notification and is the only place
    writes are sent to the trips model from.  It also grants edit
    exclusivity: at most one form (a point's or the draft) is open.
    """

    def __init__(
        self,
        *,
        container: Container,
        trips_model,
        destinations_model,
        offers_model,
        filter_model,
        sort_model,
        key_bindings: Optional[KeyBindings] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._container = container
        self._trips_model = trips_model
        self._destinations_model = destinations_model
        self._offers_model = offers_model
        self._filter_model = filter_model
        self._sort_model = sort_model
        self._key_bindings = key_bindings or KeyBindings()
        self._clock = clock

        self._point_presenters: Dict[str, PointPresenter] = {}
        self._board_component: Optional[BoardView] = None
        self._sort_component: Optional[SortView] = None
        self._empty_component: Optional[EmptyListView] = None
        self._loading_component: Optional[LoadingView] = None
        self._error_component: Optional[ErrorView] = None
        self._is_loading = True
        self._is_creating = False
        self._creating_listeners: List[Callable[[bool], None]] = []

        self._new_point_presenter = NewPointPresenter(
            destinations_model=destinations_model,
            offers_model=offers_model,
            key_bindings=self._key_bindings,
            on_data_change=self.handle_view_action,
            on_destroy=self._handle_new_point_destroy,
        )

        for model in (destinations_model, offers_model, trips_model, filter_model, sort_model):
            model.add_observer(self.handle_model_event)

    # ── public surface ───────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_creating(self) -> bool:
        return self._is_creating

    @property
    def key_bindings(self) -> KeyBindings:
        return self._key_bindings

    @property
    def new_point_presenter(self) -> NewPointPresenter:
        return self._new_point_presenter

    @property
    def sort_component(self) -> Optional[SortView]:
        return self._sort_component

    @property
    def empty_component(self) -> Optional[EmptyListView]:
        return self._empty_component

    @property
    def point_presenters(self) -> List[PointPresenter]:
        """Presenters in on-screen order."""
        return [
            self._point_presenters[point.id]
            for point in self.get_points()
            if point.id in self._point_presenters
        ]

    def point_presenter(self, point_id: str) -> Optional[PointPresenter]:
        return self._point_presenters.get(point_id)

    def add_creating_listener(self, listener: Callable[[bool], None]) -> None:
        self._creating_listeners.append(listener)

    def now(self) -> datetime:
        return self._clock()

    def get_points(self) -> List[Point]:
        return project(
            self._trips_model.points,
            self._filter_model.filter_type,
            self._sort_model.sort_type,
            now=self.now(),
        )

    def init(self) -> None:
        if self._is_loading:
            self._clear_board()
            self._render_loading()
            return

        remove(self._loading_component)
        self._loading_component = None

        if self._has_init_error():
            self._clear_board()
            self._render_error()
            return

        remove(self._error_component)
        self._error_component = None
        self._render_board()

    def create_point(self) -> bool:
        """Open the draft form; refused while any point is not in its row."""
        if self._is_creating or self._is_loading or self._has_init_error():
            return False
        if any(p.state is not PointState.VIEWING for p in self._point_presenters.values()):
            logger.warning("New point rejected: another point is being edited")
            return False

        self._filter_model.set(FilterType.EVERYTHING, silent=True)
        self._sort_model.set(SortType.DAY, silent=True)
        self._is_creating = True
        self._render_board()
        self._new_point_presenter.set_container(self._board_component)
        self._new_point_presenter.init(self.now())
        self._notify_creating()
        return True

    def request_exclusive_edit(self, point_id: str) -> bool:
        """Close every other form so *point_id* can open its own."""
        if self._new_point_presenter.is_open:
            logger.warning("Edit of %s rejected: a new point is being created", point_id)
            return False
        others = [p for pid, p in self._point_presenters.items() if pid != point_id]
        if any(p.is_busy for p in others):
            logger.warning("Edit of %s rejected: another point is being saved", point_id)
            return False
        for presenter in others:
            presenter.reset_view()
        return True

    def reset_sort_type(self, silent: bool = False) -> None:
        self._sort_model.set(SortType.DAY, silent)

    def handle_sort_type_change(self, sort_type: SortType) -> bool:
        sort_type = SortType(sort_type)
        if sort_type is self._sort_model.sort_type:
            return False
        if not SORT_TYPE_ENABLED[sort_type]:
            return False
        self._sort_model.set(sort_type)
        return True

    # ── callbacks ────────────────────────────────────────────

    def handle_view_action(
        self, action: UserAction, update_type: UpdateType, update: Point
    ) -> bool:
        """Send a user's write to the trips model; ``False`` if it failed."""
        if action is UserAction.ADD_POINT:
            return self._add_point(update_type, update)
        if action is UserAction.UPDATE_POINT:
            return self._update_point(update_type, update)
        if action is UserAction.DELETE_POINT:
            return self._delete_point(update_type, update)
        raise ValueError(f"Unknown action type: {action}")

    def handle_model_event(self, update_type: UpdateType, data: Any = None) -> None:
        if update_type is UpdateType.PATCH:
            presenter = self._point_presenters.get(getattr(data, "id", None))
            if presenter is not None:
                presenter.init(data)
        elif update_type in (UpdateType.MINOR, UpdateType.MAJOR):
            if self._is_loading or self._has_init_error():
                return
            self._render_board()
        elif update_type is UpdateType.INIT:
            if not self._trips_model.is_loaded:
                return
            self._is_loading = False
            self.init()
        elif update_type is UpdateType.ERROR:
            self._is_loading = False
            self.init()
        else:
            raise ValueError(f"Unknown update type: {update_type}")

    # ── writes ───────────────────────────────────────────────

    def _add_point(self, update_type: UpdateType, draft: Point) -> bool:
        self._new_point_presenter.set_saving()
        try:
            self._trips_model.create(draft, update_type)
        except WriteFailure as exc:
            logger.warning("%s", exc)
            self._new_point_presenter.set_aborting()
            return False
        self._new_point_presenter.set_saved()
        return True

    def _update_point(self, update_type: UpdateType, update: Point) -> bool:
        presenter = self._point_presenters.get(update.id)
        if presenter is not None:
            presenter.set_saving(update)
        try:
            self._trips_model.update(update, update_type)
        except WriteFailure as exc:
            logger.warning("%s", exc)
            if presenter is not None:
                presenter.set_aborting()
            return False
        return True

    def _delete_point(self, update_type: UpdateType, point: Point) -> bool:
        presenter = self._point_presenters.get(point.id)
        if presenter is not None:
            presenter.set_deleting()
        try:
            self._trips_model.delete(point.id, update_type)
        except WriteFailure as exc:
            logger.warning("%s", exc)
            if presenter is not None:
                presenter.set_aborting()
            return False
        return True

    # ── rendering ────────────────────────────────────────────

    def _has_init_error(self) -> bool:
        return (
            self._destinations_model.has_error
            or self._offers_model.has_error
            or self._trips_model.has_error
        )

    def _render_board(self) -> None:
        self._render_sort()
        if self._board_component is None:
            self._board_component = BoardView()
            render(self._board_component, self._container)
        self._reconcile(self.get_points())

    def _reconcile(self, points: List[Point]) -> None:
        ids = [point.id for point in points]
        for point_id in list(self._point_presenters):
            if point_id not in ids:
                self._point_presenters.pop(point_id).destroy()

        for point in points:
            presenter = self._point_presenters.get(point.id)
            if presenter is None:
                presenter = PointPresenter(
                    container=self._board_component.inner,
                    destinations_model=self._destinations_model,
                    offers_model=self._offers_model,
                    key_bindings=self._key_bindings,
                    coordinator=self,
                    on_data_change=self.handle_view_action,
                )
                self._point_presenters[point.id] = presenter
            presenter.init(point)

        self._board_component.inner.reorder(
            self._point_presenters[point_id].component for point_id in ids
        )
        self._render_empty_list(points)

    def _render_sort(self) -> None:
        previous = self._sort_component
        self._sort_component = SortView(
            current_sort_type=self._sort_model.sort_type,
            on_sort_type_change=self.handle_sort_type_change,
        )
        if previous is None:
            render(self._sort_component, self._container)
            return
        replace(self._sort_component, previous)
        remove(previous)

    def _render_empty_list(self, points: List[Point]) -> None:
        remove(self._empty_component)
        self._empty_component = None
        if points or self._board_component is None:
            return
        self._empty_component = EmptyListView(
            self._filter_model.filter_type, is_creating=self._is_creating
        )
        render(self._empty_component, self._board_component)

    def _render_loading(self) -> None:
        if self._loading_component is None:
            self._loading_component = LoadingView()
            render(self._loading_component, self._container)

    def _render_error(self) -> None:
        if self._error_component is None:
            self._error_component = ErrorView()
            render(self._error_component, self._container)

    def _clear_board(self) -> None:
        for presenter in self._point_presenters.values():
            presenter.destroy()
        self._point_presenters.clear()
        if self._new_point_presenter.is_open:
            self._new_point_presenter.destroy()
        for component in (self._sort_component, self._empty_component, self._board_component):
            remove(component)
        self._sort_component = None
        self._empty_component = None
        self._board_component = None

    def _handle_new_point_destroy(self) -> None:
        self._is_creating = False
        if self._board_component is not None:
            self._render_empty_list(self.get_points())
        self._notify_creating()

    def _notify_creating(self) -> None:
        for listener in list(self._creating_listeners):
            listener(self._is_creating)


__all__ = ["BoardPresenter", "utc_now"]
