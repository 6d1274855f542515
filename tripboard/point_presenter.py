from __future__ import annotations

import logging
from dataclasses import replace as replace_point
from enum import Enum
from typing import Any, Callable, Optional

from .models import Point, UpdateType, UserAction
from .render import Component, Container, KeyBindings, remove, render, replace
from .views import PointEditView, PointView

logger = logging.getLogger(__name__)

ESCAPE_KEYS = ("Escape", "Esc")

DataChangeHandler = Callable[[UserAction, UpdateType, Point], bool]


class PointState(str, Enum):
    VIEWING = "VIEWING"
    EDITING = "EDITING"
    SAVING = "SAVING"
    DELETING = "DELETING"
    ABORTING = "ABORTING"


class PointPresenter:
    """Drives one point between its row and its edit form.

    Exactly one of the two views is attached at a time.  Writes are handed to
    ``on_data_change``; the board then calls :meth:`set_saving`,
    :meth:`set_deleting` and :meth:`set_aborting` to reflect progress, and
    :meth:`init` once the committed point changes.  After :meth:`destroy`
    every one of those calls is ignored.
    """

    def __init__(
        self,
        *,
        container: Container,
        destinations_model,
        offers_model,
        key_bindings: KeyBindings,
        coordinator,
        on_data_change: DataChangeHandler,
    ) -> None:
        self._container = container
        self._destinations_model = destinations_model
        self._offers_model = offers_model
        self._key_bindings = key_bindings
        self._coordinator = coordinator
        self._handle_data_change = on_data_change

        self._point: Optional[Point] = None
        self._point_component: Optional[PointView] = None
        self._edit_component: Optional[PointEditView] = None
        self._component: Optional[Component] = None
        self._state = PointState.VIEWING
        self._return_state = PointState.VIEWING
        self._destroyed = False

    @property
    def point(self) -> Optional[Point]:
        return self._point

    @property
    def state(self) -> PointState:
        return self._state

    @property
    def component(self) -> Optional[Component]:
        return self._component

    @property
    def point_component(self) -> Optional[PointView]:
        return self._point_component

    @property
    def form(self) -> Optional[PointEditView]:
        """The open edit form, or ``None`` in any state without one."""
        if self._component is self._edit_component:
            return self._edit_component
        return None

    @property
    def is_busy(self) -> bool:
        return self._state in (PointState.SAVING, PointState.DELETING, PointState.ABORTING)

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def init(self, point: Point) -> None:
        """Show *point*; an open form stays open, anything else goes back to the row."""
        if self._destroyed:
            return
        previous, self._point = self._point, point
        if self._state is PointState.EDITING:
            if point != previous:
                self._show(self._create_edit_component())
            return
        self._state = PointState.VIEWING
        self._key_bindings.remove(self._handle_key_down)
        self._show(self._create_point_component())

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._key_bindings.remove(self._handle_key_down)
        remove(self._point_component)
        remove(self._edit_component)
        self._component = None
        self._state = PointState.VIEWING

    def reset_view(self) -> None:
        """Close the form, dropping unsaved changes."""
        if self._destroyed or self._state is not PointState.EDITING:
            return
        self._replace_form_to_point()

    # ── user intents ─────────────────────────────────────────

    def start_edit(self) -> bool:
        if self._destroyed or self._state is not PointState.VIEWING:
            return False
        if not self._coordinator.request_exclusive_edit(self._point.id):
            logger.info("Edit of point %s rejected", self._point.id)
            return False
        self._state = PointState.EDITING
        self._show(self._create_edit_component())
        self._key_bindings.add(self._handle_key_down)
        return True

    def close_edit(self) -> bool:
        if self._destroyed or self._state is not PointState.EDITING:
            return False
        self._replace_form_to_point()
        return True

    def toggle_favorite(self) -> bool:
        if self._destroyed or self._state is not PointState.VIEWING:
            return False
        update = replace_point(self._point, is_favorite=not self._point.is_favorite)
        return self._handle_data_change(UserAction.UPDATE_POINT, UpdateType.PATCH, update)

    def submit(self, update: Point) -> bool:
        if self._destroyed or self._state is not PointState.EDITING:
            return False
        if update == self._point:
            self._replace_form_to_point()
            return True
        return self._handle_data_change(UserAction.UPDATE_POINT, UpdateType.MINOR, update)

    def delete(self) -> bool:
        if self._destroyed or self._state not in (PointState.VIEWING, PointState.EDITING):
            return False
        return self._handle_data_change(UserAction.DELETE_POINT, UpdateType.MINOR, self._point)

    # ── progress reported by the board ───────────────────────

    def set_saving(self, pending: Optional[Point] = None) -> None:
        if self._destroyed:
            return
        self._return_state = self._state
        self._state = PointState.SAVING
        if self._component is self._edit_component:
            self._edit_component.update_element(is_saving=True, is_disabled=True)
        elif pending is not None:
            self._point_component.update_element(
                is_favorite=pending.is_favorite, is_disabled=True
            )
        else:
            self._point_component.update_element(is_disabled=True)

    def set_deleting(self) -> None:
        if self._destroyed:
            return
        self._return_state = self._state
        self._state = PointState.DELETING
        if self._component is self._edit_component:
            self._edit_component.update_element(is_deleting=True, is_disabled=True)
        else:
            self._point_component.update_element(is_disabled=True)

    def set_aborting(self) -> None:
        if self._destroyed:
            return
        if self._state not in (PointState.SAVING, PointState.DELETING):
            logger.warning("Abort of point %s in state %s ignored", self._point.id, self._state)
            return
        self._state = PointState.ABORTING
        self._component.shake(self._reset_after_abort)

    def _reset_after_abort(self) -> None:
        if self._destroyed:
            return
        self._state = self._return_state
        if self._component is self._edit_component:
            self._edit_component.update_element(
                is_disabled=False, is_saving=False, is_deleting=False
            )
        else:
            self._point_component.update_element(
                is_favorite=self._point.is_favorite, is_disabled=False
            )

    # ── internals ────────────────────────────────────────────

    def _create_point_component(self) -> PointView:
        self._point_component = PointView(
            point=self._point,
            destinations_model=self._destinations_model,
            offers_model=self._offers_model,
            on_rollup_click=self.start_edit,
            on_favorite_click=self.toggle_favorite,
        )
        return self._point_component

    def _create_edit_component(self) -> PointEditView:
        self._edit_component = PointEditView(
            point=self._point,
            destinations_model=self._destinations_model,
            offers_model=self._offers_model,
            on_submit=self.submit,
            on_rollup_click=self.close_edit,
            on_delete_click=self.delete,
        )
        return self._edit_component

    def _show(self, component: Component) -> None:
        previous = self._component
        if previous is None or not previous.is_attached:
            render(component, self._container)
        else:
            replace(component, previous)
            remove(previous)
        self._component = component

    def _replace_form_to_point(self) -> None:
        self._state = PointState.VIEWING
        self._key_bindings.remove(self._handle_key_down)
        self._show(self._create_point_component())

    def _handle_key_down(self, key: str) -> None:
        if key in ESCAPE_KEYS and self._state is PointState.EDITING:
            self._replace_form_to_point()


__all__ = ["PointPresenter", "PointState", "ESCAPE_KEYS"]
