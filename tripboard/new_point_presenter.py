from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .models import Point, UpdateType, UserAction, make_draft
from .point_presenter import ESCAPE_KEYS, DataChangeHandler, PointState
from .render import Container, ContainerComponent, KeyBindings, RenderPosition, remove, render
from .views import PointEditView

logger = logging.getLogger(__name__)


class NewPointPresenter:
    """The "new event" form shown at the top of the list."""

    def __init__(
        self,
        *,
        destinations_model,
        offers_model,
        key_bindings: KeyBindings,
        on_data_change: DataChangeHandler,
        on_destroy: Callable[[], None],
        container: Container | ContainerComponent | None = None,
    ) -> None:
        self._container = container
        self._destinations_model = destinations_model
        self._offers_model = offers_model
        self._key_bindings = key_bindings
        self._handle_data_change = on_data_change
        self._handle_destroy = on_destroy

        self._edit_component: Optional[PointEditView] = None
        self._state: Optional[PointState] = None

    @property
    def is_open(self) -> bool:
        return self._edit_component is not None

    @property
    def state(self) -> Optional[PointState]:
        return self._state

    @property
    def form(self) -> Optional[PointEditView]:
        return self._edit_component

    def set_container(self, container: Container | ContainerComponent) -> None:
        self._container = container

    def init(self, now: datetime) -> None:
        if self._edit_component is not None:
            return

        destinations = self._destinations_model.destinations
        draft = make_draft(now, destinations[0].id if destinations else None)
        self._edit_component = PointEditView(
            point=draft,
            destinations_model=self._destinations_model,
            offers_model=self._offers_model,
            on_submit=self.submit,
            on_rollup_click=self.destroy,
            on_delete_click=self.destroy,
            is_new=True,
        )
        render(self._edit_component, self._container, RenderPosition.AFTERBEGIN)
        self._state = PointState.EDITING
        self._key_bindings.add(self._handle_key_down)

    def destroy(self) -> bool:
        if self._edit_component is None:
            return False
        if self._state is PointState.SAVING:
            logger.info("Draft is being saved, close ignored")
            return False

        remove(self._edit_component)
        self._edit_component = None
        self._state = None
        self._key_bindings.remove(self._handle_key_down)
        self._handle_destroy()
        return True

    def submit(self, draft: Point) -> bool:
        if self._state is not PointState.EDITING:
            return False
        return self._handle_data_change(UserAction.ADD_POINT, UpdateType.MINOR, draft)

    def set_saving(self) -> None:
        if self._edit_component is None:
            return
        self._state = PointState.SAVING
        self._edit_component.update_element(is_saving=True, is_disabled=True)

    def set_aborting(self) -> None:
        if self._edit_component is None or self._state is not PointState.SAVING:
            return
        self._state = PointState.ABORTING
        self._edit_component.shake(self._reset_after_abort)

    def set_saved(self) -> None:
        """Close the form after the service accepted the draft."""
        if self._edit_component is None:
            return
        self._state = PointState.EDITING
        self.destroy()

    def _reset_after_abort(self) -> None:
        self._state = PointState.EDITING
        self._edit_component.update_element(
            is_disabled=False, is_saving=False, is_deleting=False
        )

    def _handle_key_down(self, key: str) -> None:
        if key in ESCAPE_KEYS:
            self.destroy()


__all__ = ["NewPointPresenter"]
