"""Minimal text rendering host.

Components produce their markup from ``template``; containers keep them in
order.  ``render`` attaches a component exactly once, ``replace`` swaps an
attached component for a detached one and ``remove`` detaches and disposes
(removing ``None`` or an already removed component does nothing).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .errors import PreconditionViolation

logger = logging.getLogger(__name__)


class RenderPosition(str, Enum):
    AFTERBEGIN = "afterbegin"
    BEFOREEND = "beforeend"


class Component:
    """Base view; subclasses implement :attr:`template`."""

    def __init__(self) -> None:
        self.parent: Optional[Container] = None
        self.is_removed = False
        self.shake_count = 0

    @property
    def template(self) -> str:
        raise NotImplementedError("Abstract property not implemented: template")

    @property
    def element(self) -> str:
        return self.template

    @property
    def is_attached(self) -> bool:
        return self.parent is not None

    def shake(self, callback: Optional[Callable[[], None]] = None) -> None:
        """Flag a failed action on this component, then run *callback*."""
        self.shake_count += 1
        logger.debug("Shaking %s", type(self).__name__)
        if callback is not None:
            callback()

    def remove_element(self) -> None:
        self.is_removed = True


class StatefulComponent(Component):
    """Component whose markup depends on a mutable ``state`` mapping."""

    def __init__(self, state: Optional[Dict[str, Any]] = None) -> None:
        super().__init__()
        self.state: Dict[str, Any] = dict(state or {})

    def update_element(self, **update: Any) -> None:
        if not update:
            return
        self.state.update(update)


class Container:
    """Ordered list of attached components."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.children: List[Component] = []

    def __contains__(self, component: Component) -> bool:
        return component in self.children

    def __len__(self) -> int:
        return len(self.children)

    @property
    def text(self) -> str:
        return "\n".join(child.element for child in self.children if child.element)

    def reorder(self, components: Iterable[Component]) -> None:
        """Put *components* in the given order after every other child."""
        ordered = [c for c in components if c in self.children]
        rest = [c for c in self.children if c not in ordered]
        self.children = rest + ordered


class ContainerComponent(Component):
    """Component that is itself a container (e.g. the points list)."""

    def __init__(self, name: str = "") -> None:
        super().__init__()
        self.inner = Container(name)

    @property
    def template(self) -> str:
        return self.inner.text


def render(
    component: Component,
    container: Container | ContainerComponent,
    place: RenderPosition = RenderPosition.BEFOREEND,
) -> None:
    if isinstance(container, ContainerComponent):
        container = container.inner
    if component.is_attached:
        raise PreconditionViolation(f"{type(component).__name__} is already rendered")
    if component.is_removed:
        raise PreconditionViolation(f"{type(component).__name__} was removed")

    logger.debug("Render %s into %s", type(component).__name__, container.name)
    if place is RenderPosition.AFTERBEGIN:
        container.children.insert(0, component)
    else:
        container.children.append(component)
    component.parent = container


def replace(new_component: Component, old_component: Component) -> None:
    parent = old_component.parent
    if parent is None:
        raise PreconditionViolation("Parent element doesn't exist")
    if new_component.is_attached:
        raise PreconditionViolation(f"{type(new_component).__name__} is already rendered")

    logger.debug(
        "Replace %s with %s", type(old_component).__name__, type(new_component).__name__
    )
    index = parent.children.index(old_component)
    parent.children[index] = new_component
    new_component.parent = parent
    old_component.parent = None


def remove(component: Optional[Component]) -> None:
    if component is None or component.is_removed:
        return
    if component.parent is not None:
        component.parent.children.remove(component)
        component.parent = None
    component.remove_element()


KeyHandler = Callable[[str], None]


class KeyBindings:
    """Global keydown handlers, registered while a form is open."""

    def __init__(self) -> None:
        self._handlers: List[KeyHandler] = []

    def __contains__(self, handler: KeyHandler) -> bool:
        return handler in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def add(self, handler: KeyHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def remove(self, handler: KeyHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def press(self, key: str) -> None:
        for handler in list(self._handlers):
            handler(key)


__all__ = [
    "RenderPosition",
    "Component",
    "StatefulComponent",
    "Container",
    "ContainerComponent",
    "render",
    "replace",
    "remove",
    "KeyBindings",
]
