"""Data models used throughout the project."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple

ONE_HOUR = timedelta(hours=1)


class PointType(str, Enum):
    TAXI = "taxi"
    BUS = "bus"
    TRAIN = "train"
    SHIP = "ship"
    DRIVE = "drive"
    FLIGHT = "flight"
    CHECK_IN = "check-in"
    SIGHTSEEING = "sightseeing"
    RESTAURANT = "restaurant"


DEFAULT_POINT_TYPE = PointType.FLIGHT


class FilterType(str, Enum):
    EVERYTHING = "everything"
    FUTURE = "future"
    PRESENT = "present"
    PAST = "past"


class SortType(str, Enum):
    DAY = "day"
    EVENT = "event"
    TIME = "time"
    PRICE = "price"
    OFFER = "offer"


SORT_TYPE_ENABLED = {
    SortType.DAY: True,
    SortType.EVENT: False,
    SortType.TIME: True,
    SortType.PRICE: True,
    SortType.OFFER: False,
}

EMPTY_LIST_MESSAGE = {
    FilterType.EVERYTHING: "Click New Event to create your first point",
    FilterType.PAST: "There are no past events now",
    FilterType.PRESENT: "There are no present events now",
    FilterType.FUTURE: "There are no future events now",
}

CREATING_MESSAGE = "Fill in the form to create your first point"


class UpdateType(str, Enum):
    """How much of the board a subscriber has to rebuild."""

    PATCH = "PATCH"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    INIT = "INIT"
    ERROR = "ERROR"


class UserAction(str, Enum):
    ADD_POINT = "ADD_POINT"
    UPDATE_POINT = "UPDATE_POINT"
    DELETE_POINT = "DELETE_POINT"


@dataclass(frozen=True, slots=True)
class Picture:
    src: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class Destination:
    id: str
    name: str
    description: str = ""
    pictures: Tuple[Picture, ...] = ()


@dataclass(frozen=True, slots=True)
class Offer:
    id: str
    title: str
    price: int


@dataclass(frozen=True, slots=True)
class OfferGroup:
    type: PointType
    offers: Tuple[Offer, ...] = ()


@dataclass(frozen=True, slots=True)
class Point:
    """A single trip leg.

    ``id`` is ``None`` for a draft until the service assigns one.  Points are
    never patched in place; use :func:`dataclasses.replace` to derive an
    updated copy.
    """

    type: PointType
    destination_id: Optional[str]
    date_from: datetime
    date_to: datetime
    base_price: int = 0
    is_favorite: bool = False
    offer_ids: Tuple[str, ...] = field(default_factory=tuple)
    id: Optional[str] = None

    @property
    def is_draft(self) -> bool:
        return self.id is None

    @property
    def duration(self) -> timedelta:
        return self.date_to - self.date_from


def make_draft(now: datetime, destination_id: Optional[str] = None) -> Point:
    """Return a blank point for the "new event" form starting at *now*."""
    start = now.replace(second=0, microsecond=0)
    return Point(
        type=DEFAULT_POINT_TYPE,
        destination_id=destination_id,
        date_from=start,
        date_to=start + ONE_HOUR,
    )


__all__ = [
    "PointType",
    "DEFAULT_POINT_TYPE",
    "FilterType",
    "SortType",
    "SORT_TYPE_ENABLED",
    "EMPTY_LIST_MESSAGE",
    "CREATING_MESSAGE",
    "UpdateType",
    "UserAction",
    "Picture",
    "Destination",
    "Offer",
    "OfferGroup",
    "Point",
    "ONE_HOUR",
    "make_draft",
]
