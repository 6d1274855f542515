from dataclasses import replace
from datetime import datetime, timezone

import pytest

from tripboard.app import build_app
from tripboard.errors import TripApiError
from tripboard.models import Destination, Offer, OfferGroup, Picture, Point, PointType

NOW = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def make_points():
    return [
        Point(
            id="1",
            type=PointType.TAXI,
            destination_id="d1",
            date_from=utc(2024, 1, 10, 9, 0),
            date_to=utc(2024, 1, 10, 11, 0),
            base_price=300,
            offer_ids=("taxi-1",),
        ),
        Point(
            id="2",
            type=PointType.FLIGHT,
            destination_id="d2",
            date_from=utc(2024, 2, 1, 10, 0),
            date_to=utc(2024, 2, 1, 13, 0),
            base_price=100,
        ),
        Point(
            id="3",
            type=PointType.CHECK_IN,
            destination_id="d3",
            date_from=utc(2024, 1, 25, 8, 0),
            date_to=utc(2024, 1, 26, 8, 0),
            base_price=100,
        ),
    ]


def make_destinations():
    return [
        Destination(
            id="d1",
            name="Amsterdam",
            description="Canals and bikes",
            pictures=(Picture(src="http://img/1.jpg", description="Canal"),),
        ),
        Destination(id="d2", name="Geneva", description="Lake city"),
        Destination(id="d3", name="Chamonix"),
    ]


def make_offers():
    return [
        OfferGroup(
            type=PointType.TAXI,
            offers=(
                Offer(id="taxi-1", title="Upgrade to business", price=120),
                Offer(id="taxi-2", title="Choose the radio", price=30),
            ),
        ),
        OfferGroup(
            type=PointType.FLIGHT,
            offers=(
                Offer(id="flight-1", title="Add luggage", price=50),
                Offer(id="flight-2", title="Choose seats", price=5),
            ),
        ),
    ]


class FakeGateway:
    """In-memory trip service; names in ``fail`` raise TripApiError."""

    def __init__(self, points=None, destinations=None, offers=None):
        self.points = list(make_points() if points is None else points)
        self.destinations = list(make_destinations() if destinations is None else destinations)
        self.offers = list(make_offers() if offers is None else offers)
        self.fail = set()
        self.calls = []
        self.hooks = {}
        self._next_id = 100

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        hook = self.hooks.get(name)
        if hook is not None:
            hook(*args)
        if name in self.fail:
            raise TripApiError(f"{name} failed", status=500)

    def fetch_points(self):
        self._call("fetch_points")
        return list(self.points)

    def fetch_destinations(self):
        self._call("fetch_destinations")
        return list(self.destinations)

    def fetch_offers(self):
        self._call("fetch_offers")
        return list(self.offers)

    def create_point(self, draft):
        self._call("create_point", draft)
        self._next_id += 1
        created = replace(draft, id=str(self._next_id))
        self.points.insert(0, created)
        return created

    def update_point(self, point):
        self._call("update_point", point)
        return point

    def delete_point(self, point_id):
        self._call("delete_point", point_id)
        self.points = [p for p in self.points if p.id != point_id]


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(gateway):
    board_app = build_app(gateway, clock=lambda: NOW)
    assert board_app.load()
    return board_app
