from datetime import datetime, timezone

from tripboard.adapter import (
    coerce_price,
    destination_to_client,
    format_datetime,
    offer_group_to_client,
    parse_datetime,
    point_to_client,
    point_to_server,
)
from tripboard.models import Point, PointType


def make_wire_point(**overrides):
    item = {
        "id": "7",
        "base_price": 1100,
        "date_from": "2019-07-10T22:55:56.845Z",
        "date_to": "2019-07-11T11:22:13.375Z",
        "destination": "bfa5cb75",
        "is_favorite": True,
        "offers": ["b4c3e4e6"],
        "type": "taxi",
    }
    item.update(overrides)
    return item


def test_point_to_client_maps_snake_case():
    point = point_to_client(make_wire_point())
    assert point.id == "7"
    assert point.base_price == 1100
    assert point.destination_id == "bfa5cb75"
    assert point.is_favorite is True
    assert point.offer_ids == ("b4c3e4e6",)
    assert point.type is PointType.TAXI
    assert point.date_from == datetime(2019, 7, 10, 22, 55, 56, 845000, tzinfo=timezone.utc)


def test_point_to_client_defaults():
    item = make_wire_point(base_price="oops", type=None)
    del item["offers"]
    point = point_to_client(item)
    assert point.base_price == 0
    assert point.offer_ids == ()
    assert point.type is PointType.FLIGHT


def test_point_to_server_price_floor():
    point = Point(
        type=PointType.BUS,
        destination_id="d1",
        date_from=datetime(2024, 1, 1, 10, tzinfo=timezone.utc),
        date_to=datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
        base_price="abc",
    )
    payload = point_to_server(point)
    assert payload["base_price"] == 1
    assert "id" not in payload

    assert point_to_server(Point(**{**_fields(point), "base_price": float("nan")}))["base_price"] == 1
    assert point_to_server(Point(**{**_fields(point), "base_price": -5}))["base_price"] == 1
    assert point_to_server(Point(**{**_fields(point), "base_price": "250"}))["base_price"] == 250


def test_point_to_server_fixes_date_order():
    start = datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)
    point = Point(
        id="4",
        type=PointType.SHIP,
        destination_id="d2",
        date_from=start,
        date_to=start,
        base_price=10,
        is_favorite=True,
        offer_ids=("a", "b"),
    )
    payload = point_to_server(point)
    assert payload["date_from"] == "2024-03-05T08:30:00.000Z"
    assert payload["date_to"] == "2024-03-05T09:30:00.000Z"
    assert payload["offers"] == ["a", "b"]
    assert payload["is_favorite"] is True
    assert payload["type"] == "ship"
    assert payload["id"] == "4"


def test_parse_and_format_datetime():
    naive = parse_datetime("2024-05-01T10:00:00")
    assert naive.tzinfo is timezone.utc
    assert format_datetime(naive) == "2024-05-01T10:00:00.000Z"


def test_coerce_price():
    assert coerce_price(True, 0) == 0
    assert coerce_price("12", 0) == 12
    assert coerce_price(3.7, 1) == 3
    assert coerce_price(None, 1) == 1


def test_reference_adapters():
    destination = destination_to_client(
        {
            "id": "d1",
            "name": "Chamonix",
            "description": "Alps",
            "pictures": [{"src": "http://pic/1", "description": "Peak"}],
        }
    )
    assert destination.name == "Chamonix"
    assert destination.pictures[0].src == "http://pic/1"

    group = offer_group_to_client(
        {"type": "taxi", "offers": [{"id": "o1", "title": "Upgrade", "price": 120}]}
    )
    assert group.type is PointType.TAXI
    assert group.offers[0].price == 120


def _fields(point):
    return {
        "type": point.type,
        "destination_id": point.destination_id,
        "date_from": point.date_from,
        "date_to": point.date_to,
        "base_price": point.base_price,
    }
