from conftest import NOW, FakeGateway, make_destinations, make_points, utc

from tripboard.app import build_app
from tripboard.date_utils import DateFormat, format_date, format_duration
from tripboard.models import Destination, Point, PointType
from tripboard.trip_info import route_title


def test_route_title():
    assert route_title(["A", "B", "C"]) == "A — B — C"
    assert route_title(["A", "B", "C", "D"]) == "A — ... — D"
    assert route_title([]) == ""


def test_header_summary(app):
    summary = app.trip_info.component.summary
    assert summary.title == "Amsterdam — Chamonix — Geneva"
    assert summary.dates == "10 JAN — 01 FEB"
    assert summary.total_cost == 620
    assert "Total: €620" in app.header.text


def test_header_follows_changes(app):
    app.board.point_presenter("1").delete()
    assert app.trip_info.component.summary.total_cost == 200
    assert app.trip_info.component.summary.title == "Chamonix — Geneva"


def test_header_empty_without_points():
    app = build_app(FakeGateway(points=[]), clock=lambda: NOW)
    app.load()
    assert app.trip_info.component.summary is None
    assert app.header.text == ""


def test_long_route_is_shortened():
    destinations = make_destinations() + [Destination(id="d4", name="Zermatt")]
    points = make_points() + [
        Point(
            id="4",
            type=PointType.TRAIN,
            destination_id="d4",
            date_from=utc(2024, 2, 5, 9, 0),
            date_to=utc(2024, 2, 5, 11, 0),
            base_price=50,
        )
    ]
    app = build_app(FakeGateway(points=points, destinations=destinations), clock=lambda: NOW)
    app.load()
    assert app.trip_info.component.summary.title == "Amsterdam — ... — Zermatt"


def test_date_helpers():
    start = utc(2024, 3, 1, 8, 0)
    assert format_date(start, DateFormat.MONTH_DAY) == "MAR 01"
    assert format_date(start, DateFormat.DATE_DISPLAY) == "01/03/24 08:00"
    assert format_date(None, DateFormat.FULL) == ""
    assert format_duration(start, utc(2024, 3, 1, 8, 30)) == "30M"
    assert format_duration(start, utc(2024, 3, 1, 10, 5)) == "02H 05M"
    assert format_duration(start, utc(2024, 3, 2, 10, 5)) == "01D 02H 05M"
