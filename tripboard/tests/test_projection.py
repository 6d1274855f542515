from dataclasses import replace

from conftest import NOW, make_points, utc

from tripboard.models import FilterType, SortType
from tripboard.projection import (
    filter_points,
    generate_filters,
    is_point_future,
    is_point_past,
    is_point_present,
    project,
    sort_points,
)


def ids(points):
    return [p.id for p in points]


def test_every_point_lands_in_one_time_filter():
    for point in make_points():
        flags = [is_point_future(point, NOW), is_point_present(point, NOW), is_point_past(point, NOW)]
        assert flags.count(True) == 1


def test_present_is_inclusive_at_both_ends():
    point = make_points()[0]
    assert is_point_present(point, point.date_from)
    assert is_point_present(point, point.date_to)
    assert not is_point_future(point, point.date_from)
    assert not is_point_past(point, point.date_to)


def test_filter_points():
    points = make_points()
    assert ids(filter_points(points, FilterType.EVERYTHING, NOW)) == ["1", "2", "3"]
    assert ids(filter_points(points, FilterType.FUTURE, NOW)) == ["2", "3"]
    assert ids(filter_points(points, FilterType.PAST, NOW)) == ["1"]
    assert filter_points(points, FilterType.PRESENT, NOW) == []


def test_sort_by_day_time_and_price():
    points = make_points()
    assert ids(sort_points(points, SortType.DAY)) == ["1", "3", "2"]
    assert ids(sort_points(points, SortType.TIME)) == ["3", "2", "1"]
    assert ids(sort_points(points, SortType.PRICE)) == ["1", "2", "3"]


def test_price_ties_keep_collection_order():
    points = make_points()
    assert ids(sort_points(points, SortType.PRICE))[1:] == ["2", "3"]
    assert ids(sort_points(list(reversed(points)), SortType.PRICE)) == ["1", "3", "2"]


def test_unordered_sorts_keep_input_order():
    points = make_points()
    assert ids(sort_points(points, SortType.EVENT)) == ["1", "2", "3"]
    assert ids(sort_points(points, SortType.OFFER)) == ["1", "2", "3"]


def test_project_two_point_trip():
    a, b = make_points()[:2]
    points = (a, b)
    now = utc(2024, 1, 20, 12, 0)

    assert project(points, FilterType.PRESENT, SortType.DAY, now) == []
    assert ids(project(points, FilterType.FUTURE, SortType.DAY, now)) == ["2"]
    assert ids(project(points, FilterType.EVERYTHING, SortType.PRICE, now)) == ["1", "2"]


def test_project_does_not_mutate_input():
    points = tuple(make_points())
    before = list(points)
    project(points, FilterType.FUTURE, SortType.TIME, NOW)
    assert list(points) == before


def test_project_reevaluates_time():
    points = make_points()
    later = utc(2024, 1, 25, 9, 0)
    assert ids(project(points, FilterType.PRESENT, SortType.DAY, later)) == ["3"]


def test_generate_filters():
    filters = generate_filters(make_points(), NOW)
    assert filters == {
        FilterType.EVERYTHING: True,
        FilterType.FUTURE: True,
        FilterType.PRESENT: False,
        FilterType.PAST: True,
    }


def test_generate_filters_empty():
    filters = generate_filters([], NOW)
    assert filters[FilterType.EVERYTHING] is True
    assert not any(v for k, v in filters.items() if k is not FilterType.EVERYTHING)


def test_time_sort_uses_duration():
    short, long_ = make_points()[:2]
    long_ = replace(long_, date_to=utc(2024, 2, 3, 10, 0))
    assert ids(sort_points([short, long_], SortType.TIME)) == ["2", "1"]


def test_day_and_time_ties_keep_collection_order():
    first, second, third = make_points()
    same_start = replace(second, date_from=first.date_from, date_to=first.date_to)
    same_length = replace(third, date_from=utc(2024, 3, 1, 9, 0), date_to=utc(2024, 3, 1, 11, 0))

    assert ids(sort_points([same_start, first], SortType.DAY)) == ["2", "1"]
    assert ids(sort_points([first, same_start], SortType.DAY)) == ["1", "2"]
    assert ids(sort_points([same_length, first], SortType.TIME)) == ["3", "1"]
    assert ids(sort_points([first, same_length], SortType.TIME)) == ["1", "3"]
