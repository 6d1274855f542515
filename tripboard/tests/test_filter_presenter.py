from conftest import NOW, FakeGateway

from tripboard.app import build_app
from tripboard.models import FilterType


def test_filter_view_marks_unavailable_filters(app):
    view = app.filters.component
    assert view.filters[FilterType.PRESENT] is False
    assert view.filters[FilterType.FUTURE] is True
    assert "Present [disabled]" in app.controls.text
    assert view.select(FilterType.PRESENT) is None
    assert app.filter_model.filter_type is FilterType.EVERYTHING


def test_select_filter(app):
    assert app.filters.component.select(FilterType.PAST) is True
    assert app.filter_model.filter_type is FilterType.PAST
    assert app.filters.component.current_filter_type is FilterType.PAST
    assert [p.point.id for p in app.board.point_presenters] == ["1"]
    assert app.filters.handle_filter_type_change(FilterType.PAST) is False


def test_filters_follow_point_changes(app):
    app.board.point_presenter("1").delete()
    assert app.filters.component.filters[FilterType.PAST] is False


def test_filters_before_load():
    app = build_app(FakeGateway(), clock=lambda: NOW)
    filters = app.filters.component.filters
    assert filters[FilterType.EVERYTHING] is True
    assert not filters[FilterType.FUTURE]


def test_filter_without_points_is_rejected(app):
    assert app.filters.handle_filter_type_change(FilterType.PRESENT) is False
    assert app.filter_model.filter_type is FilterType.EVERYTHING
    assert [p.point.id for p in app.board.point_presenters] == ["1", "3", "2"]
