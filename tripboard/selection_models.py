"""Currently selected filter and sort; both publish MAJOR on change."""

from __future__ import annotations

from .models import FilterType, SortType, UpdateType
from .observable import Observable


class FilterModel(Observable):
    def __init__(self, filter_type: FilterType = FilterType.EVERYTHING) -> None:
        super().__init__()
        self._filter_type = filter_type

    @property
    def filter_type(self) -> FilterType:
        return self._filter_type

    def set(self, filter_type: FilterType, silent: bool = False) -> None:
        self._filter_type = FilterType(filter_type)
        if not silent:
            self._notify(UpdateType.MAJOR, self._filter_type)


class SortModel(Observable):
    def __init__(self, sort_type: SortType = SortType.DAY) -> None:
        super().__init__()
        self._sort_type = sort_type

    @property
    def sort_type(self) -> SortType:
        return self._sort_type

    def set(self, sort_type: SortType, silent: bool = False) -> None:
        self._sort_type = SortType(sort_type)
        if not silent:
            self._notify(UpdateType.MAJOR, self._sort_type)


__all__ = ["FilterModel", "SortModel"]
