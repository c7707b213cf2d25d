from datetime import datetime
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")


def iter_expenses(items: Iterable[T], pred: Callable[[T], bool]) -> Iterable[T]:
    for item in items:
        if pred(item):
            yield item


def by_timestamp_range(start: Optional[datetime], end: Optional[datetime]):
    # a missing bound is unbounded on that side
    def _filter(e) -> bool:
        return (start is None or start <= e.timestamp) and (end is None or e.timestamp <= end)

    return _filter


def by_keyword(keyword: str):
    needle = keyword.lower()

    def _filter(e) -> bool:
        return needle in e.description.lower()

    return _filter
