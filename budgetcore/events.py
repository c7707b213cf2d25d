from typing import Callable, Dict, List, NamedTuple
from datetime import datetime

__all__ = [
    'Event', 'EventBus', 'ALL_EVENTS',
    'EXPENSE_ADDED', 'EXPENSE_DELETED', 'EXPENSE_EDITED', 'CATEGORY_NOT_FOUND',
    'BUDGET_SET', 'BUDGET_EDITED', 'ALERT_SET', 'BUDGET_ALERT',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], object]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        if name not in self._subscribers:
            self._subscribers[name] = []
        self._subscribers[name].append(handler)

    def publish(self, name: str, payload: dict) -> List[object]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )

        results = []
        for handler in list(self._subscribers[name]):
            results.append(handler(event, payload))
        return results

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)


EXPENSE_ADDED = "EXPENSE_ADDED"
EXPENSE_DELETED = "EXPENSE_DELETED"
EXPENSE_EDITED = "EXPENSE_EDITED"
CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
BUDGET_SET = "BUDGET_SET"
BUDGET_EDITED = "BUDGET_EDITED"
ALERT_SET = "ALERT_SET"
BUDGET_ALERT = "BUDGET_ALERT"

ALL_EVENTS = (
    EXPENSE_ADDED, EXPENSE_DELETED, EXPENSE_EDITED, CATEGORY_NOT_FOUND,
    BUDGET_SET, BUDGET_EDITED, ALERT_SET, BUDGET_ALERT,
)
