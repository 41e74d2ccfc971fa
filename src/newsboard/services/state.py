"""Replay-latest state cells and the list-state publisher built on them."""

import threading
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from newsboard.models import Loading, Result
from newsboard.services.search import ARTICLE_SEARCH_FIELDS, filter_result

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class _Subscription(Generic[T]):
    def __init__(self, callback: Callable[[T], None]) -> None:
        self._callback = callback
        self._lock = threading.RLock()
        self.active = True

    def deliver(self, value: T) -> None:
        # Held across the callback so unsubscribe() waits for an in-progress delivery.
        with self._lock:
            if self.active:
                self._callback(value)

    def cancel(self) -> None:
        with self._lock:
            self.active = False


class StateCell(Generic[T]):
    """Holds the latest value and pushes every change to its subscribers.

    New subscribers receive the current value immediately. Setting a value
    equal to the current one notifies nobody.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._lock = threading.RLock()
        self._subscriptions: list[_Subscription[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Store ``value`` and notify subscribers if it changed."""
        if self._swap(value):
            self._notify()

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Register ``callback``, replay the current value to it, and return an unsubscriber."""
        subscription = _Subscription(callback)
        with self._lock:
            self._subscriptions.append(subscription)
            current = self._value
        subscription.deliver(current)

        def unsubscribe() -> None:
            subscription.cancel()
            with self._lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _swap(self, value: T) -> bool:
        with self._lock:
            if value == self._value:
                return False
            self._value = value
            return True

    def _notify(self) -> None:
        with self._lock:
            value = self._value
            snapshot = list(self._subscriptions)
        for subscription in snapshot:
            subscription.deliver(value)


class ListStatePublisher:
    """Publishes a list Result alongside its keyword-filtered view.

    The filtered view is recomputed before any subscriber hears about a new
    result or keyword, so nobody can observe a filter that lags its inputs.
    The pagination error and loading-more indicator are advisory channels
    that never touch the published result.
    """

    def __init__(self, search_fields: Sequence[str] = ARTICLE_SEARCH_FIELDS) -> None:
        self._fields = tuple(search_fields)
        self._lock = threading.RLock()
        self.result: StateCell[Result] = StateCell(Loading())
        self.keyword: StateCell[str] = StateCell("")
        self.filtered: StateCell[Result] = StateCell(Loading())
        self.pagination_error: StateCell[str | None] = StateCell(None)
        self.is_loading_more: StateCell[bool] = StateCell(False)

    def publish(self, result: Result) -> None:
        """Publish a new list result and re-derive the filtered view."""
        with self._lock:
            filtered = filter_result(result, self.keyword.value, self._fields)
            changed = [
                cell
                for cell, value in ((self.result, result), (self.filtered, filtered))
                if cell._swap(value)
            ]
        for cell in changed:
            cell._notify()

    def update_keyword(self, keyword: str) -> None:
        """Set the search keyword and re-derive the filtered view."""
        with self._lock:
            filtered = filter_result(self.result.value, keyword, self._fields)
            changed = [
                cell
                for cell, value in ((self.keyword, keyword), (self.filtered, filtered))
                if cell._swap(value)
            ]
        for cell in changed:
            cell._notify()

    def current_result(self) -> Result:
        return self.result.value

    def current_filtered_result(self) -> Result:
        return self.filtered.value

    def current_keyword(self) -> str:
        return self.keyword.value

    def current_pagination_error(self) -> str | None:
        return self.pagination_error.value
