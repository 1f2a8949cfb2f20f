"""VersionsStore: the single holder of ``VersionsState``."""

from __future__ import annotations

import logging
from collections.abc import Callable

from compareview.versions.actions import VersionsAction
from compareview.versions.reducer import reducer
from compareview.versions.state import VersionsState, initial_state

logger = logging.getLogger(__name__)

Listener = Callable[[VersionsState], None]


class VersionsStore:
    """Applies actions through the reducer, one at a time.

    All callers share one event loop, so dispatches never interleave and no
    locking is needed.
    """

    def __init__(self, state: VersionsState | None = None) -> None:
        self._state = state if state is not None else initial_state
        self._listeners: list[Listener] = []

    def get_state(self) -> VersionsState:
        return self._state

    def dispatch(self, action: VersionsAction) -> VersionsState:
        previous = self._state
        self._state = reducer(previous, action)
        logger.debug("dispatch %s", type(action).__name__)
        if self._state is not previous:
            for listener in list(self._listeners):
                listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
