"""CompareController: drives diff fetching for one comparison page."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from compareview.api.base import ReviewerApi
from compareview.compare.models import CompareView, RouteParams, SessionState
from compareview.compare.routing import Router, compare_url
from compareview.compare.view import describe_compare_view
from compareview.versions.actions import UpdateSelectedPath
from compareview.versions.fetch import fetch_diff
from compareview.versions.models import ComparisonKey
from compareview.versions.selectors import get_diff_entry
from compareview.versions.store import VersionsStore

logger = logging.getLogger(__name__)

FetchDiff = Callable[..., Awaitable[bool]]


def _is_reversed(key: ComparisonKey) -> bool:
    return key.base_version_id > key.head_version_id


class CompareController:
    """Watches route parameters and keeps the store's diffs in step with them.

    One instance serves one mounted comparison page. Route changes go through
    ``update``; file selections through ``on_select_file``. Fetch failures
    end up as store state and ``SessionState.FAILED``, never as exceptions.
    """

    def __init__(
        self,
        store: VersionsStore,
        api: ReviewerApi,
        router: Router,
        params: RouteParams,
        fetch_diff: FetchDiff = fetch_diff,
    ) -> None:
        self.store = store
        self.api = api
        self.router = router
        self.params = params
        self._fetch_diff = fetch_diff
        self._loaded_key: ComparisonKey | None = None
        self.session_state = SessionState.IDLE

    @property
    def key(self) -> ComparisonKey:
        return self.params.key

    async def mount(self) -> None:
        """Redirect if base is newer than head, otherwise start loading."""
        if self._redirect_if_reversed():
            return
        await self._load_data()

    async def update(self, params: RouteParams) -> None:
        """Handle new route parameters.

        Nothing happens unless the add-on, base or head id changed.
        """
        previous = self.key
        self.params = params
        if self.key == previous and self.session_state is not SessionState.IDLE:
            return
        if self._redirect_if_reversed():
            return
        await self._load_data()

    async def on_select_file(self, path: str) -> None:
        """Select ``path`` in the head version and fetch its diff if missing."""
        key = self.key
        if self.session_state is SessionState.REDIRECTING or _is_reversed(key):
            logger.debug("Ignoring selection of %r while redirecting from %s", path, key)
            return

        self.store.dispatch(
            UpdateSelectedPath(selected_path=path, version_id=key.head_version_id)
        )

        entry = get_diff_entry(self.store.get_state(), key)
        if path in entry:
            return

        ok = await self._fetch_diff(
            self.store,
            self.api,
            addon_id=key.addon_id,
            base_version_id=key.base_version_id,
            head_version_id=key.head_version_id,
            path=path,
            begin=False,
        )
        self._finish(key, ok)

    def view(self) -> CompareView:
        return describe_compare_view(self.store.get_state(), self.params)

    def _redirect_if_reversed(self) -> bool:
        key = self.key
        if not _is_reversed(key):
            return False

        # Head must always be the newer version.
        url = compare_url(
            self.params.lang,
            self.params.addon_id,
            self.params.head_version_id,
            self.params.base_version_id,
        )
        logger.info("Base %d is newer than head %d; redirecting to %s",
                    key.base_version_id, key.head_version_id, url)
        self.session_state = SessionState.REDIRECTING
        self.router.push(url)
        return True

    async def _load_data(self) -> None:
        key = self.key
        if key == self._loaded_key:
            return

        self._loaded_key = key
        self.session_state = SessionState.LOADING
        ok = await self._fetch_diff(
            self.store,
            self.api,
            addon_id=key.addon_id,
            base_version_id=key.base_version_id,
            head_version_id=key.head_version_id,
        )
        self._finish(key, ok)

    def _finish(self, key: ComparisonKey, ok: bool) -> None:
        # The response was merged into the store already; only the session
        # state depends on whether it is still the page's comparison.
        # TODO: drop responses for keys that are no longer current instead of
        # merging them (tag each fetch with its key and compare on arrival).
        if key != self.key:
            logger.info(
                "Diff response for %s arrived after the page moved to %s",
                key,
                self.key,
            )
            return
        self.session_state = SessionState.READY if ok else SessionState.FAILED
