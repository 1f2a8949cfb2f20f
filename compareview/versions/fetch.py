"""Async fetch operations that feed API responses into a VersionsStore.

API failures are logged and recorded as store state; nothing here raises
for a failed request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from compareview.api.models import is_error_response
from compareview.versions.actions import (
    AbortFetchDiff,
    BeginFetchDiff,
    LoadDiff,
    LoadVersionFile,
    LoadVersionInfo,
    LoadVersionsList,
    UpdateSelectedPath,
)
from compareview.versions.models import ComparisonKey
from compareview.versions.normalize import summarize_version
from compareview.versions.store import VersionsStore

if TYPE_CHECKING:
    from compareview.api.base import ReviewerApi

logger = logging.getLogger(__name__)


async def fetch_version(
    store: VersionsStore, api: ReviewerApi, addon_id: int, version_id: int
) -> bool:
    """Load a version's metadata and the content of its default file."""
    response = await api.get_version(addon_id, version_id)

    if is_error_response(response):
        logger.error("Failed to fetch version %d: %s", version_id, response.error)
        return False

    store.dispatch(LoadVersionInfo(version=response))
    store.dispatch(
        LoadVersionFile(path=response.file.selected_file, version=response)
    )
    logger.debug("Loaded %s", summarize_version(response))
    return True


async def fetch_version_file(
    store: VersionsStore,
    api: ReviewerApi,
    addon_id: int,
    version_id: int,
    path: str,
) -> bool:
    """Select ``path`` and load its content for an already-loaded version."""
    store.dispatch(UpdateSelectedPath(selected_path=path, version_id=version_id))

    response = await api.get_version(addon_id, version_id, path=path)

    if is_error_response(response):
        logger.error(
            "Failed to fetch %r of version %d: %s", path, version_id, response.error
        )
        return False

    store.dispatch(LoadVersionFile(path=path, version=response))
    return True


async def fetch_versions_list(
    store: VersionsStore, api: ReviewerApi, addon_id: int
) -> bool:
    response = await api.get_versions_list(addon_id)

    if is_error_response(response):
        logger.error(
            "Failed to fetch versions of add-on %d: %s", addon_id, response.error
        )
        return False

    store.dispatch(LoadVersionsList(addon_id=addon_id, versions=tuple(response)))
    return True


async def fetch_diff(
    store: VersionsStore,
    api: ReviewerApi,
    addon_id: int,
    base_version_id: int,
    head_version_id: int,
    path: str | None = None,
    begin: bool = True,
) -> bool:
    """Fetch the diff between two versions and record the outcome.

    With ``begin`` the key's cached diffs are reset before the request.
    Scoped fetches for a single file pass ``begin=False`` so that diffs
    already cached for other paths survive.

    Returns True when the diff was loaded.
    """
    key = ComparisonKey(
        addon_id=addon_id,
        base_version_id=base_version_id,
        head_version_id=head_version_id,
    )

    if begin:
        store.dispatch(BeginFetchDiff(key=key))

    response = await api.get_diff(
        addon_id, base_version_id, head_version_id, path=path
    )

    if is_error_response(response):
        logger.error(
            "Failed to fetch diff %s%s: %s",
            key,
            f" ({path})" if path else "",
            response.error,
        )
        store.dispatch(AbortFetchDiff(key=key))
        return False

    store.dispatch(LoadDiff(key=key, version=response))
    return True
