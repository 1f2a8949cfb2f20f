"""Read-only lookups over ``VersionsState``.

Returned objects are shared with the state; callers must not mutate them.
"""

from __future__ import annotations

import logging

from compareview.versions.models import (
    NOT_REQUESTED,
    CompareInfoMap,
    ComparisonKey,
    DiffCacheEntry,
    InternalVersionFile,
    Version,
    VersionFile,
    VersionId,
    VersionsMap,
)
from compareview.versions.state import VersionsState

logger = logging.getLogger(__name__)


def get_version_info(state: VersionsState, version_id: VersionId) -> Version | None:
    return state.version_info.get(version_id)


def get_version_files(
    state: VersionsState, version_id: VersionId
) -> dict[str, InternalVersionFile] | None:
    return state.version_files.get(version_id)


def get_version_file(
    state: VersionsState, version_id: VersionId, path: str
) -> VersionFile | None:
    """Return file content joined with its entry, or None if anything is missing."""
    version = get_version_info(state, version_id)
    files = get_version_files(state, version_id)
    if version is None or files is None:
        return None

    entry = version.find_entry(path)
    if entry is None:
        logger.debug("Entry missing for path: %s, version_id: %d", path, version_id)
        return None

    file = files.get(path)
    if file is None:
        return None

    return VersionFile(
        content=file.content,
        created=file.created,
        filename=entry.filename,
        id=file.id,
        mime_type=entry.mime_type,
        path=path,
        sha256=entry.sha256,
        size=file.size,
        type=entry.type,
        version=version.version,
    )


def get_diff_entry(state: VersionsState, key: ComparisonKey) -> DiffCacheEntry:
    """Return the cache entry for ``key``; NOT_REQUESTED if it was never fetched."""
    return state.diffs_by_key.get(key.cache_key, NOT_REQUESTED)


def get_compare_info_map(
    state: VersionsState, key: ComparisonKey
) -> CompareInfoMap | None:
    """Nullable view of the diff cache.

    None when the latest fetch failed, otherwise the (possibly empty) mapping
    of path to CompareInfo. A key that was never requested also yields an
    empty mapping; use ``get_diff_entry`` to tell it apart.
    """
    entry = get_diff_entry(state, key)
    if entry.is_failed:
        return None
    return entry.diffs


def get_versions_map(state: VersionsState, addon_id: int) -> VersionsMap | None:
    return state.by_addon_id.get(addon_id)
