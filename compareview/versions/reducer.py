"""Pure state transitions for the versions store.

Every function takes a ``VersionsState`` and returns a new one, or the very
same object when nothing changes. Inputs are never mutated.
"""

from __future__ import annotations

import logging

from compareview.versions.actions import (
    AbortFetchDiff,
    BeginFetchDiff,
    LoadDiff,
    LoadVersionFile,
    LoadVersionInfo,
    LoadVersionsList,
    UpdateSelectedPath,
    VersionsAction,
)
from compareview.versions.models import (
    FAILED,
    CompareInfo,
    ComparisonKey,
    DiffCacheEntry,
    DiffStatus,
    ExternalVersionFileWithContent,
    ExternalVersionWithContent,
    ExternalVersionWithDiff,
    ExternalVersionsListItem,
    VersionId,
)
from compareview.versions.normalize import (
    create_internal_diffs,
    create_internal_version,
    create_internal_version_file,
    create_versions_map,
)
from compareview.versions.state import VersionsState, initial_state

logger = logging.getLogger(__name__)


def apply_version_loaded(
    state: VersionsState,
    version: ExternalVersionWithContent | ExternalVersionWithDiff,
) -> VersionsState:
    """Insert or replace the normalized metadata of ``version``."""
    return state.model_copy(
        update={
            "version_info": {
                **state.version_info,
                version.id: create_internal_version(version),
            }
        }
    )


def apply_file_loaded(
    state: VersionsState,
    path: str,
    version_id: VersionId,
    file: ExternalVersionFileWithContent,
) -> VersionsState:
    """Store the content of ``path`` for a version whose metadata is loaded."""
    if version_id not in state.version_info:
        logger.debug(
            "Ignoring file %r for version %d: version info not loaded", path, version_id
        )
        return state

    return state.model_copy(
        update={
            "version_files": {
                **state.version_files,
                version_id: {
                    **state.version_files.get(version_id, {}),
                    path: create_internal_version_file(path, version_id, file),
                },
            }
        }
    )


def update_selected_path(
    state: VersionsState,
    version_id: VersionId,
    path: str,
) -> VersionsState:
    """Point a version's ``selected_path`` at ``path``."""
    version = state.version_info.get(version_id)
    if version is None:
        logger.debug(
            "Ignoring selected path %r: version %d not loaded", path, version_id
        )
        return state
    if version.selected_path == path:
        return state

    return state.model_copy(
        update={
            "version_info": {
                **state.version_info,
                version_id: version.model_copy(update={"selected_path": path}),
            }
        }
    )


def apply_versions_list_loaded(
    state: VersionsState,
    addon_id: int,
    versions: tuple[ExternalVersionsListItem, ...] | list[ExternalVersionsListItem],
) -> VersionsState:
    return state.model_copy(
        update={
            "by_addon_id": {
                **state.by_addon_id,
                addon_id: create_versions_map(versions),
            }
        }
    )


def _set_diff_entry(
    state: VersionsState, key: ComparisonKey, entry: DiffCacheEntry
) -> VersionsState:
    return state.model_copy(
        update={"diffs_by_key": {**state.diffs_by_key, key.cache_key: entry}}
    )


def apply_diff_begin(state: VersionsState, key: ComparisonKey) -> VersionsState:
    """Reset the diffs of ``key`` to an empty mapping, dropping cached paths."""
    return _set_diff_entry(state, key, DiffCacheEntry(status=DiffStatus.AVAILABLE))


def apply_diff_aborted(state: VersionsState, key: ComparisonKey) -> VersionsState:
    return _set_diff_entry(state, key, FAILED)


def apply_diff_loaded(
    state: VersionsState,
    key: ComparisonKey,
    version: ExternalVersionWithDiff,
) -> VersionsState:
    """Load the head version and merge its diff for the selected path.

    Both updates are applied together: when the head version's selected
    path has no entry the input state is returned unchanged.
    """
    next_state = apply_version_loaded(state, version)

    head = next_state.version_info.get(key.head_version_id)
    if head is None:
        logger.warning(
            "Discarding diff for %s: head version %d missing from response (got %d)",
            key,
            key.head_version_id,
            version.id,
        )
        return state

    entry = head.find_entry(head.selected_path)
    if entry is None:
        logger.warning(
            "Discarding diff for %s: no entry for selected path %r",
            key,
            head.selected_path,
        )
        return state

    current = state.diffs_by_key.get(key.cache_key)
    existing = current.diffs if current is not None else {}

    compare_info = CompareInfo(
        diffs=tuple(
            create_internal_diffs(
                version,
                base_version_id=key.base_version_id,
                head_version_id=key.head_version_id,
            )
        ),
        mime_type=entry.mime_type,
    )
    return _set_diff_entry(
        next_state,
        key,
        DiffCacheEntry(
            status=DiffStatus.AVAILABLE,
            diffs={**existing, head.selected_path: compare_info},
        ),
    )


def reducer(
    state: VersionsState | None, action: VersionsAction
) -> VersionsState:
    """Apply one action to the versions state."""
    if state is None:
        state = initial_state

    if isinstance(action, LoadVersionInfo):
        return apply_version_loaded(state, action.version)
    if isinstance(action, LoadVersionFile):
        return apply_file_loaded(
            state, action.path, action.version.id, action.version.file
        )
    if isinstance(action, UpdateSelectedPath):
        return update_selected_path(state, action.version_id, action.selected_path)
    if isinstance(action, LoadVersionsList):
        return apply_versions_list_loaded(state, action.addon_id, action.versions)
    if isinstance(action, BeginFetchDiff):
        return apply_diff_begin(state, action.key)
    if isinstance(action, AbortFetchDiff):
        return apply_diff_aborted(state, action.key)
    if isinstance(action, LoadDiff):
        return apply_diff_loaded(state, action.key, action.version)

    logger.debug("Unhandled action %s", type(action).__name__)
    return state
