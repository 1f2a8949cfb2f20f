"""Versions, file contents and diffs: state, reducer and selectors."""

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
from compareview.versions.fetch import (
    fetch_diff,
    fetch_version,
    fetch_version_file,
    fetch_versions_list,
)
from compareview.versions.models import (
    CompareInfo,
    ComparisonKey,
    DiffCacheEntry,
    DiffInfo,
    DiffStatus,
    Version,
    VersionFile,
)
from compareview.versions.reducer import (
    apply_diff_aborted,
    apply_diff_begin,
    apply_diff_loaded,
    apply_file_loaded,
    apply_version_loaded,
    apply_versions_list_loaded,
    reducer,
    update_selected_path,
)
from compareview.versions.selectors import (
    get_compare_info_map,
    get_diff_entry,
    get_version_file,
    get_version_files,
    get_version_info,
    get_versions_map,
)
from compareview.versions.state import VersionsState, initial_state
from compareview.versions.store import VersionsStore

__all__ = [
    "AbortFetchDiff",
    "BeginFetchDiff",
    "CompareInfo",
    "ComparisonKey",
    "DiffCacheEntry",
    "DiffInfo",
    "DiffStatus",
    "LoadDiff",
    "LoadVersionFile",
    "LoadVersionInfo",
    "LoadVersionsList",
    "UpdateSelectedPath",
    "Version",
    "VersionFile",
    "VersionsAction",
    "VersionsState",
    "VersionsStore",
    "apply_diff_aborted",
    "apply_diff_begin",
    "apply_diff_loaded",
    "apply_file_loaded",
    "apply_version_loaded",
    "apply_versions_list_loaded",
    "fetch_diff",
    "fetch_version",
    "fetch_version_file",
    "fetch_versions_list",
    "get_compare_info_map",
    "get_diff_entry",
    "get_version_file",
    "get_version_files",
    "get_version_info",
    "get_versions_map",
    "initial_state",
    "reducer",
    "update_selected_path",
]
