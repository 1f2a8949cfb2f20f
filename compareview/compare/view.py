"""Display decision for the comparison page."""

from __future__ import annotations

from compareview.compare.models import CompareView, RouteParams
from compareview.versions.selectors import get_diff_entry, get_version_info
from compareview.versions.state import VersionsState


def describe_compare_view(state: VersionsState, params: RouteParams) -> CompareView:
    """Decide what each pane shows.

    The compare API returns the metadata of the head version, so the page
    waits for that version before showing the file tree. The diff pane shows
    an error when the last fetch for the key failed, the diff once the
    selected path has one, and a loading indicator otherwise.
    """
    key = params.key
    version = get_version_info(state, key.head_version_id)
    if version is None:
        return CompareView()

    entry = get_diff_entry(state, key)
    if entry.is_failed:
        return CompareView(version=version, loading_version=False, diff_pane="error")

    compare_info = entry.get(version.selected_path)
    if compare_info is not None:
        return CompareView(
            version=version,
            loading_version=False,
            diff_pane="diff",
            compare_info=compare_info,
        )
    return CompareView(version=version, loading_version=False, diff_pane="loading")
