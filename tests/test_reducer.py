"""Tests for compareview.versions.reducer: pure state transitions."""

from compareview.versions.actions import (
    AbortFetchDiff,
    BeginFetchDiff,
    LoadDiff,
    LoadVersionFile,
    LoadVersionInfo,
    LoadVersionsList,
    UpdateSelectedPath,
)
from compareview.versions.models import ComparisonKey, DiffStatus
from compareview.versions.normalize import create_internal_version
from compareview.versions.reducer import (
    apply_diff_aborted,
    apply_diff_begin,
    apply_diff_loaded,
    apply_file_loaded,
    apply_version_loaded,
    reducer,
    update_selected_path,
)
from compareview.versions.selectors import get_diff_entry, get_version_info
from compareview.versions.state import VersionsState, initial_state


# ── Version info and files ──────────────────────────────────────────


class TestVersionLoaded:
    def test_inserts_normalized_version(self, make_version_with_content):
        payload = make_version_with_content(version_id=3)
        state = apply_version_loaded(initial_state, payload)
        assert get_version_info(state, 3) == create_internal_version(payload)

    def test_replaces_existing_version_wholesale(self, make_version_with_content):
        state = apply_version_loaded(
            initial_state, make_version_with_content(selected_file="lib/main.js")
        )
        state = apply_version_loaded(state, make_version_with_content())
        assert get_version_info(state, 1).selected_path == "manifest.json"

    def test_input_state_untouched(self, make_version_with_content):
        state = VersionsState()
        apply_version_loaded(state, make_version_with_content())
        assert state.version_info == {}

    def test_reducer_defaults_to_initial_state(self, make_version_with_content):
        state = reducer(None, LoadVersionInfo(version=make_version_with_content()))
        assert 1 in state.version_info


class TestFileLoaded:
    def test_stores_content_by_version_and_path(self, make_version_with_content):
        payload = make_version_with_content(content="hello")
        state = apply_version_loaded(initial_state, payload)
        state = apply_file_loaded(state, "manifest.json", 1, payload.file)
        assert state.version_files[1]["manifest.json"].content == "hello"

    def test_keeps_other_paths(self, make_version_with_content):
        payload = make_version_with_content()
        state = apply_version_loaded(initial_state, payload)
        state = apply_file_loaded(state, "manifest.json", 1, payload.file)
        state = apply_file_loaded(state, "lib/main.js", 1, payload.file)
        assert set(state.version_files[1]) == {"manifest.json", "lib/main.js"}

    def test_unknown_version_is_a_no_op(self, make_version_with_content):
        payload = make_version_with_content()
        state = apply_file_loaded(initial_state, "manifest.json", 1, payload.file)
        assert state is initial_state

    def test_load_version_file_action(self, make_version_with_content):
        payload = make_version_with_content(version_id=5, content="x")
        state = reducer(initial_state, LoadVersionInfo(version=payload))
        state = reducer(state, LoadVersionFile(path="manifest.json", version=payload))
        assert state.version_files[5]["manifest.json"].content == "x"


class TestUpdateSelectedPath:
    def test_changes_only_selected_path(self, make_version_with_content):
        state = apply_version_loaded(initial_state, make_version_with_content())
        before = get_version_info(state, 1)

        state = update_selected_path(state, 1, "lib/main.js")

        after = get_version_info(state, 1)
        assert after.selected_path == "lib/main.js"
        assert after.entries == before.entries
        assert after.addon == before.addon

    def test_same_path_returns_same_state(self, make_version_with_content):
        state = apply_version_loaded(initial_state, make_version_with_content())
        assert update_selected_path(state, 1, "manifest.json") is state

    def test_unknown_version_returns_same_state(self):
        assert update_selected_path(initial_state, 42, "a.js") is initial_state

    def test_does_not_touch_diffs(self, make_version_with_diff, comparison_key):
        state = apply_diff_loaded(initial_state, comparison_key, make_version_with_diff())
        updated = reducer(
            state, UpdateSelectedPath(selected_path="lib/main.js", version_id=2)
        )
        assert updated.diffs_by_key is state.diffs_by_key
        assert updated.version_files is state.version_files


class TestVersionsListLoaded:
    def test_stores_versions_map_by_addon(self, sample_versions_list):
        state = reducer(
            initial_state,
            LoadVersionsList(addon_id=9999, versions=tuple(sample_versions_list)),
        )
        assert [v.version for v in state.by_addon_id[9999].listed] == ["1.0", "2.0"]
        assert [v.version for v in state.by_addon_id[9999].unlisted] == ["1.1-beta"]


# ── Diff cache lifecycle ────────────────────────────────────────────


class TestDiffLifecycle:
    def test_fresh_key_not_requested(self, comparison_key):
        assert get_diff_entry(initial_state, comparison_key).status is DiffStatus.NOT_REQUESTED

    def test_begin_sets_empty_mapping(self, comparison_key):
        state = apply_diff_begin(initial_state, comparison_key)
        entry = get_diff_entry(state, comparison_key)
        assert entry.status is DiffStatus.AVAILABLE
        assert entry.diffs == {}

    def test_aborted_marks_failed(self, comparison_key):
        state = apply_diff_begin(initial_state, comparison_key)
        state = apply_diff_aborted(state, comparison_key)
        assert get_diff_entry(state, comparison_key).status is DiffStatus.FAILED

    def test_loaded_contains_selected_path(self, comparison_key, make_version_with_diff):
        state = apply_diff_begin(initial_state, comparison_key)
        state = apply_diff_loaded(state, comparison_key, make_version_with_diff())
        entry = get_diff_entry(state, comparison_key)
        assert entry.status is DiffStatus.AVAILABLE
        assert list(entry.diffs) == ["manifest.json"]
        assert entry.diffs["manifest.json"].mime_type == "application/json"

    def test_loaded_also_loads_head_version(self, comparison_key, make_version_with_diff):
        payload = make_version_with_diff()
        state = apply_diff_loaded(initial_state, comparison_key, payload)
        assert get_version_info(state, 2) == create_internal_version(payload)

    def test_begin_discards_previous_diffs(self, comparison_key, make_version_with_diff):
        state = apply_diff_loaded(initial_state, comparison_key, make_version_with_diff())
        state = apply_diff_begin(state, comparison_key)
        assert get_diff_entry(state, comparison_key).diffs == {}

    def test_load_after_failure_recovers(self, comparison_key, make_version_with_diff):
        state = apply_diff_aborted(initial_state, comparison_key)
        state = apply_diff_loaded(state, comparison_key, make_version_with_diff())
        entry = get_diff_entry(state, comparison_key)
        assert entry.status is DiffStatus.AVAILABLE
        assert "manifest.json" in entry

    def test_actions_drive_same_lifecycle(self, comparison_key, make_version_with_diff):
        state = reducer(initial_state, BeginFetchDiff(key=comparison_key))
        assert get_diff_entry(state, comparison_key).diffs == {}
        state = reducer(state, AbortFetchDiff(key=comparison_key))
        assert get_diff_entry(state, comparison_key).is_failed
        state = reducer(
            state, LoadDiff(key=comparison_key, version=make_version_with_diff())
        )
        assert "manifest.json" in get_diff_entry(state, comparison_key)

    def test_keys_are_independent(self, comparison_key):
        other = ComparisonKey(addon_id=9999, base_version_id=1, head_version_id=3)
        state = apply_diff_aborted(initial_state, comparison_key)
        state = apply_diff_begin(state, other)
        assert get_diff_entry(state, comparison_key).is_failed
        assert get_diff_entry(state, other).diffs == {}


class TestPartialMerge:
    def test_new_path_keeps_siblings(self, comparison_key, make_version_with_diff):
        state = apply_diff_begin(initial_state, comparison_key)
        state = apply_diff_loaded(
            state, comparison_key, make_version_with_diff(selected_file="manifest.json")
        )
        state = apply_diff_loaded(
            state, comparison_key, make_version_with_diff(selected_file="lib/main.js")
        )
        before = get_diff_entry(state, comparison_key)

        state = apply_diff_loaded(
            state, comparison_key, make_version_with_diff(selected_file="icon.png")
        )
        after = get_diff_entry(state, comparison_key)

        assert set(after.diffs) == {"manifest.json", "lib/main.js", "icon.png"}
        assert after.diffs["manifest.json"] is before.diffs["manifest.json"]
        assert after.diffs["lib/main.js"] is before.diffs["lib/main.js"]
        assert after.diffs["icon.png"].mime_type == "image/png"

    def test_same_path_is_replaced(self, comparison_key, make_version_with_diff):
        state = apply_diff_loaded(
            initial_state, comparison_key, make_version_with_diff(mode="M")
        )
        state = apply_diff_loaded(state, comparison_key, make_version_with_diff(mode="A"))
        diffs = get_diff_entry(state, comparison_key).diffs
        assert len(diffs) == 1
        assert diffs["manifest.json"].diffs[0].type == "add"

    def test_missing_entry_is_a_no_op(self, comparison_key, make_version_with_diff, caplog):
        state = apply_diff_begin(initial_state, comparison_key)
        result = apply_diff_loaded(
            state, comparison_key, make_version_with_diff(selected_file="gone.js")
        )
        assert result is state
        assert "no entry for selected path" in caplog.text

    def test_head_version_missing_is_a_no_op(self, make_version_with_diff):
        key = ComparisonKey(addon_id=9999, base_version_id=1, head_version_id=8)
        state = apply_diff_begin(initial_state, key)
        assert apply_diff_loaded(state, key, make_version_with_diff(version_id=2)) is state


class TestUnknownAction:
    def test_returns_state_unchanged(self):
        assert reducer(initial_state, object()) is initial_state
