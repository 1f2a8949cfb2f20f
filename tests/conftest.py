"""Shared test fixtures for compareview."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from compareview.api.base import ReviewerApi
from compareview.config.models import CompareviewConfig
from compareview.versions.models import (
    ComparisonKey,
    ExternalVersionWithContent,
    ExternalVersionWithDiff,
    ExternalVersionsListItem,
)
from compareview.versions.store import VersionsStore

ADDON_ID = 9999


def _entry(path, mime_category="text", mimetype="application/json", depth=0):
    return {
        "depth": depth,
        "filename": path.rsplit("/", 1)[-1],
        "mime_category": mime_category,
        "mimetype": mimetype,
        "modified": "2019-01-29T10:32:02Z",
        "path": path,
        "sha256": f"sha-{path}",
        "size": 1000,
    }


def _external_diff(path, mode="M"):
    return {
        "hash": "0f4e3ba",
        "hunks": [
            {
                "changes": [
                    {"content": "{", "new_line_number": 1, "old_line_number": 1, "type": "normal"},
                    {"content": '  "name": "old",', "new_line_number": -1, "old_line_number": 2, "type": "delete"},
                    {"content": '  "name": "new",', "new_line_number": 2, "old_line_number": -1, "type": "insert"},
                ],
                "header": "@@ -1,2 +1,2 @@",
                "new_lines": 2,
                "new_start": 1,
                "old_lines": 2,
                "old_start": 1,
            }
        ],
        "is_binary": False,
        "lines_added": 1,
        "lines_deleted": 1,
        "mode": mode,
        "new_ending_new_line": True,
        "old_ending_new_line": True,
        "old_path": path,
        "parent": "d2e31f8",
        "path": path,
        "size": 512,
    }


def _version_payload(version_id, selected_file):
    return {
        "addon": {
            "icon_url": "https://example.org/icon.png",
            "id": ADDON_ID,
            "name": {"en-US": "Fake add-on"},
            "slug": "fake-addon",
        },
        "channel": "listed",
        "id": version_id,
        "reviewed": "2019-02-01T12:00:00Z",
        "version": f"{version_id}.0",
        "file": {
            "created": "2019-01-29T10:32:02Z",
            "entries": {
                "manifest.json": _entry("manifest.json"),
                "lib": _entry("lib", mime_category="directory", mimetype="application/octet-stream"),
                "lib/main.js": _entry("lib/main.js", mimetype="application/javascript", depth=1),
                "icon.png": _entry("icon.png", mime_category="image", mimetype="image/png"),
            },
            "hash": "sha256:abc",
            "id": 4321,
            "selected_file": selected_file,
            "size": 5000,
            "status": "public",
            "url": "https://example.org/file.xpi",
        },
    }


@pytest.fixture
def make_version_with_diff():
    """Factory for compare payloads; one diff for the selected file."""

    def _make(version_id=2, selected_file="manifest.json", mode="M", diffs=None):
        payload = _version_payload(version_id, selected_file)
        payload["file"]["diff"] = (
            diffs if diffs is not None else [_external_diff(selected_file, mode)]
        )
        return ExternalVersionWithDiff.model_validate(payload)

    return _make


@pytest.fixture
def make_version_with_content():
    def _make(version_id=1, selected_file="manifest.json", content='{"name": "fake"}'):
        payload = _version_payload(version_id, selected_file)
        payload["file"]["content"] = content
        return ExternalVersionWithContent.model_validate(payload)

    return _make


@pytest.fixture
def external_diff():
    return _external_diff


@pytest.fixture
def comparison_key():
    return ComparisonKey(addon_id=ADDON_ID, base_version_id=1, head_version_id=2)


@pytest.fixture
def sample_versions_list():
    return [
        ExternalVersionsListItem(channel="listed", id=1, version="1.0"),
        ExternalVersionsListItem(channel="unlisted", id=2, version="1.1-beta"),
        ExternalVersionsListItem(channel="listed", id=3, version="2.0"),
    ]


@pytest.fixture
def mock_api(make_version_with_diff, make_version_with_content, sample_versions_list):
    api = MagicMock(spec=ReviewerApi)
    api.get_diff = AsyncMock(return_value=make_version_with_diff())
    api.get_version = AsyncMock(return_value=make_version_with_content())
    api.get_versions_list = AsyncMock(return_value=sample_versions_list)
    return api


@pytest.fixture
def store():
    return VersionsStore()


@pytest.fixture
def sample_config():
    return CompareviewConfig()
