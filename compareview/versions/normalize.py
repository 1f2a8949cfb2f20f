"""Conversion of reviewers API payloads into internal models."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from compareview.versions.models import (
    Change,
    DiffInfo,
    ExternalChange,
    ExternalDiff,
    ExternalHunk,
    ExternalVersion,
    ExternalVersionAddon,
    ExternalVersionEntry,
    ExternalVersionFileWithContent,
    ExternalVersionWithContent,
    ExternalVersionWithDiff,
    ExternalVersionsListItem,
    Hunk,
    InternalVersionFile,
    Version,
    VersionAddon,
    VersionEntry,
    VersionId,
    VersionsListItem,
    VersionsMap,
)

logger = logging.getLogger(__name__)

# Single-letter git status codes as sent in ExternalDiff.mode.
GIT_STATUS_TO_TYPE: dict[str, str] = {
    "A": "add",
    "C": "copy",
    "D": "delete",
    "M": "modify",
    "R": "rename",
}
DEFAULT_DIFF_TYPE = GIT_STATUS_TO_TYPE["M"]


def create_internal_version_entry(entry: ExternalVersionEntry) -> VersionEntry:
    return VersionEntry(
        depth=entry.depth,
        filename=entry.filename,
        mime_type=entry.mimetype,
        modified=entry.modified,
        path=entry.path,
        sha256=entry.sha256,
        type=entry.mime_category,
    )


def create_internal_version_addon(addon: ExternalVersionAddon) -> VersionAddon:
    return VersionAddon(
        icon_url=addon.icon_url,
        id=addon.id,
        name=dict(addon.name),
        slug=addon.slug,
    )


def create_internal_version(
    version: ExternalVersionWithContent | ExternalVersionWithDiff,
) -> Version:
    """Normalize a version payload, keeping entry order and unique paths."""
    entries: dict[str, VersionEntry] = {}
    for node_name, external_entry in version.file.entries.items():
        entry = create_internal_version_entry(external_entry)
        if entry.path in entries:
            logger.warning(
                "Duplicate entry path %r (node %r) in version %d; keeping the last one",
                entry.path,
                node_name,
                version.id,
            )
        entries[entry.path] = entry

    return Version(
        addon=create_internal_version_addon(version.addon),
        entries=tuple(entries.values()),
        id=version.id,
        reviewed=version.reviewed,
        selected_path=version.file.selected_file,
        version=version.version,
    )


def create_internal_version_file(
    path: str,
    version_id: VersionId,
    file: ExternalVersionFileWithContent,
) -> InternalVersionFile:
    return InternalVersionFile(
        version_id=version_id,
        path=path,
        content=file.content,
        created=file.created,
        id=file.id,
        size=file.size,
    )


def get_line_number(change: ExternalChange) -> int:
    """Line number shown next to a change in a unified diff.

    Inserted and unchanged lines are numbered in the new file, deleted lines
    in the old one.
    """
    if change.type == "delete":
        return change.old_line_number
    return change.new_line_number


def create_internal_change(change: ExternalChange) -> Change:
    return Change(
        content=change.content,
        is_delete=change.type == "delete",
        is_insert=change.type == "insert",
        is_normal=change.type == "normal",
        line_number=get_line_number(change),
        new_line_number=change.new_line_number,
        old_line_number=change.old_line_number,
        type=change.type,
    )


def create_internal_hunk(hunk: ExternalHunk) -> Hunk:
    return Hunk(
        changes=tuple(create_internal_change(c) for c in hunk.changes),
        content=hunk.header,
        is_plain=False,
        new_lines=hunk.new_lines,
        new_start=hunk.new_start,
        old_lines=hunk.old_lines,
        old_start=hunk.old_start,
    )


def get_diff_type(mode: str) -> str:
    """Map a git status letter to a diff type, defaulting to ``modify``."""
    return GIT_STATUS_TO_TYPE.get(mode, DEFAULT_DIFF_TYPE)


def create_internal_diff(
    diff: ExternalDiff,
    base_version_id: VersionId,
    head_version_id: VersionId,
) -> DiffInfo:
    return DiffInfo(
        new_revision=str(head_version_id),
        old_revision=str(base_version_id),
        hunks=tuple(create_internal_hunk(h) for h in diff.hunks),
        type=get_diff_type(diff.mode),
        new_ending_new_line=diff.new_ending_new_line,
        old_ending_new_line=diff.old_ending_new_line,
        new_mode=diff.mode,
        old_mode=diff.mode,
        new_path=diff.path,
        old_path=diff.old_path,
    )


def create_internal_diffs(
    version: ExternalVersionWithDiff,
    base_version_id: VersionId,
    head_version_id: VersionId,
) -> list[DiffInfo]:
    """Normalize every per-file diff carried by a compare payload."""
    return [
        create_internal_diff(diff, base_version_id, head_version_id)
        for diff in version.file.diff
    ]


def create_versions_map(versions: Iterable[ExternalVersionsListItem]) -> VersionsMap:
    """Split a versions list into listed and unlisted channels."""
    listed: list[VersionsListItem] = []
    unlisted: list[VersionsListItem] = []
    for item in versions:
        internal = VersionsListItem(channel=item.channel, id=item.id, version=item.version)
        if item.channel == "listed":
            listed.append(internal)
        else:
            unlisted.append(internal)
    return VersionsMap(listed=tuple(listed), unlisted=tuple(unlisted))


def summarize_version(version: ExternalVersion) -> str:
    """Short label used in log lines."""
    return f"{version.addon.slug}@{version.version} (#{version.id})"
