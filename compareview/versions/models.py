"""Pydantic models for version, file and diff data.

Two families live here: ``External*`` models mirror the reviewers API
payloads and are parsed once at the API boundary; the remaining models are
the normalized, frozen shapes kept in ``VersionsState``.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VersionId = int
LocalizedStringMap = dict[str, str]
VersionEntryType = Literal["image", "directory", "text", "binary"]
ChangeType = Literal["normal", "delete", "insert"]
DiffType = Literal["add", "copy", "delete", "modify", "rename"]
Channel = Literal["listed", "unlisted"]


# ── Transport models ────────────────────────────────────────────────


class ExternalModel(BaseModel):
    """Base for API payloads. Unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class ExternalVersionEntry(ExternalModel):
    depth: int
    filename: str
    mime_category: VersionEntryType
    mimetype: str
    modified: str
    path: str
    sha256: str
    size: int | None = None


class ExternalVersionAddon(ExternalModel):
    icon_url: str
    id: int
    name: LocalizedStringMap
    slug: str


class ExternalVersionFile(ExternalModel):
    created: str
    entries: dict[str, ExternalVersionEntry]
    hash: str = ""
    id: int
    is_mozilla_signed_extension: bool = False
    is_restart_required: bool = False
    is_webextension: bool = True
    permissions: list[str] = Field(default_factory=list)
    platform: str = "all"
    selected_file: str
    size: int
    status: str = ""
    url: str = ""


class ExternalVersionFileWithContent(ExternalVersionFile):
    content: str


class ExternalChange(ExternalModel):
    content: str
    new_line_number: int
    old_line_number: int
    type: ChangeType


class ExternalHunk(ExternalModel):
    changes: list[ExternalChange]
    header: str
    new_lines: int
    new_start: int
    old_lines: int
    old_start: int


class ExternalDiff(ExternalModel):
    hash: str = ""
    hunks: list[ExternalHunk]
    is_binary: bool = False
    lines_added: int = 0
    lines_deleted: int = 0
    mode: str
    new_ending_new_line: bool = True
    old_ending_new_line: bool = True
    old_path: str
    parent: str = ""
    path: str
    size: int | None = None


class ExternalVersionFileWithDiff(ExternalVersionFile):
    diff: list[ExternalDiff]


class ExternalVersion(ExternalModel):
    addon: ExternalVersionAddon
    channel: str = "listed"
    edit_url: str = ""
    has_been_validated: bool = False
    id: VersionId
    is_strict_compatibility_enabled: bool = False
    release_notes: LocalizedStringMap | None = None
    reviewed: str
    url: str = ""
    validation_url: str = ""
    validation_url_json: str = ""
    version: str


class ExternalVersionWithContent(ExternalVersion):
    file: ExternalVersionFileWithContent


class ExternalVersionWithDiff(ExternalVersion):
    file: ExternalVersionFileWithDiff


class ExternalVersionsListItem(ExternalModel):
    channel: Channel
    id: VersionId
    version: str


# ── Internal models ─────────────────────────────────────────────────


class InternalModel(BaseModel):
    """Base for normalized models.

    Attributes are snake_case; ``model_dump(by_alias=True)`` exposes the
    camelCase names used by the presentation layer.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class VersionEntry(InternalModel):
    depth: int
    filename: str
    mime_type: str
    modified: str
    path: str
    sha256: str
    type: VersionEntryType


class VersionAddon(InternalModel):
    icon_url: str
    id: int
    name: LocalizedStringMap
    slug: str


class Version(InternalModel):
    """Normalized metadata of one version and its file tree."""

    addon: VersionAddon
    entries: tuple[VersionEntry, ...]
    id: VersionId
    reviewed: str
    selected_path: str
    version: str

    def find_entry(self, path: str) -> VersionEntry | None:
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None


class InternalVersionFile(InternalModel):
    """File content as stored, keyed by (version_id, path)."""

    version_id: VersionId
    path: str
    content: str
    created: str
    id: int
    size: int


class VersionFile(InternalModel):
    """File content joined with its tree entry, as returned by selectors."""

    content: str
    created: str
    filename: str
    id: int
    mime_type: str
    path: str
    sha256: str
    size: int
    type: VersionEntryType
    version: str


class Change(InternalModel):
    content: str
    is_delete: bool
    is_insert: bool
    is_normal: bool
    line_number: int
    new_line_number: int
    old_line_number: int
    type: ChangeType


class Hunk(InternalModel):
    changes: tuple[Change, ...]
    content: str
    is_plain: bool = False
    new_lines: int
    new_start: int
    old_lines: int
    old_start: int


class DiffInfo(InternalModel):
    """One file's diff between two revisions."""

    new_revision: str
    old_revision: str
    hunks: tuple[Hunk, ...]
    type: DiffType
    new_ending_new_line: bool
    old_ending_new_line: bool
    new_mode: str
    old_mode: str
    new_path: str
    old_path: str


class CompareInfo(InternalModel):
    diffs: tuple[DiffInfo, ...]
    mime_type: str


CompareInfoMap = dict[str, CompareInfo]


class VersionsListItem(InternalModel):
    channel: Channel
    id: VersionId
    version: str


class VersionsMap(InternalModel):
    listed: tuple[VersionsListItem, ...] = ()
    unlisted: tuple[VersionsListItem, ...] = ()


# ── Diff cache keys and entries ─────────────────────────────────────


class ComparisonKey(BaseModel):
    """Identifies one base/head comparison for one add-on."""

    model_config = ConfigDict(frozen=True)

    addon_id: int
    base_version_id: VersionId
    head_version_id: VersionId

    @property
    def cache_key(self) -> str:
        return f"{self.addon_id}/{self.base_version_id}/{self.head_version_id}"

    def __str__(self) -> str:
        return self.cache_key


class DiffStatus(str, Enum):
    """State of the diff cache for one ComparisonKey."""

    NOT_REQUESTED = "not_requested"
    FAILED = "failed"
    AVAILABLE = "available"


class DiffCacheEntry(BaseModel):
    """Cached diffs for one ComparisonKey.

    AVAILABLE with an empty ``diffs`` mapping means a fetch is in flight or
    has succeeded for no path yet. FAILED means the most recent fetch for
    the key failed. NOT_REQUESTED is never stored; selectors return it for
    unknown keys.
    """

    model_config = ConfigDict(frozen=True)

    status: DiffStatus
    diffs: CompareInfoMap = Field(default_factory=dict)

    @property
    def is_failed(self) -> bool:
        return self.status is DiffStatus.FAILED

    @property
    def is_requested(self) -> bool:
        return self.status is not DiffStatus.NOT_REQUESTED

    def get(self, path: str) -> CompareInfo | None:
        return self.diffs.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self.diffs


NOT_REQUESTED = DiffCacheEntry(status=DiffStatus.NOT_REQUESTED)
FAILED = DiffCacheEntry(status=DiffStatus.FAILED)
