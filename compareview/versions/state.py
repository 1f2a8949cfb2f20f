"""Immutable state container for versions, files and diffs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from compareview.versions.models import (
    DiffCacheEntry,
    InternalVersionFile,
    Version,
    VersionId,
    VersionsMap,
)


class VersionsState(BaseModel):
    """Everything the comparison views read.

    Reducers never mutate an instance or its dicts; each transition builds
    new dicts and returns a copy via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True)

    by_addon_id: dict[int, VersionsMap] = Field(default_factory=dict)
    diffs_by_key: dict[str, DiffCacheEntry] = Field(default_factory=dict)
    version_info: dict[VersionId, Version] = Field(default_factory=dict)
    version_files: dict[VersionId, dict[str, InternalVersionFile]] = Field(
        default_factory=dict
    )


initial_state = VersionsState()
