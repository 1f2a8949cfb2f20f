"""Actions accepted by the versions reducer."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

from compareview.versions.models import (
    ComparisonKey,
    ExternalVersionWithContent,
    ExternalVersionWithDiff,
    ExternalVersionsListItem,
    VersionId,
)


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoadVersionInfo(Action):
    version: ExternalVersionWithContent | ExternalVersionWithDiff


class LoadVersionFile(Action):
    path: str
    version: ExternalVersionWithContent


class UpdateSelectedPath(Action):
    selected_path: str
    version_id: VersionId


class LoadVersionsList(Action):
    addon_id: int
    versions: tuple[ExternalVersionsListItem, ...]


class BeginFetchDiff(Action):
    key: ComparisonKey


class AbortFetchDiff(Action):
    key: ComparisonKey


class LoadDiff(Action):
    key: ComparisonKey
    version: ExternalVersionWithDiff


VersionsAction = Union[
    LoadVersionInfo,
    LoadVersionFile,
    UpdateSelectedPath,
    LoadVersionsList,
    BeginFetchDiff,
    AbortFetchDiff,
    LoadDiff,
]
