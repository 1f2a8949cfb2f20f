"""Pydantic models for the comparison page."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from compareview.versions.models import (
    CompareInfo,
    ComparisonKey,
    InternalModel,
    Version,
)


class RouteParams(BaseModel):
    """Route parameters as received from the router, unparsed."""

    model_config = ConfigDict(frozen=True)

    lang: str
    addon_id: str
    base_version_id: str
    head_version_id: str

    @property
    def key(self) -> ComparisonKey:
        """Parse the ids base-10. Non-numeric input raises ValueError."""
        return ComparisonKey(
            addon_id=int(self.addon_id, 10),
            base_version_id=int(self.base_version_id, 10),
            head_version_id=int(self.head_version_id, 10),
        )


class SessionState(str, Enum):
    IDLE = "idle"
    REDIRECTING = "redirecting"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class CompareView(InternalModel):
    """What the comparison page should display for the current state."""

    version: Version | None = None
    loading_version: bool = True
    diff_pane: Literal["loading", "error", "diff"] = "loading"
    compare_info: CompareInfo | None = None
