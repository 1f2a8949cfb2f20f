"""Abstract reviewer API interface for compareview."""

from abc import ABC, abstractmethod

from compareview.api.models import ErrorResponse
from compareview.versions.models import (
    ExternalVersionWithContent,
    ExternalVersionWithDiff,
    ExternalVersionsListItem,
)


class ReviewerApi(ABC):
    """Fetches version and diff payloads for the comparison views.

    Implementations report failures as ``ErrorResponse`` values; they never
    raise for transport or server errors.
    """

    @abstractmethod
    async def get_version(
        self, addon_id: int, version_id: int, path: str | None = None
    ) -> ExternalVersionWithContent | ErrorResponse:
        """Get one version with the content of ``path`` (or its default file)."""
        ...

    @abstractmethod
    async def get_diff(
        self,
        addon_id: int,
        base_version_id: int,
        head_version_id: int,
        path: str | None = None,
    ) -> ExternalVersionWithDiff | ErrorResponse:
        """Get the head version with its diff against the base version.

        Args:
            addon_id: Add-on the versions belong to.
            base_version_id: Older version of the comparison.
            head_version_id: Newer version; its metadata is returned.
            path: File to diff. The server picks a default file when omitted.
        """
        ...

    @abstractmethod
    async def get_versions_list(
        self, addon_id: int
    ) -> list[ExternalVersionsListItem] | ErrorResponse:
        """List every version of an add-on across channels."""
        ...
