"""Router interface and compare URL helpers."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from compareview.compare.models import RouteParams

_COMPARE_URL_RE = re.compile(
    r"^/(?P<lang>[^/]+)/compare/(?P<addon_id>\d+)/versions/"
    r"(?P<base_version_id>\d+)\.\.\.(?P<head_version_id>\d+)/?$"
)


def compare_url(
    lang: str,
    addon_id: int | str,
    base_version_id: int | str,
    head_version_id: int | str,
) -> str:
    """Build ``/{lang}/compare/{addon}/versions/{base}...{head}/``."""
    return f"/{lang}/compare/{addon_id}/versions/{base_version_id}...{head_version_id}/"


def parse_compare_url(url: str) -> RouteParams:
    """Inverse of ``compare_url``.

    Raises ValueError if ``url`` is not a compare URL.
    """
    match = _COMPARE_URL_RE.match(url)
    if match is None:
        raise ValueError(f"Not a compare URL: {url!r}")
    return RouteParams(**match.groupdict())


class Router(ABC):
    """Navigation collaborator used for redirects."""

    @abstractmethod
    def push(self, url: str) -> None:
        """Navigate to ``url``."""
        ...


class MemoryRouter(Router):
    """Router that only records the URLs it was asked to visit."""

    def __init__(self) -> None:
        self.history: list[str] = []

    def push(self, url: str) -> None:
        self.history.append(url)

    @property
    def location(self) -> str | None:
        return self.history[-1] if self.history else None
