"""addons-server reviewers API client over httpx."""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from compareview.api.base import ReviewerApi
from compareview.api.models import ErrorResponse
from compareview.config.models import ApiConfig
from compareview.versions.models import (
    ExternalVersionWithContent,
    ExternalVersionWithDiff,
    ExternalVersionsListItem,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_versions_list_adapter = TypeAdapter(list[ExternalVersionsListItem])


def _validate_host(url: str) -> str:
    """Reject API hosts that are not plain http(s) URLs."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"API host must be http(s), got {parsed.scheme!r}")
    if not parsed.hostname:
        raise ValueError(f"API host has no hostname: {url!r}")
    if "\r" in url or "\n" in url:
        raise ValueError("CRLF injection detected in API host")
    return url.rstrip("/")


class AddonsServerApi(ReviewerApi):
    """Reviewer API backed by addons-server's ``/reviewers/addon/`` endpoints."""

    def __init__(self, config: ApiConfig, token: str | None = None) -> None:
        self.config = config
        self._token = token
        self._base_url = f"{_validate_host(config.host)}/api/{config.version}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _addon_url(self, addon_id: int) -> str:
        return f"{self._base_url}/reviewers/addon/{addon_id}/versions/"

    async def _get_json(
        self, url: str, params: dict[str, str] | None = None
    ) -> Any | ErrorResponse:
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.get(
                    url,
                    params=params,
                    headers=self._headers(),
                    timeout=self.config.timeout,
                )
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("API request failed with status %d: %s", status, url)
            return ErrorResponse(error=f"HTTP {status}", status=status, url=url)
        except httpx.HTTPError as e:
            logger.error("API request failed: %s (%s)", url, e)
            return ErrorResponse(error=str(e) or type(e).__name__, url=url)
        except ValueError as e:
            logger.error("API returned invalid JSON: %s (%s)", url, e)
            return ErrorResponse(error=f"Invalid JSON: {e}", url=url)

    async def _get_model(
        self,
        model: type[ModelT],
        url: str,
        params: dict[str, str] | None = None,
    ) -> ModelT | ErrorResponse:
        data = await self._get_json(url, params)
        if isinstance(data, ErrorResponse):
            return data
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected %s payload from %s: %s", model.__name__, url, e)
            return ErrorResponse(error=f"Invalid payload: {e}", url=url)

    async def get_version(
        self, addon_id: int, version_id: int, path: str | None = None
    ) -> ExternalVersionWithContent | ErrorResponse:
        url = f"{self._addon_url(addon_id)}{version_id}/"
        params = {"file": path} if path else None
        return await self._get_model(ExternalVersionWithContent, url, params)

    async def get_diff(
        self,
        addon_id: int,
        base_version_id: int,
        head_version_id: int,
        path: str | None = None,
    ) -> ExternalVersionWithDiff | ErrorResponse:
        url = (
            f"{self._addon_url(addon_id)}{base_version_id}"
            f"/compare_to/{head_version_id}/"
        )
        params = {"file": path} if path else None
        return await self._get_model(ExternalVersionWithDiff, url, params)

    async def get_versions_list(
        self, addon_id: int
    ) -> list[ExternalVersionsListItem] | ErrorResponse:
        url = self._addon_url(addon_id)
        data = await self._get_json(url)
        if isinstance(data, ErrorResponse):
            return data
        try:
            return _versions_list_adapter.validate_python(data)
        except ValidationError as e:
            logger.error("Unexpected versions list payload from %s: %s", url, e)
            return ErrorResponse(error=f"Invalid payload: {e}", url=url)
