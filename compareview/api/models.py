"""Result types returned by reviewer API clients."""

from __future__ import annotations

from typing import Any, TypeGuard

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """A failed API call. Clients return this instead of raising."""

    error: str
    status: int | None = None
    url: str | None = None


def is_error_response(response: Any) -> TypeGuard[ErrorResponse]:
    return isinstance(response, ErrorResponse)
