"""Reviewer API clients for compareview."""

import logging
import os

from compareview.api.base import ReviewerApi
from compareview.api.client import AddonsServerApi
from compareview.api.models import ErrorResponse, is_error_response
from compareview.config.models import CompareviewConfig

logger = logging.getLogger(__name__)


def create_api(config: CompareviewConfig) -> ReviewerApi:
    """Create the reviewer API client from config.

    Resolves the token from the environment variable named in
    config.api.token_env. Requests go out unauthenticated when it is unset.
    """
    token = os.environ.get(config.api.token_env, "")
    if not token:
        logger.warning(
            "No API token found in %s; requests will be unauthenticated",
            config.api.token_env,
        )
    return AddonsServerApi(config.api, token=token or None)


__all__ = [
    "AddonsServerApi",
    "ErrorResponse",
    "ReviewerApi",
    "create_api",
    "is_error_response",
]
