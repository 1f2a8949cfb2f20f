"""Comparison page: route handling, fetch orchestration and display decision."""

from compareview.compare.controller import CompareController
from compareview.compare.models import CompareView, RouteParams, SessionState
from compareview.compare.routing import (
    MemoryRouter,
    Router,
    compare_url,
    parse_compare_url,
)
from compareview.compare.view import describe_compare_view

__all__ = [
    "CompareController",
    "CompareView",
    "MemoryRouter",
    "RouteParams",
    "Router",
    "SessionState",
    "compare_url",
    "describe_compare_view",
    "parse_compare_url",
]
