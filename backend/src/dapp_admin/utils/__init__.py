"""Utility modules for the backend application."""

from dapp_admin.utils.categories import (
    get_category_by_slug,
    get_slug_by_category,
)
from dapp_admin.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)
from dapp_admin.utils.parsers import is_blank, parse_json_body, to_json_safe
from dapp_admin.utils.responses import (
    error_response,
    json_response,
    preflight_response,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "error_response",
    "get_category_by_slug",
    "get_logger",
    "get_slug_by_category",
    "is_blank",
    "json_response",
    "parse_json_body",
    "preflight_response",
    "set_request_context",
    "to_json_safe",
]
