"""Fallback payload for errors the API does not map to a client error."""
from typing import Any, Dict, Optional
import logging

import httpx

from zyren.integrations.policy.response_wrappers import IntegrationResponseError

logger = logging.getLogger(__name__)

# Upstream device and data services can recover on their own; a retry may succeed.
_UPSTREAM_ERRORS = (httpx.HTTPError, IntegrationResponseError)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = context or {}
        upstream = isinstance(exc, _UPSTREAM_ERRORS)
        logger.error(
            "[API] unhandled %s on %s %s (upstream=%s): %s",
            type(exc).__name__, context.get("method", "-"), context.get("path", "-"), upstream, exc,
            exc_info=True,
        )
        if upstream:
            message = "A connected service did not respond as expected. Please try again in a moment."
        else:
            message = "Something went wrong while updating your plan. Your selections were not changed."
        return {
            "message": message,
            "fallback": True,
            "retryable": upstream,
            "error_type": type(exc).__name__,
            "path": context.get("path"),
            "session_id": context.get("session_id"),
        }
