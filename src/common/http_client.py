"""Shared HTTP helpers used by the index resolver.

Encapsulates request/timeout error handling so callers receive a plain
``(status_code, headers, text)`` triple instead of dealing with ``requests``
exceptions. A transport failure is reported as status ``0``; nothing here
retries, caches or exits the process.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": Constants.USER_AGENT}


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform a single GET request with timeout and DEBUG traces.

    Args:
        url: Target URL
        headers: Optional request headers, merged over the defaults
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, body_text). On a transport error
        the status is 0, headers are empty and the text describes the error.
    """
    safe_target = safe_url(url)
    merged_headers = {**DEFAULT_HEADERS, **(headers or {})}

    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                )
            )
        try:
            response = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=merged_headers,
                **kwargs
            )
        except requests.Timeout:
            logger.debug(
                "HTTP timeout",
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    action="GET",
                    outcome="timeout",
                    target=safe_target,
                )
            )
            return 0, {}, f"Request timed out after {Constants.REQUEST_TIMEOUT} seconds"
        except requests.RequestException as exc:  # includes ConnectionError
            logger.debug(
                "HTTP request exception",
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    action="GET",
                    outcome="request_exception",
                    target=safe_target,
                )
            )
            return 0, {}, f"Request failed: {exc}"

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success" if response.status_code == 200 else "non_200",
                status_code=response.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
            )
        )
    return response.status_code, dict(response.headers), response.text
