"""Default underlying fetch (requests run in a worker thread).

The response is returned as-is: an error status is not raised here, so the
retry layer only retries transport failures.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from fetch_retry.infrastructure.options import Options, passthrough_options

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "GET"
DEFAULT_TIMEOUT = 30.0


async def fetch(target: str, options: Optional[Options] = None) -> requests.Response:
    """Perform a single HTTP request.

    Args:
        target: Request URL
        options: ``method`` selects the HTTP method; the remaining passthrough
            fields (headers, params, json, data, timeout, ...) go to
            ``requests.request``

    Returns:
        requests.Response, whatever its status code

    Raises:
        requests.exceptions.RequestException: On network errors
    """
    kwargs = passthrough_options(options)
    method = str(kwargs.pop("method", DEFAULT_METHOD)).upper()
    kwargs.setdefault("timeout", DEFAULT_TIMEOUT)

    logger.debug(f"HTTP {method} {target}")
    resp = await asyncio.to_thread(requests.request, method, target, **kwargs)
    logger.debug(f"HTTP {method} {target} -> {resp.status_code}")
    return resp
