"""
Shared HTTP request helpers for service backends.

Keeps JSON request/response handling and error mapping consistent across
the Mapbox matching and directions calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from core.exceptions import ExternalServiceException, RateLimitException

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def _redact(url: str) -> str:
    """Strip the query string so access tokens never reach logs or error details."""
    return url.split("?", 1)[0]


def _retry_after_seconds(value: str | None, default: int = 5) -> int:
    """Retry-After as whole seconds; HTTP-date and malformed values fall back."""
    if value is None:
        return default
    try:
        return max(0, int(value))
    except ValueError:
        return default


async def request_json(
    method: str,
    url: str,
    *,
    session: Any,
    params: dict[str, Any] | None = None,
    json: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    expected_status: int | Iterable[int] = 200,
    service_name: str = "Service",
    timeout: Any | None = None,
) -> Any:
    method_upper = method.upper()
    if isinstance(expected_status, int):
        expected = {expected_status}
    else:
        expected = set(expected_status)

    if method_upper == "GET":
        request_fn = session.get
    elif method_upper == "POST":
        request_fn = session.post
    else:
        msg = f"{service_name} request error: unsupported method {method_upper}"
        raise ExternalServiceException(msg, {"url": _redact(url)})

    request_kwargs: dict[str, Any] = {"params": params, "headers": headers}
    if json is not None:
        request_kwargs["json"] = json
    if timeout is not None:
        request_kwargs["timeout"] = timeout

    try:
        async with request_fn(url, **request_kwargs) as response:
            if response.status == 429:
                retry_after = _retry_after_seconds(response.headers.get("Retry-After"))
                msg = f"{service_name} error: 429"
                raise RateLimitException(
                    msg,
                    {"status": 429, "retry_after": retry_after, "url": _redact(url)},
                )
            if response.status not in expected:
                body = await response.text()
                msg = f"{service_name} error: {response.status}"
                raise ExternalServiceException(
                    msg,
                    {"status": response.status, "body": body, "url": _redact(url)},
                )
            try:
                return await response.json()
            except (aiohttp.ContentTypeError, ValueError) as exc:
                msg = f"{service_name} error: invalid JSON response"
                raise ExternalServiceException(
                    msg,
                    {"status": response.status, "url": _redact(url)},
                ) from exc
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        msg = f"{service_name} request failed: {exc.__class__.__name__}"
        raise ExternalServiceException(msg, {"url": _redact(url)}) from exc
