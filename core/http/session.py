"""HTTP session management for aiohttp.

One ClientSession is shared per process and per event loop so that concurrent
Mapbox batch requests reuse pooled connections.
"""

from __future__ import annotations

import asyncio
import logging
import os

import aiohttp

from core.constants import (
    HTTP_CONNECTION_LIMIT,
    HTTP_TIMEOUT_CONNECT,
    HTTP_TIMEOUT_SOCK_READ,
    HTTP_TIMEOUT_TOTAL,
)

logger = logging.getLogger(__name__)


class SessionState:
    """State container for the shared aiohttp session."""

    session: aiohttp.ClientSession | None = None
    owner_pid: int | None = None
    loop: asyncio.AbstractEventLoop | None = None


def _is_reusable(current_loop: asyncio.AbstractEventLoop) -> bool:
    session = SessionState.session
    if session is None or session.closed:
        return False
    if SessionState.owner_pid != os.getpid():
        logger.debug(
            "Discarding session inherited from process %s",
            SessionState.owner_pid,
        )
        return False
    if SessionState.loop is not current_loop or current_loop.is_closed():
        logger.info("Detected event loop change. Creating new session.")
        return False
    return True


async def get_session() -> aiohttp.ClientSession:
    """Get or create the shared aiohttp ClientSession.

    Returns:
        ClientSession bound to the running event loop of this process.
    """
    current_loop = asyncio.get_running_loop()
    if _is_reusable(current_loop):
        return SessionState.session  # type: ignore[return-value]

    # Stale sessions belong to another loop or process; drop the reference.
    timeout = aiohttp.ClientTimeout(
        total=HTTP_TIMEOUT_TOTAL,
        connect=HTTP_TIMEOUT_CONNECT,
        sock_read=HTTP_TIMEOUT_SOCK_READ,
    )
    connector = aiohttp.TCPConnector(
        limit=HTTP_CONNECTION_LIMIT,
        enable_cleanup_closed=True,
    )
    SessionState.session = aiohttp.ClientSession(
        timeout=timeout,
        headers={
            "User-Agent": "RouteMatch/1.0",
            "Accept": "application/json",
        },
        connector=connector,
    )
    SessionState.owner_pid = os.getpid()
    SessionState.loop = current_loop
    logger.debug("Created new aiohttp session for process %s", os.getpid())
    return SessionState.session


async def cleanup_session() -> None:
    """Close the shared session for the current process."""
    session = SessionState.session
    if session is not None and not session.closed:
        try:
            await session.close()
            logger.info("Closed aiohttp session for process %s", os.getpid())
        except Exception as e:
            logger.warning("Error closing session: %s", e)

    SessionState.session = None
    SessionState.owner_pid = None
    SessionState.loop = None
