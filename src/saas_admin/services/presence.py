"""Presence feed for the impersonation banner.

Re-resolves the pointer on a fixed interval and yields the presence state
whenever it changes, so clients can subscribe instead of polling.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable

from src.saas_admin.core.logging import get_logger
from src.saas_admin.schemas.impersonation import PresenceRead

logger = get_logger(__name__)

PRESENCE_EVENT = "presence"


async def watch_presence(
    resolve: Callable[[], Awaitable[PresenceRead | None]],
    interval: float,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncIterator[PresenceRead]:
    """Yield presence on first resolve and again on every change.

    Args:
        resolve: Returns the current presence, or None when the lookup failed
                 (the previous state is kept and nothing is emitted)
        interval: Seconds between lookups
        is_disconnected: Stops the feed once it returns True
        sleep: Injectable delay, for tests
    """
    last: PresenceRead | None = None
    while True:
        if is_disconnected is not None and await is_disconnected():
            return

        current = await resolve()
        if current is None:
            logger.warning("Presence lookup failed, keeping previous state")
        elif current != last:
            last = current
            yield current

        await sleep(interval)


def format_sse(presence: PresenceRead) -> str:
    """Render one presence state as a Server-Sent Events frame."""
    return f"event: {PRESENCE_EVENT}\ndata: {presence.model_dump_json()}\n\n"
