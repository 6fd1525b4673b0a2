"""Fan-out helpers for the aggregation layer."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


async def gather_or_cancel(*aws: Awaitable[T]) -> list[T]:
    """Run ``aws`` concurrently and return their results in argument order.

    The first failure propagates as-is (no ``ExceptionGroup``); every sibling
    still running is cancelled and awaited before it does, so no result
    outlives the failed call.
    """

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
