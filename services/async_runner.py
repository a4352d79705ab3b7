"""Run store coroutines from synchronous Flask views."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar


T = TypeVar("T")


def run_async(coro: Awaitable[T]) -> T:
    """Execute ``coro`` to completion on a private event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()
