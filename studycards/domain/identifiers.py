"""
Identifier and timestamp helpers.

Ids keep the ``<prefix>-<epoch ms>`` shape of the stored data and add a
random suffix so two ids minted in the same millisecond never collide.
"""

import time
from typing import Callable, Container
from uuid import uuid4

Clock = Callable[[], int]
IdFactory = Callable[[str], str]


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def new_id(prefix: str) -> str:
    return f"{prefix}-{now_ms()}-{uuid4().hex[:8]}"


def unique_id(prefix: str, taken: Container[str], factory: IdFactory = new_id) -> str:
    """Mint an id from ``factory`` that is not already in ``taken``."""
    candidate = factory(prefix)
    while candidate in taken:
        candidate = factory(prefix)
    return candidate
