"""
Debounced, advisory uniqueness checks for a single form field.

Every trigger restarts a per-field timer; only the last trigger inside a quiet
window issues a lookup. Each trigger bumps a generation counter and a lookup
result is applied only while its generation is still current, so a slow
response to an older value never overwrites the status of a newer one.
"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 2
DEFAULT_DEBOUNCE_SECONDS = 0.3

Lookup = Callable[[str, Optional[int]], Awaitable[bool]]


class AvailabilityStatus(str, Enum):
    UNKNOWN = "unknown"
    AVAILABLE = "available"
    TAKEN = "taken"


def username_precondition(value: str) -> bool:
    return len(value) >= USERNAME_MIN_LENGTH


def email_precondition(value: str) -> bool:
    return "@" in value


class DebounceTimer:
    """A replaceable scheduled callback on the running event loop."""

    def __init__(self, delay: float):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()


class AvailabilityCheck:
    def __init__(
        self,
        name: str,
        lookup: Lookup,
        precondition: Callable[[str], bool],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self.status = AvailabilityStatus.UNKNOWN
        self.checking = False
        self.value = ""
        self._lookup = lookup
        self._precondition = precondition
        self._timer = DebounceTimer(delay)
        self._generation = 0
        self._tasks: Set[asyncio.Task] = set()
        self._on_change = on_change

    def request(self, value: Optional[str], exclude_id: Optional[int] = None) -> None:
        """Schedule a lookup for value, superseding every earlier request."""
        value = value or ""
        self._generation += 1
        self.value = value
        if not value or not self._precondition(value):
            self._timer.cancel()
            self._set(AvailabilityStatus.UNKNOWN, checking=False)
            return
        generation = self._generation
        self._timer.schedule(lambda: self._start(value, exclude_id, generation))

    def reset(self) -> None:
        self._generation += 1
        self._timer.cancel()
        self.value = ""
        self._set(AvailabilityStatus.UNKNOWN, checking=False)

    def close(self) -> None:
        """Drop pending work when the form session ends."""
        self._generation += 1
        self._timer.cancel()
        for task in list(self._tasks):
            task.cancel()
        self._on_change = None

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no lookup is in flight."""
        while self._timer.pending or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(self._timer.delay)

    def _start(self, value: str, exclude_id: Optional[int], generation: int) -> None:
        if generation != self._generation:
            return
        self.checking = True
        self._notify()
        task = asyncio.get_running_loop().create_task(self._run(value, exclude_id, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, value: str, exclude_id: Optional[int], generation: int) -> None:
        try:
            available = await self._lookup(value, exclude_id)
        except Exception as e:
            logger.warning(f"{self.name} availability lookup failed for {value!r}: {e}")
            result = AvailabilityStatus.UNKNOWN
        else:
            result = AvailabilityStatus.AVAILABLE if available else AvailabilityStatus.TAKEN
        if generation != self._generation:
            logger.debug(f"Discarding stale {self.name} availability result for {value!r}")
            return
        self._set(result, checking=False)

    def _set(self, status: AvailabilityStatus, checking: bool) -> None:
        self.status = status
        self.checking = checking
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def to_dict(self) -> dict:
        return {"value": self.value, "status": self.status.value, "checking": self.checking}
