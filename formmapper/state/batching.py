"""Coalesce rapid position updates to at most one flush per frame."""

from __future__ import annotations

from typing import Any, Callable

# Schedules ``callback`` to run once at the next frame.
FrameScheduler = Callable[[Callable[[], None]], None]


class FrameBatcher:
    """Queue callbacks and run them together in a single frame."""

    def __init__(self, scheduler: FrameScheduler) -> None:
        self._scheduler = scheduler
        self._pending: list[Callable[[], None]] = []
        self._scheduled = False
        self._generation = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)
        if not self._scheduled:
            self._scheduled = True
            generation = self._generation
            self._scheduler(lambda: self._run(generation))

    def flush(self) -> None:
        callbacks = self._pending
        self._pending = []
        self._scheduled = False
        self._generation += 1
        for callback in callbacks:
            callback()

    def cancel(self) -> None:
        self._pending = []
        self._scheduled = False
        self._generation += 1

    def _run(self, generation: int) -> None:
        # A flush or cancel since scheduling makes this frame stale.
        if generation != self._generation:
            return
        self.flush()


class FrameThrottle:
    """Run ``callback`` at most once per frame with the latest arguments."""

    def __init__(self, callback: Callable[..., None], scheduler: FrameScheduler) -> None:
        self._callback = callback
        self._batcher = FrameBatcher(scheduler)
        self._latest: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        already_queued = self._latest is not None
        self._latest = (args, kwargs)
        if not already_queued:
            self._batcher.schedule(self._emit)

    def flush(self) -> None:
        self._batcher.flush()

    def cancel(self) -> None:
        self._latest = None
        self._batcher.cancel()

    def _emit(self) -> None:
        if self._latest is None:
            return
        args, kwargs = self._latest
        self._latest = None
        self._callback(*args, **kwargs)
