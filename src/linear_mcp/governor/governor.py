"""Quota-aware request governor for outbound Linear API calls.

Every remote call is queued and started by a single drain loop in strict
submission order. Once usage in the trailing hour reaches a threshold of the
hourly quota, the loop spaces call starts at least ``3600 / hourly_quota``
seconds apart. Below the threshold, calls start as soon as the previous one
has settled.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from collections import deque
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, NamedTuple, Sequence, TypeVar

from linear_mcp.governor.metrics import GovernorMetrics

logger = logging.getLogger("linear_mcp")

T = TypeVar("T")
R = TypeVar("R")

WINDOW_SECONDS = 3600.0
DEFAULT_HOURLY_QUOTA = 1400
DEFAULT_THROTTLE_THRESHOLD = 0.9


class PendingOperation(NamedTuple):
    operation: Callable[[], Awaitable[Any]]
    label: str | None
    enqueued_at: float
    future: asyncio.Future


class _CallRecord(NamedTuple):
    started_at: float
    duration: float


def _describe(label: str | None) -> str:
    return f" for {label}" if label else ""


class RequestGovernor:
    """Serializes and paces calls to a remote API under an hourly quota.

    Args:
        hourly_quota: Maximum calls allowed per trailing hour.
        throttle_threshold: Fraction of the quota above which call starts
            are spaced by ``min_interval``.
        clock: Returns the current time in seconds since the epoch.
        sleep: Coroutine used to wait out the pacing delay.
    """

    def __init__(
        self,
        hourly_quota: int = DEFAULT_HOURLY_QUOTA,
        throttle_threshold: float = DEFAULT_THROTTLE_THRESHOLD,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if hourly_quota < 1:
            raise ValueError("hourly_quota must be at least 1")
        if not 0 < throttle_threshold <= 1:
            raise ValueError("throttle_threshold must be in (0, 1]")

        self.hourly_quota = hourly_quota
        self.throttle_threshold = throttle_threshold
        self._clock = clock
        self._sleep = sleep

        self._queue: deque[PendingOperation] = deque()
        self._history: deque[_CallRecord] = deque()
        self._total_requests = 0
        self._last_call_start = clock()
        self._drain_task: asyncio.Task | None = None
        self._closing = False

    @property
    def min_interval(self) -> float:
        """Seconds between call starts once the throttle threshold is reached."""
        return WINDOW_SECONDS / self.hourly_quota

    @property
    def is_draining(self) -> bool:
        return self._drain_task is not None

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(
        self, operation: Callable[[], Awaitable[T]], label: str | None = None
    ) -> asyncio.Future[T]:
        """Queue ``operation`` and return a future for its outcome.

        The operation is invoked with no arguments once every earlier
        submission has been started and has settled. The future resolves
        with the operation's own result or exception, unchanged.
        """
        loop = asyncio.get_running_loop()
        if self._drain_task is not None and asyncio.current_task() is self._drain_task:
            raise RuntimeError(
                f"Cannot submit{_describe(label)} from inside a governed operation; "
                "it would wait on the drain loop that is running it."
            )

        future: asyncio.Future[T] = loop.create_future()
        logger.debug(
            "Enqueueing request%s (queue position: %d)",
            _describe(label),
            len(self._queue),
        )
        self._queue.append(PendingOperation(operation, label, self._clock(), future))

        if self._drain_task is None:
            self._drain_task = loop.create_task(self._drain())
        return future

    async def batch(
        self,
        items: Sequence[T],
        group_size: int,
        operation: Callable[[T], Awaitable[R]],
        label: str | None = None,
    ) -> list[R]:
        """Run ``operation`` over ``items`` in consecutive groups of ``group_size``.

        Each item is submitted as its own governed call. A group is joined
        before the next one is submitted, and results come back in the
        order of ``items``.
        """
        if group_size < 1:
            raise ValueError("group_size must be at least 1")

        results: list[R] = []
        for offset in range(0, len(items), group_size):
            group = items[offset : offset + group_size]
            outcomes = await asyncio.gather(
                *(self.submit(functools.partial(operation, item), label) for item in group),
                return_exceptions=True,
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
            results.extend(outcomes)
        return results

    async def aclose(self) -> None:
        """Stop the drain loop and cancel everything still queued."""
        while self._queue:
            self._queue.popleft().future.cancel()
        task = self._drain_task
        if task is not None:
            self._closing = True
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            finally:
                self._closing = False
                self._drain_task = None

    # ------------------------------------------------------------------
    # Drain loop
    # ------------------------------------------------------------------

    async def _drain(self) -> None:
        try:
            while self._queue:
                delay = self._pacing_delay()
                if delay > 0:
                    logger.info(
                        "Approaching hourly quota (%d/%d); delaying next request by %.2fs",
                        len(self._history),
                        self.hourly_quota,
                        delay,
                    )
                    await self._sleep(delay)
                await self._dispatch(self._queue.popleft())
        finally:
            if self._queue and not self._closing:
                self._drain_task = asyncio.get_running_loop().create_task(self._drain())
            else:
                self._drain_task = None

    def _pacing_delay(self) -> float:
        now = self._clock()
        self._prune(now)
        if len(self._history) < self.hourly_quota * self.throttle_threshold:
            return 0.0
        return max(0.0, self.min_interval - (now - self._last_call_start))

    async def _dispatch(self, pending: PendingOperation) -> None:
        started_at = self._clock()
        self._last_call_start = started_at
        self._total_requests += 1
        logger.debug(
            "Starting request%s (waited %.3fs in queue)",
            _describe(pending.label),
            started_at - pending.enqueued_at,
        )

        try:
            result = await pending.operation()
        except asyncio.CancelledError:
            self._track(started_at)
            pending.future.cancel()
            if self._closing:
                raise
            logger.warning("Request%s was cancelled", _describe(pending.label))
            return
        except Exception as e:
            self._track(started_at)
            logger.warning("Error in request%s: %s", _describe(pending.label), e)
            if not pending.future.done():
                pending.future.set_exception(e)
            return

        duration = self._track(started_at)
        logger.debug("Completed request%s in %.3fs", _describe(pending.label), duration)
        if not pending.future.done():
            pending.future.set_result(result)

    # ------------------------------------------------------------------
    # History and metrics
    # ------------------------------------------------------------------

    def _track(self, started_at: float) -> float:
        now = self._clock()
        duration = max(0.0, now - started_at)
        self._history.append(_CallRecord(started_at, duration))
        self._prune(now)
        return duration

    def _prune(self, now: float) -> None:
        cutoff = now - WINDOW_SECONDS
        while self._history and self._history[0].started_at <= cutoff:
            self._history.popleft()

    def get_metrics(self) -> GovernorMetrics:
        """Snapshot of usage over the trailing hour."""
        self._prune(self._clock())
        durations = [record.duration for record in self._history]
        average = sum(durations) / len(durations) * 1000 if durations else 0.0
        return GovernorMetrics(
            total_requests=self._total_requests,
            requests_in_last_hour=len(self._history),
            average_request_time=average,
            queue_length=len(self._queue),
            last_request_time=self._last_call_start,
        )

    def api_metrics(self) -> dict[str, Any]:
        """The ``apiMetrics`` block attached to every outward response."""
        metrics = self.get_metrics()
        return {
            "requestsInLastHour": metrics.requests_in_last_hour,
            "remainingRequests": self.hourly_quota - metrics.requests_in_last_hour,
            "averageRequestTime": f"{round(metrics.average_request_time)}ms",
            "queueLength": metrics.queue_length,
            "lastRequestTime": datetime.fromtimestamp(
                metrics.last_request_time, tz=timezone.utc
            ).isoformat(),
        }
