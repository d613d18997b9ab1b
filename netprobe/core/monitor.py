"""
Status Monitor - Periodic probing with change-only delivery.

A StatusMonitor wraps one probe coroutine and runs it once per interval in a
background task. A status is delivered only when it differs from the last
delivered one, so consumers never see a run of duplicates.

Lifecycle:
- Lazy: nothing runs until the monitor is iterated, entered or started
- The first probe fires one full interval after start
- Each `async for` is its own subscription; statuses are only queued for
  attached subscribers
- A monitor started by iteration alone stops when its last subscriber leaves
- stop() cancels ticking and ends every subscriber; an in-flight probe
  finishes but its result is dropped
"""
import asyncio
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Set

from loguru import logger

from netprobe.core.constants import (DEFAULT_DNS_HOST, DEFAULT_DNS_TIMEOUT,
                                     DEFAULT_MONITOR_INTERVAL,
                                     DEFAULT_SOCKET_HOST, DEFAULT_SOCKET_PORT,
                                     DEFAULT_SOCKET_TIMEOUT)
from netprobe.core.probes import check_by_connect, check_by_name
from netprobe.core.status import ConnectivityStatus
from netprobe.core.validators import (Duration, normalize_host, to_seconds,
                                      validate_host, validate_interval,
                                      validate_port)

ProbeFn = Callable[..., Awaitable[ConnectivityStatus]]
ChangeCallback = Callable[[ConnectivityStatus], None]

_STOP = object()


class StatusMonitor:
    """One monitoring session over a single probe."""

    def __init__(
        self,
        probe: ProbeFn,
        interval: Duration = DEFAULT_MONITOR_INTERVAL,
        *,
        on_change: Optional[ChangeCallback] = None,
        **probe_kwargs: Any,
    ):
        """
        Initialize the monitor.

        Args:
            probe: Coroutine function returning a ConnectivityStatus
            interval: Time between probes (seconds or timedelta)
            on_change: Optional callback invoked with each delivered status
            **probe_kwargs: Keyword arguments passed to every probe call
        """
        validate_interval(interval)

        self._probe = probe
        self._probe_kwargs = probe_kwargs
        self._interval = to_seconds(interval)
        self._on_change = on_change

        self._task: Optional[asyncio.Task] = None
        self._in_flight: Optional[asyncio.Task] = None
        self._subscribers: Set[asyncio.Queue] = set()
        self._last_status: Optional[ConnectivityStatus] = None
        self._running = False
        self._closed = False
        self._held = False  # Started via start()/async with rather than by iteration

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def last_status(self) -> Optional[ConnectivityStatus]:
        """Last status delivered to the consumer, or None before the first one."""
        return self._last_status

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def start(self) -> "StatusMonitor":
        """
        Start the tick task and keep it alive until stop().

        Must be called from a running event loop.
        """
        self._ensure_started()
        if self._running:
            self._held = True
        return self

    def _ensure_started(self) -> None:
        if self._running or self._closed:
            return

        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run())
        self._running = True
        logger.info(f"[StatusMonitor] Started ({self._probe_name()}, interval={self._interval}s)")

    async def stop(self) -> None:
        """Stop probing. Pending statuses are dropped and every subscriber ends."""
        if self._closed:
            return

        self._closed = True
        self._running = False

        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        for queue in self._subscribers:
            while not queue.empty():
                queue.get_nowait()
            queue.put_nowait(_STOP)

        logger.info(f"[StatusMonitor] Stopped ({self._probe_name()})")

    async def wait_closed(self) -> None:
        """Wait for a probe left in flight by stop() to finish."""
        in_flight = self._in_flight
        if in_flight is not None and not in_flight.done():
            await asyncio.wait({in_flight})

    async def __aenter__(self) -> "StatusMonitor":
        return self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    def __aiter__(self) -> AsyncIterator[ConnectivityStatus]:
        return self._stream()

    async def _stream(self) -> AsyncIterator[ConnectivityStatus]:
        """One subscription. Closing it (break, aclose, GC) unsubscribes."""
        if self._closed:
            return

        queue: asyncio.Queue = asyncio.Queue()
        if self._last_status is not None:
            queue.put_nowait(self._last_status)
        self._subscribers.add(queue)
        self._ensure_started()

        try:
            while True:
                item = await queue.get()
                if item is _STOP:
                    return
                yield item
        finally:
            self._subscribers.discard(queue)
            if not self._subscribers and not self._held and not self._closed:
                logger.debug("[StatusMonitor] Last subscriber left")
                await self.stop()

    async def _run(self) -> None:
        """Tick loop: sleep, probe, deliver on change."""
        while True:
            await asyncio.sleep(self._interval)

            # Shielded so a stop() mid-probe lets the probe finish; its result is discarded
            self._in_flight = asyncio.ensure_future(self._invoke_probe())
            self._in_flight.add_done_callback(self._release_in_flight)
            status = await asyncio.shield(self._in_flight)

            if status == self._last_status:
                logger.debug(f"[StatusMonitor] Status unchanged: {status}")
                continue

            self._last_status = status
            self._deliver(status)

    def _release_in_flight(self, task: asyncio.Task) -> None:
        if self._in_flight is task:
            self._in_flight = None
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"[StatusMonitor] Probe task failed: {task.exception()!r}")

    async def _invoke_probe(self) -> ConnectivityStatus:
        """Run the probe once. Never raises."""
        try:
            return await self._probe(**self._probe_kwargs)
        except Exception as e:
            logger.error(f"[StatusMonitor] Probe {self._probe_name()} raised {e!r}, treating as disconnected")
            return ConnectivityStatus.DISCONNECTED

    def _deliver(self, status: ConnectivityStatus) -> None:
        """Hand a changed status to subscribers and callback (only if still running)."""
        if not self._running:
            logger.debug("[StatusMonitor] Suppressed status after stop")
            return

        logger.info(f"[StatusMonitor] Status changed: {status}")
        for queue in self._subscribers:
            queue.put_nowait(status)

        if self._on_change:
            try:
                self._on_change(status)
            except Exception as e:
                logger.error(f"[StatusMonitor] Error in change callback: {e}")

    def _probe_name(self) -> str:
        return getattr(self._probe, "__name__", repr(self._probe))


def monitor_by_name(
    interval: Duration = DEFAULT_MONITOR_INTERVAL,
    host: str = DEFAULT_DNS_HOST,
    timeout: Duration = DEFAULT_DNS_TIMEOUT,
    *,
    on_change: Optional[ChangeCallback] = None,
) -> StatusMonitor:
    """
    Monitor connectivity with periodic DNS lookups.

    Raises:
        ValidationError: If host, timeout or interval are invalid
    """
    normalize_host(host)
    to_seconds(timeout)
    return StatusMonitor(check_by_name, interval, on_change=on_change, host=host, timeout=timeout)


def monitor_by_connect(
    interval: Duration = DEFAULT_MONITOR_INTERVAL,
    host: str = DEFAULT_SOCKET_HOST,
    port: int = DEFAULT_SOCKET_PORT,
    timeout: Duration = DEFAULT_SOCKET_TIMEOUT,
    *,
    on_change: Optional[ChangeCallback] = None,
) -> StatusMonitor:
    """
    Monitor connectivity with periodic TCP connection attempts.

    Raises:
        ValidationError: If host, port, timeout or interval are invalid
    """
    validate_host(host)
    validate_port(port)
    to_seconds(timeout)
    return StatusMonitor(check_by_connect, interval, on_change=on_change, host=host, port=port, timeout=timeout)
