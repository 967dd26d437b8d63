"""
Request metrics for the quote server.

One ``ServerMetrics`` instance is owned by the application and handed to the
request handler. Recording is fire-and-forget; a background task logs a
snapshot on a fixed interval.
"""
import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class MetricsSnapshot:
    total_requests: int
    successful_requests: int
    failed_requests: int
    avg_response_time_ms: float
    uptime_seconds: float

def format_uptime(seconds: float) -> str:
    """
    Example:
        >>> format_uptime(3725.5)
        '1h2m5s'
    """
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"

class ServerMetrics:
    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._total = 0
        self._succeeded = 0
        self._failed = 0
        self._avg_response_time = 0.0
        self.started_at = clock()

    def record_success(self, duration: float) -> None:
        self._record(duration, ok=True)

    def record_failure(self, duration: float) -> None:
        self._record(duration, ok=False)

    def _record(self, duration: float, ok: bool) -> None:
        with self._lock:
            self._total += 1
            if ok:
                self._succeeded += 1
            else:
                self._failed += 1
            # running mean over all requests
            self._avg_response_time += (duration - self._avg_response_time) / self._total

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            return MetricsSnapshot(
                total_requests=self._total,
                successful_requests=self._succeeded,
                failed_requests=self._failed,
                avg_response_time_ms=self._avg_response_time * 1000.0,
                uptime_seconds=self._clock() - self.started_at,
            )

    def log_snapshot(self) -> MetricsSnapshot:
        snap = self.snapshot()
        logger.info(
            f"Server metrics total_requests={snap.total_requests} "
            f"successful_requests={snap.successful_requests} "
            f"failed_requests={snap.failed_requests} "
            f"avg_response_time_ms={snap.avg_response_time_ms:.0f} "
            f"uptime={format_uptime(snap.uptime_seconds)}"
        )
        return snap

    async def run_reporter(self, interval: float, iterations: Optional[int] = None) -> None:
        """
        Log a snapshot every ``interval`` seconds until cancelled.

        ``iterations`` bounds the loop; None means run forever.
        """
        count = 0
        while iterations is None or count < iterations:
            await asyncio.sleep(interval)
            self.log_snapshot()
            count += 1
