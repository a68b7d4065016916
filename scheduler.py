import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass(order=True)
class Job:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    token: int = field(compare=False, default=0)
    interval: Optional[float] = field(compare=False, default=None)
    cancelled: bool = field(compare=False, default=False)

    def cancel(self):
        self.cancelled = True


class Scheduler:
    """Cooperative timer queue.

    Nothing runs on its own: jobs fire only from :meth:`run_due`, in due-time
    order, on the caller's thread. A repeating job that fell behind fires once
    per missed interval.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Job] = []
        self._seq = itertools.count()
        self._running: Optional[Job] = None

    def call_later(self, delay: float, callback: Callable[[], None], token: int = 0) -> Job:
        job = Job(self.clock() + delay, next(self._seq), callback, token)
        heapq.heappush(self._queue, job)
        return job

    def call_every(self, interval: float, callback: Callable[[], None], token: int = 0) -> Job:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        job = Job(self.clock() + interval, next(self._seq), callback, token, interval)
        heapq.heappush(self._queue, job)
        return job

    def cancel_all(self):
        for job in self._queue:
            job.cancel()
        self._queue.clear()
        if self._running is not None:
            self._running.cancel()

    @property
    def pending(self) -> int:
        return sum(1 for job in self._queue if not job.cancelled)

    def run_due(self, now: Optional[float] = None) -> int:
        '''Fire every job due at or before ``now``. Returns how many callbacks ran.'''
        if now is None:
            now = self.clock()
        fired = 0
        while self._queue and self._queue[0].due <= now:
            job = heapq.heappop(self._queue)
            if job.cancelled:
                continue
            self._running = job
            try:
                job.callback()
            finally:
                self._running = None
            fired += 1
            if job.interval is not None and not job.cancelled:
                # keep the original cadence instead of drifting with late polls
                job.due += job.interval
                job.seq = next(self._seq)
                heapq.heappush(self._queue, job)
        if fired:
            logging.debug(f"Scheduler fired {fired} job(s)")
        return fired
