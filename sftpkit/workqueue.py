"""A pool of worker threads fed from a first-in, first-out queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque, List, Optional


def _no_init() -> Any:
    return None


def _no_cleanup(workerdata: Any) -> None:
    return None


class WorkQueue:
    """Runs ``worker(job, workerdata)`` for each added job on a thread pool.

    Each thread calls ``init()`` once on start to get its ``workerdata`` and
    ``cleanup(workerdata)`` once before it exits. Jobs are started in the
    order they were added, but may overlap in time. Closing the queue lets
    every pending job finish first.
    """

    def __init__(
        self,
        worker: Callable[[Any, Any], None],
        nthreads: int = 4,
        init: Optional[Callable[[], Any]] = None,
        cleanup: Optional[Callable[[Any], None]] = None,
    ) -> None:
        if nthreads < 1:
            raise ValueError("nthreads must be at least 1")
        self._worker = worker
        self._init = init or _no_init
        self._cleanup = cleanup or _no_cleanup
        self._jobs: Deque[Any] = deque()
        self._cond = threading.Condition()
        self._joining = False
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._run, name=f"sftp-worker-{n}", daemon=True)
            for n in range(nthreads)
        ]
        for thread in self._threads:
            thread.start()

    def _run(self) -> None:
        workerdata = self._init()
        try:
            while True:
                with self._cond:
                    self._cond.wait_for(lambda: self._jobs or self._joining)
                    if not self._jobs:
                        return
                    job = self._jobs.popleft()
                self._worker(job, workerdata)
        finally:
            self._cleanup(workerdata)

    def add(self, job: Any) -> None:
        """Queue a job for one of the worker threads."""
        with self._cond:
            if self._joining:
                raise RuntimeError("work queue is closed")
            self._jobs.append(job)
            self._cond.notify()

    def close(self) -> None:
        """Finish all queued jobs and stop the worker threads."""
        with self._cond:
            self._joining = True
            self._cond.notify_all()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join()

    def __enter__(self) -> "WorkQueue":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()