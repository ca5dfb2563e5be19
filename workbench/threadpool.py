"""A fixed-size pool of worker threads fed from a shared queue."""

from __future__ import annotations

import queue
import threading
import traceback
from typing import Callable, Optional

Job = Callable[[], object]


class _Worker:
    def __init__(self, worker_id: int, jobs: "queue.SimpleQueue[Optional[Job]]"):
        self.id = worker_id
        self._jobs = jobs
        self.thread = threading.Thread(
            target=self._run, name=f"worker-{worker_id}", daemon=True
        )
        self.thread.start()

    def _run(self) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                print(f"Worker {self.id} was told to terminate.")
                return
            print(f"Worker {self.id} got a job; executing.")
            try:
                job()
            except Exception:
                traceback.print_exc()


class ThreadPool:
    """Runs submitted callables on ``size`` worker threads."""

    def __init__(self, size: int):
        if size <= 0:
            raise ValueError("thread pool size must be greater than 0")
        self.size = size
        self._jobs: "queue.SimpleQueue[Optional[Job]]" = queue.SimpleQueue()
        self._workers = [_Worker(i, self._jobs) for i in range(size)]
        self._lock = threading.Lock()
        self._closed = False

    def execute(self, job: Job) -> None:
        """Queue ``job`` to run on the next free worker."""
        with self._lock:
            if self._closed:
                raise RuntimeError("thread pool is shut down")
            self._jobs.put(job)

    def shutdown(self) -> None:
        """Let queued jobs finish, then stop and join every worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for _ in self._workers:
                self._jobs.put(None)
        for worker in self._workers:
            print(f"Shutting down worker {worker.id}")
            worker.thread.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()