"""
=============================================================================
WORKER THREAD POOL
=============================================================================

A fixed set of worker threads pulling connection tasks off a bounded
queue.

    accept loop ──submit()──► [ queue.Queue(maxsize) ] ──get()──► Worker-0
                                                       ──get()──► Worker-1
                                                       ──get()──► Worker-N

Each task runs to completion on one worker. A full queue makes submit()
return False so the accept loop can turn the client away instead of
buffering without limit.

Shutdown puts one poison pill (None) per worker on the queue.

=============================================================================
"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class Task:
    """A deferred function call."""

    func: Callable[..., Any]
    args: tuple = ()
    kwargs: dict = field(default_factory=dict)


class Worker(threading.Thread):
    """Thread that executes tasks until it receives the poison pill."""

    def __init__(self, task_queue: "queue.Queue[Optional[Task]]", worker_id: int):
        super().__init__(name=f"Worker-{worker_id}", daemon=True)
        self.task_queue = task_queue
        self.worker_id = worker_id
        self.tasks_completed = 0
        self.tasks_failed = 0

    def run(self):
        logger.debug(f"Worker {self.worker_id} started")
        while True:
            task = self.task_queue.get()
            try:
                if task is None:
                    break
                self._execute_task(task)
            finally:
                self.task_queue.task_done()
        logger.debug(f"Worker {self.worker_id} stopped")

    def _execute_task(self, task: Task):
        try:
            task.func(*task.args, **task.kwargs)
            self.tasks_completed += 1
        except Exception as e:
            # one failing connection must not take the worker down with it
            logger.exception(f"Worker {self.worker_id} task failed: {e}")
            self.tasks_failed += 1


class ThreadPool:
    """
    Fixed-size thread pool.

        pool = ThreadPool(workers=8)
        pool.start()
        pool.submit(handle_connection, args=(conn,))
        pool.shutdown()
    """

    def __init__(self, workers: int = 8, queue_size: int = 100):
        self.workers = workers
        self._task_queue: "queue.Queue[Optional[Task]]" = queue.Queue(maxsize=queue_size)
        self._workers: list[Worker] = []
        self._lock = threading.Lock()
        self._started = False
        self._shutdown = False

    def start(self):
        with self._lock:
            if self._started:
                return
            logger.info(f"Starting thread pool with {self.workers} workers")
            for worker_id in range(self.workers):
                worker = Worker(self._task_queue, worker_id)
                self._workers.append(worker)
                worker.start()
            self._started = True

    def submit(self, func: Callable[..., Any], args: tuple = (), kwargs: Optional[dict] = None) -> bool:
        """
        Queue a task without blocking.

        Returns:
            True if queued, False if the queue is full.

        Raises:
            RuntimeError: If the pool is not running.
        """
        if not self._started:
            raise RuntimeError("Thread pool not started")
        if self._shutdown:
            raise RuntimeError("Thread pool is shutting down")
        try:
            self._task_queue.put_nowait(Task(func=func, args=args, kwargs=kwargs or {}))
            return True
        except queue.Full:
            return False

    def shutdown(self, timeout: Optional[float] = None):
        """Let queued tasks finish, then stop every worker."""
        with self._lock:
            if self._shutdown or not self._started:
                return
            self._shutdown = True
        logger.info("Shutting down thread pool")
        for _ in self._workers:
            self._task_queue.put(None)
        for worker in self._workers:
            worker.join(timeout)

    @property
    def stats(self) -> dict:
        return {
            "workers": len(self._workers),
            "queued": self._task_queue.qsize(),
            "completed": sum(w.tasks_completed for w in self._workers),
            "failed": sum(w.tasks_failed for w in self._workers),
        }
