# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Bounded report worker pool.

Jobs wait in a bounded queue and are run by a fixed number of workers,
each under a per-job deadline. A full queue rejects new jobs instead of
growing without limit.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..models.report_job import JobStatus, ReportJob
from ..utils.errors import QueueFullError
from .orchestrator import CANCELLED_MESSAGE, ReportOrchestrator
from .store import InMemoryJobStore

logger = logging.getLogger(__name__)


class ReportWorkerPool:
    """
    Fixed-size pool of asyncio workers over a bounded queue.

    Usage:
        pool = ReportWorkerPool(orchestrator, store, size=4)
        await pool.start()
        pool.submit(job)
        ...
        await pool.stop()
    """

    def __init__(
        self,
        orchestrator: ReportOrchestrator,
        store: InMemoryJobStore,
        size: int = 4,
        max_queue_size: int = 100,
        job_timeout: Optional[float] = 600.0
    ):
        """
        Initialize the pool.

        Args:
            orchestrator: Runs each job
            store: Job store the queue refers to by id
            size: Number of concurrent workers
            max_queue_size: Queued jobs accepted before submit rejects
            job_timeout: Deadline in seconds per job, None for no deadline
        """
        if size < 1:
            raise ValueError("Worker pool size must be at least 1")
        self.orchestrator = orchestrator
        self.store = store
        self.size = size
        self.max_queue_size = max_queue_size
        self.job_timeout = job_timeout
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)
        self._workers: List[asyncio.Task] = []
        self._running: Dict[str, asyncio.Task] = {}

    @property
    def started(self) -> bool:
        return bool(self._workers)

    @property
    def queued_count(self) -> int:
        return self._queue.qsize()

    @property
    def running_count(self) -> int:
        return len(self._running)

    async def start(self) -> None:
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._worker(index), name=f"report-worker-{index}")
            for index in range(self.size)
        ]
        logger.info("Started %d report workers (queue limit %d)", self.size, self.max_queue_size)

    async def stop(self) -> None:
        """Cancel workers and fail every job still waiting in the queue"""
        for worker in self._workers:
            worker.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []

        while not self._queue.empty():
            job_id = self._queue.get_nowait()
            self._queue.task_done()
            job = self.store.get(job_id)
            if job is not None and job.status == JobStatus.QUEUED:
                job.fail("Service shut down before the report started")
                self.store.save(job)
        logger.info("Report workers stopped")

    def submit(self, job: ReportJob) -> None:
        """
        Enqueue a job by id.

        Raises:
            QueueFullError: If the queue already holds max_queue_size jobs
        """
        try:
            self._queue.put_nowait(job.id)
        except asyncio.QueueFull:
            logger.warning("Rejected report job %s: queue full", job.id)
            raise QueueFullError(self.max_queue_size) from None
        logger.info("Queued report job %s (%d waiting)", job.id, self._queue.qsize())

    def cancel(self, job_id: str) -> bool:
        """
        Cancel a queued or running job.

        Returns:
            True if the job was queued or running, False if it is unknown
            or already terminal
        """
        task = self._running.get(job_id)
        if task is not None:
            task.cancel()
            logger.info("Cancelling running report job %s", job_id)
            return True

        job = self.store.get(job_id)
        if job is None or job.status != JobStatus.QUEUED:
            return False
        # The worker skips it when it is dequeued
        job.fail(CANCELLED_MESSAGE)
        self.store.save(job)
        logger.info("Cancelled queued report job %s", job_id)
        return True

    async def join(self) -> None:
        """Wait until every queued job has been processed"""
        await self._queue.join()

    async def _worker(self, index: int) -> None:
        while True:
            job_id = await self._queue.get()
            try:
                await self._process(job_id)
            except Exception:
                logger.exception("Worker %d failed on report job %s", index, job_id)
            finally:
                self._queue.task_done()

    async def _process(self, job_id: str) -> None:
        job = self.store.get(job_id)
        if job is None or job.status != JobStatus.QUEUED:
            return

        task = asyncio.create_task(self.orchestrator.run(job, timeout=self.job_timeout))
        self._running[job_id] = task
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            raise
        finally:
            self._running.pop(job_id, None)

        if task.cancelled():
            # Cancelled before the orchestrator picked it up
            current = self.store.get(job_id)
            if current is not None and current.status == JobStatus.QUEUED:
                current.fail(CANCELLED_MESSAGE)
                self.store.save(current)
            logger.info("Report job %s was cancelled", job_id)
        elif task.exception() is not None:
            raise task.exception()
