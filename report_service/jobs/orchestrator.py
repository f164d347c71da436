# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Report Orchestrator

Drives one ReportJob from queued to a terminal state:

1. queued -> processing (progress 0)
2. fetch ProjectData (never raises, may be fallback data)
3. run the generator, persisting progress as it reports it
4. processing -> completed with the artifact path, or -> failed with
   the error message

Every outcome, including a missed deadline or cancellation, ends in a
terminal state saved to the store.
"""

import asyncio
import logging
from typing import Optional

from ..generators.base import ReportGenerator
from ..models.project_data import Platform
from ..models.report_job import JobStatus, ReportJob
from ..models.requests import FetchConfig
from ..services.project_data_service import ProjectDataService
from ..utils.errors import GenerationError, ReportServiceError
from .store import InMemoryJobStore

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Report generation cancelled"


class ReportOrchestrator:
    """Runs report jobs against a data service and a generator"""

    def __init__(
        self,
        data_service: ProjectDataService,
        generator: ReportGenerator,
        store: InMemoryJobStore
    ):
        self.data_service = data_service
        self.generator = generator
        self.store = store

    async def run(self, job: ReportJob, timeout: Optional[float] = None) -> ReportJob:
        """
        Run a queued job to completion.

        Args:
            job: Job in the queued state; mutated in place
            timeout: Optional deadline in seconds for the whole run

        Returns:
            The job in a terminal state

        Raises:
            InvalidJobTransitionError: If the job is not queued
            asyncio.CancelledError: After recording the job as failed
        """
        job.start()
        self.store.save(job)
        logger.info("Report job %s processing (%s, template %s)", job.id, job.platform, job.template_id)

        try:
            if timeout:
                await asyncio.wait_for(self._execute(job), timeout)
            else:
                await self._execute(job)
        except asyncio.TimeoutError:
            self._fail(job, f"Report generation exceeded the {timeout:g}s deadline")
        except asyncio.CancelledError:
            self._fail(job, CANCELLED_MESSAGE)
            raise
        return job

    async def _execute(self, job: ReportJob) -> None:
        try:
            project = await self.data_service.fetch_project_data(self._fetch_config(job))
            file_path = await self.generator.generate(
                project,
                job.template_id,
                lambda value: self._record_progress(job, value),
                title=job.title,
            )
            if not file_path:
                raise GenerationError("Generator returned no artifact path")
            job.complete(file_path)
            self.store.save(job)
            logger.info("Report job %s completed: %s", job.id, file_path)
        except Exception as e:
            message = e.message if isinstance(e, ReportServiceError) else (str(e) or type(e).__name__)
            self._fail(job, message)

    def _record_progress(self, job: ReportJob, value: int) -> None:
        # Late reports after a deadline or failure are dropped
        if job.status != JobStatus.PROCESSING:
            return
        job.record_progress(value)
        self.store.save(job)

    def _fail(self, job: ReportJob, message: str) -> None:
        if job.is_terminal:
            return
        job.fail(message)
        self.store.save(job)
        logger.error("Report job %s failed at %d%%: %s", job.id, job.progress, message)

    @staticmethod
    def _fetch_config(job: ReportJob) -> FetchConfig:
        configuration = job.configuration
        return FetchConfig(
            platform=Platform.parse(job.platform),
            connection_id=str(configuration["connectionId"]),
            project_id=str(configuration["projectId"]),
            title=job.title,
        )
