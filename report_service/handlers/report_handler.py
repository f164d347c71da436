# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service Handler
"""
Report Handler for the Report Service.
Validates requests, creates jobs and answers job queries.
"""

import logging
import os
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from ..jobs.store import InMemoryJobStore
from ..jobs.worker_pool import ReportWorkerPool
from ..models.report_job import JobStatus, ReportJob
from ..models.requests import ReportRequest
from ..utils.errors import (
    InvalidJobTransitionError,
    JobNotFoundError,
    ReportNotReadyError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ReportHandler:
    """
    Single entry point for report job operations.

    Used by the API routers; holds no state of its own besides the store
    and the worker pool.
    """

    def __init__(self, store: InMemoryJobStore, pool: ReportWorkerPool):
        self.store = store
        self.pool = pool

    # ==================== Commands ====================

    def create_report(self, payload: Dict[str, Any]) -> ReportJob:
        """
        Validate a report request and queue a job for it.

        Raises:
            ValidationError: Invalid request, no job is created
            QueueFullError: Pool refused the job, no job is created
        """
        request = self._validate(payload)
        job = ReportJob(
            title=request.title,
            platform=request.platform.value,
            template_id=request.template_id,
            configuration={
                **request.configuration,
                "connectionId": request.connection_id,
                "projectId": request.project_id,
            },
        )
        self.pool.submit(job)
        self.store.save(job)
        logger.info("Created report job %s for %s project %s", job.id, job.platform, request.project_id)
        return job

    def cancel_report(self, job_id: str) -> ReportJob:
        """
        Raises:
            JobNotFoundError: Unknown job id
            InvalidJobTransitionError: Job already completed or failed
        """
        job = self.get_report(job_id)
        if job.is_terminal:
            raise InvalidJobTransitionError(job.id, job.status.value, "cancelled")
        self.pool.cancel(job_id)
        return self.get_report(job_id)

    # ==================== Queries ====================

    def get_report(self, job_id: str) -> ReportJob:
        job = self.store.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def get_status(self, job_id: str) -> Dict[str, Any]:
        job = self.get_report(job_id)
        return {"status": job.status, "progress": job.progress, "error": job.error}

    def list_reports(self) -> List[ReportJob]:
        return self.store.list()

    def resolve_download(self, job_id: str) -> str:
        """
        Path of a completed job's artifact.

        Raises:
            JobNotFoundError: Unknown job id or artifact missing on disk
            ReportNotReadyError: Job has not completed
        """
        job = self.get_report(job_id)
        if job.status != JobStatus.COMPLETED or not job.file_path:
            raise ReportNotReadyError(job.id, job.status.value)
        if not os.path.isfile(job.file_path):
            logger.warning("Artifact for report %s missing at %s", job.id, job.file_path)
            raise JobNotFoundError(job.id, "Report file not found")
        return job.file_path

    @staticmethod
    def _validate(payload: Dict[str, Any]) -> ReportRequest:
        try:
            return ReportRequest.model_validate(payload)
        except PydanticValidationError as e:
            errors = [
                {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]
            fields = ", ".join(error["field"] for error in errors)
            raise ValidationError(f"Invalid report request: {fields}", {"errors": errors}) from e
