# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Report job persistence.

Each job is read and written as one document; the last write wins.
Stored and returned records are copies, so callers never share state
with the store.
"""

import logging
from typing import Dict, List, Optional

from ..models.report_job import ReportJob

logger = logging.getLogger(__name__)


class InMemoryJobStore:
    """Process-local job store"""

    def __init__(self):
        self._jobs: Dict[str, ReportJob] = {}

    def save(self, job: ReportJob) -> None:
        self._jobs[job.id] = job.model_copy(deep=True)
        logger.debug("Saved job %s (%s, %d%%)", job.id, job.status.value, job.progress)

    def get(self, job_id: str) -> Optional[ReportJob]:
        job = self._jobs.get(job_id)
        return job.model_copy(deep=True) if job else None

    def list(self) -> List[ReportJob]:
        """All jobs, newest first"""
        # Ties keep insertion order, newest first
        ordered = sorted(
            enumerate(self._jobs.values()),
            key=lambda item: (item[1].created_at, item[0]),
            reverse=True,
        )
        return [job.model_copy(deep=True) for _, job in ordered]

    def __len__(self) -> int:
        return len(self._jobs)
