# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Report job record and its state machine.

    queued -> processing -> completed
                         -> failed
    queued -> failed (cancelled before it started)

completed and failed are terminal. Progress is reset to 0 when processing
starts and never decreases afterwards.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..utils.dates import utc_now
from ..utils.errors import InvalidJobTransitionError


class JobStatus(str, Enum):
    """Report job lifecycle states"""
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED})


class ReportJob(BaseModel):
    """One asynchronous report generation request"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = "Project Report"
    platform: str
    template_id: str = "standard"
    configuration: Dict[str, Any] = Field(default_factory=dict)
    status: JobStatus = JobStatus.QUEUED
    progress: int = Field(default=0, ge=0, le=100)
    file_path: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        validate_assignment = True

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def _require(self, expected: JobStatus, requested: JobStatus) -> None:
        if self.status != expected:
            raise InvalidJobTransitionError(self.id, self.status.value, requested.value)

    def start(self) -> None:
        """queued -> processing, progress reset to 0"""
        self._require(JobStatus.QUEUED, JobStatus.PROCESSING)
        self.status = JobStatus.PROCESSING
        self.progress = 0

    def record_progress(self, value: int) -> bool:
        """
        Apply a progress observation while processing.

        Values are clamped to 0..100 and ignored when lower than the last
        recorded value. Returns True when the stored progress changed.
        """
        if self.status != JobStatus.PROCESSING:
            raise InvalidJobTransitionError(self.id, self.status.value, "progress")
        value = max(0, min(100, int(value)))
        if value <= self.progress:
            return False
        self.progress = value
        return True

    def complete(self, file_path: str) -> None:
        """processing -> completed with the artifact path"""
        self._require(JobStatus.PROCESSING, JobStatus.COMPLETED)
        if not file_path:
            raise InvalidJobTransitionError(self.id, self.status.value, JobStatus.COMPLETED.value)
        self.file_path = file_path
        self.progress = 100
        self.status = JobStatus.COMPLETED
        self.completed_at = utc_now()

    def fail(self, message: str) -> None:
        """queued|processing -> failed; progress is left where it was"""
        if self.is_terminal:
            raise InvalidJobTransitionError(self.id, self.status.value, JobStatus.FAILED.value)
        self.error = message or "Report generation failed"
        self.status = JobStatus.FAILED
