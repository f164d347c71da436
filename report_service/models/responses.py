# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service Response Models
"""
Pydantic models for API responses.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .report_job import JobStatus, ReportJob


class _CamelResponse(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ReportCreatedResponse(_CamelResponse):
    """Response returned when a report job is accepted."""
    id: str
    title: str
    status: JobStatus
    created_at: datetime

    @classmethod
    def from_job(cls, job: ReportJob) -> "ReportCreatedResponse":
        return cls(id=job.id, title=job.title, status=job.status, created_at=job.created_at)


class ReportStatusResponse(_CamelResponse):
    """Response for report status polling."""
    status: JobStatus
    progress: int
    error: Optional[str] = None


class ReportResponse(_CamelResponse):
    """Full report job record."""
    id: str
    title: str
    platform: str
    template_id: str
    configuration: Dict[str, Any]
    status: JobStatus
    progress: int
    file_path: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_job(cls, job: ReportJob) -> "ReportResponse":
        return cls(**job.model_dump())


class ReportListResponse(_CamelResponse):
    """Response for listing reports."""
    reports: List[ReportResponse]
    total: int
