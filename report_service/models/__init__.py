# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Canonical data, raw payload and job models."""

from .project_data import (
    Platform,
    NormalizedStatus,
    NormalizedPriority,
    UNASSIGNED,
    DEFAULT_ROLE,
    Task,
    TeamMember,
    Sprint,
    Metric,
    DataQuality,
    ProjectData,
)
from .raw import JiraPayload, MondayPayload, TrofosPayload, RawPayload, TaskRecord
from .report_job import JobStatus, ReportJob, TERMINAL_STATUSES
from .requests import FetchConfig, ReportRequest

__all__ = [
    "Platform",
    "NormalizedStatus",
    "NormalizedPriority",
    "UNASSIGNED",
    "DEFAULT_ROLE",
    "Task",
    "TeamMember",
    "Sprint",
    "Metric",
    "DataQuality",
    "ProjectData",
    "JiraPayload",
    "MondayPayload",
    "TrofosPayload",
    "RawPayload",
    "TaskRecord",
    "JobStatus",
    "ReportJob",
    "TERMINAL_STATUSES",
    "FetchConfig",
    "ReportRequest",
]
