# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service - Reports Router
"""
API endpoints for report jobs.
"""

import logging
import os
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import FileResponse

from ..handlers import ReportHandler
from ..models.responses import (
    ReportCreatedResponse,
    ReportListResponse,
    ReportResponse,
    ReportStatusResponse,
)
from ..utils.errors import (
    InvalidJobTransitionError,
    JobNotFoundError,
    QueueFullError,
    ReportServiceError,
    error_handler,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def get_report_handler(request: Request) -> ReportHandler:
    return request.app.state.report_handler


def _http_error(exc: ReportServiceError) -> HTTPException:
    if isinstance(exc, JobNotFoundError):
        status_code = 404
    elif isinstance(exc, QueueFullError):
        status_code = 503
    elif isinstance(exc, InvalidJobTransitionError):
        status_code = 409
    else:
        status_code = 400
    return HTTPException(status_code=status_code, detail=error_handler(exc))


@router.post("/generate", status_code=201, response_model=ReportCreatedResponse, response_model_by_alias=True)
async def generate_report(
    payload: Dict[str, Any] = Body(...),
    handler: ReportHandler = Depends(get_report_handler)
):
    """Queue a report job. Returns immediately; poll the status endpoint."""
    try:
        job = handler.create_report(payload)
    except ReportServiceError as e:
        raise _http_error(e)
    return ReportCreatedResponse.from_job(job)


@router.get("", response_model=ReportListResponse, response_model_by_alias=True)
async def list_reports(handler: ReportHandler = Depends(get_report_handler)):
    """List report jobs, newest first."""
    jobs = handler.list_reports()
    return ReportListResponse(reports=[ReportResponse.from_job(job) for job in jobs], total=len(jobs))


@router.get("/{report_id}/status", response_model=ReportStatusResponse, response_model_by_alias=True)
async def get_report_status(report_id: str, handler: ReportHandler = Depends(get_report_handler)):
    """Get status and progress of a report job."""
    try:
        return ReportStatusResponse(**handler.get_status(report_id))
    except ReportServiceError as e:
        raise _http_error(e)


@router.get("/{report_id}", response_model=ReportResponse, response_model_by_alias=True)
async def get_report(report_id: str, handler: ReportHandler = Depends(get_report_handler)):
    """Get a report job by ID."""
    try:
        return ReportResponse.from_job(handler.get_report(report_id))
    except ReportServiceError as e:
        raise _http_error(e)


@router.post("/{report_id}/cancel", response_model=ReportStatusResponse, response_model_by_alias=True)
async def cancel_report(report_id: str, handler: ReportHandler = Depends(get_report_handler)):
    """Cancel a queued or running report job."""
    try:
        job = handler.cancel_report(report_id)
    except ReportServiceError as e:
        raise _http_error(e)
    return ReportStatusResponse(status=job.status, progress=job.progress, error=job.error)


@router.get("/{report_id}/download")
async def download_report(report_id: str, handler: ReportHandler = Depends(get_report_handler)):
    """Download the artifact of a completed report."""
    try:
        path = handler.resolve_download(report_id)
    except ReportServiceError as e:
        raise _http_error(e)
    return FileResponse(path, filename=os.path.basename(path), media_type="text/markdown")
