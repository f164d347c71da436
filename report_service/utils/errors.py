# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Error handling system for the Report Service
Provides custom exceptions and centralized error conversion
"""

import traceback
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes for different types of errors"""
    VALIDATION_ERROR = "VAL_001"
    UNSUPPORTED_PLATFORM = "VAL_002"
    CONNECTOR_ERROR = "CONN_001"
    CONNECTOR_AUTH_ERROR = "CONN_002"
    CONNECTOR_NOT_FOUND = "CONN_003"
    GENERATION_ERROR = "GEN_001"
    INVALID_JOB_TRANSITION = "JOB_001"
    JOB_NOT_FOUND = "JOB_002"
    REPORT_NOT_READY = "JOB_003"
    QUEUE_FULL = "QUEUE_001"
    UNKNOWN_ERROR = "UNKNOWN_001"


class ReportServiceError(Exception):
    """Base exception for the Report Service"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary"""
        return {
            'error_code': self.error_code.value,
            'message': self.message,
            'details': self.details
        }


class ValidationError(ReportServiceError):
    """Request validation errors, never reach the data core"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class UnsupportedPlatformError(ReportServiceError):
    """Platform value outside jira/monday/trofos"""

    def __init__(self, platform: str):
        super().__init__(
            f"Unsupported platform: {platform}",
            ErrorCode.UNSUPPORTED_PLATFORM,
            {'platform': platform}
        )


class ConnectorError(ReportServiceError):
    """Upstream platform gateway errors (network, HTTP status, payload shape)"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.CONNECTOR_ERROR
    ):
        self.status_code = status_code
        self.url = url
        details: Dict[str, Any] = {}
        if status_code is not None:
            details['status_code'] = status_code
        if url:
            details['url'] = url
        super().__init__(message, error_code, details)


class ConnectorAuthError(ConnectorError):
    """Gateway rejected the credentials (401/403)"""

    def __init__(self, message: str, status_code: int = 401, url: Optional[str] = None):
        super().__init__(message, status_code, url, ErrorCode.CONNECTOR_AUTH_ERROR)


class ConnectorNotFoundError(ConnectorError):
    """Project or connection unknown to the gateway (404)"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, 404, url, ErrorCode.CONNECTOR_NOT_FOUND)


class GenerationError(ReportServiceError):
    """Artifact rendering errors raised by a report generator"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.GENERATION_ERROR, details)


class InvalidJobTransitionError(ReportServiceError):
    """Illegal report job state transition"""

    def __init__(self, job_id: str, current: str, requested: str):
        super().__init__(
            f"Report job {job_id} cannot move from {current} to {requested}",
            ErrorCode.INVALID_JOB_TRANSITION,
            {'job_id': job_id, 'current': current, 'requested': requested}
        )


class JobNotFoundError(ReportServiceError):
    """Report job id unknown to the store"""

    def __init__(self, job_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"Report {job_id} not found",
            ErrorCode.JOB_NOT_FOUND,
            {'job_id': job_id}
        )


class ReportNotReadyError(ReportServiceError):
    """Download requested before the artifact exists"""

    def __init__(self, job_id: str, status: str):
        super().__init__(
            "Report is not ready for download",
            ErrorCode.REPORT_NOT_READY,
            {'job_id': job_id, 'status': status}
        )


class QueueFullError(ReportServiceError):
    """Bounded worker pool refused a new job"""

    def __init__(self, max_queue_size: int):
        super().__init__(
            f"Report queue is full ({max_queue_size} jobs waiting), try again later",
            ErrorCode.QUEUE_FULL,
            {'max_queue_size': max_queue_size}
        )


def error_handler(error: Exception) -> Dict[str, Any]:
    """
    Centralized error handler that converts exceptions to standardized format

    Args:
        error: Exception to handle

    Returns:
        Dictionary with error information
    """
    if isinstance(error, ReportServiceError):
        return {
            'error': True,
            'error_code': error.error_code.value,
            'message': error.message,
            'details': error.details,
            'type': error.__class__.__name__
        }
    return {
        'error': True,
        'error_code': ErrorCode.UNKNOWN_ERROR.value,
        'message': str(error),
        'details': {
            'traceback': traceback.format_exc()
        },
        'type': error.__class__.__name__
    }
