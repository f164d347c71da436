# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Shared utilities: logging, errors, dates and file naming."""

from .errors import (
    ErrorCode,
    ReportServiceError,
    ValidationError,
    UnsupportedPlatformError,
    ConnectorError,
    ConnectorAuthError,
    ConnectorNotFoundError,
    GenerationError,
    InvalidJobTransitionError,
    JobNotFoundError,
    ReportNotReadyError,
    QueueFullError,
    error_handler,
)
from .logger import get_logger, setup_logging

__all__ = [
    "ErrorCode",
    "ReportServiceError",
    "ValidationError",
    "UnsupportedPlatformError",
    "ConnectorError",
    "ConnectorAuthError",
    "ConnectorNotFoundError",
    "GenerationError",
    "InvalidJobTransitionError",
    "JobNotFoundError",
    "ReportNotReadyError",
    "QueueFullError",
    "error_handler",
    "get_logger",
    "setup_logging",
]
