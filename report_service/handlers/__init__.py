# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .report_handler import ReportHandler

__all__ = ["ReportHandler"]
