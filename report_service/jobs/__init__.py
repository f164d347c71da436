# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .orchestrator import CANCELLED_MESSAGE, ReportOrchestrator
from .store import InMemoryJobStore
from .worker_pool import ReportWorkerPool

__all__ = ["ReportOrchestrator", "ReportWorkerPool", "InMemoryJobStore", "CANCELLED_MESSAGE"]
