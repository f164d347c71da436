# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Team roster, task metrics and data quality."""

from .metrics import TaskMetrics, TaskMetricsCalculator, completion_rate
from .quality import DataQualityScorer
from .team import TeamRosterBuilder, is_placeholder

__all__ = [
    "TaskMetrics",
    "TaskMetricsCalculator",
    "completion_rate",
    "DataQualityScorer",
    "TeamRosterBuilder",
    "is_placeholder",
]
