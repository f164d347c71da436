# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .normalizer import PriorityResult, StatusPriorityNormalizer, StatusResult
from .tables import DEFAULT_PRIORITY_TABLES, DEFAULT_STATUS_TABLES, PRIORITY_COLORS, STATUS_RULES

__all__ = [
    "StatusPriorityNormalizer",
    "StatusResult",
    "PriorityResult",
    "DEFAULT_STATUS_TABLES",
    "DEFAULT_PRIORITY_TABLES",
    "STATUS_RULES",
    "PRIORITY_COLORS",
]
