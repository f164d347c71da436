# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Platform Adapters

One adapter per upstream platform behind a common interface.
"""
from .base import BasePlatformAdapter
from .jira import JiraAdapter
from .monday import MondayAdapter
from .trofos import TrofosAdapter
from .registry import AdapterRegistry, default_registry

__all__ = [
    "BasePlatformAdapter",
    "JiraAdapter",
    "MondayAdapter",
    "TrofosAdapter",
    "AdapterRegistry",
    "default_registry",
]
