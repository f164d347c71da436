# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .project_data_service import ProjectDataService

__all__ = ["ProjectDataService"]
