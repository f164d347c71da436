# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .reports import router as reports_router

__all__ = ["reports_router"]
