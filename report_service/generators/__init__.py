# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .base import ProgressCallback, ReportGenerator
from .markdown_deck import TEMPLATES, MarkdownDeckGenerator

__all__ = ["ProgressCallback", "ReportGenerator", "MarkdownDeckGenerator", "TEMPLATES"]
