# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service - Project data normalization and report generation
"""
Report Service fetches project data from Jira, Monday.com and TROFOS,
normalizes it into one canonical model and turns it into report decks
through a bounded pool of background jobs.
"""

__version__ = "1.0.0"
