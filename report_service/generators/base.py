# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Report generator interface

A generator renders canonical ProjectData into an artifact on disk and
reports progress through a callback as it completes sections.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..models.project_data import ProjectData

# Receives an integer percentage 0..100
ProgressCallback = Callable[[int], None]


class ReportGenerator(ABC):
    """Abstract base class for report generators"""

    @abstractmethod
    async def generate(
        self,
        project: ProjectData,
        template_id: str,
        on_progress: ProgressCallback,
        title: Optional[str] = None
    ) -> str:
        """
        Render a report.

        Args:
            project: Canonical project data
            template_id: Template to render
            on_progress: Called with a percentage after each section
            title: Optional report title

        Returns:
            Path of the written artifact

        Raises:
            GenerationError: Unknown template or artifact write failure
        """
        pass
