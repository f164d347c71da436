# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Markdown Deck Generator

Renders ProjectData into a slide-by-slide Markdown outline. Each template
is an ordered list of slides; progress is reported after each slide.
"""

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..models.project_data import NormalizedPriority, NormalizedStatus, ProjectData
from ..normalization.tables import PRIORITY_COLORS, STATUS_RULES
from ..utils.dates import percentage, utc_now
from ..utils.errors import GenerationError
from ..utils.filenames import report_filename
from .base import ProgressCallback, ReportGenerator

logger = logging.getLogger(__name__)


@dataclass
class Slide:
    """One slide of the deck"""
    title: str
    content: str


def _title_slide(project: ProjectData, title: str) -> Slide:
    lines = [
        f"**Project:** {project.name}",
        f"**Platform:** {project.platform.value}",
        f"**Generated:** {project.last_updated.strftime('%Y-%m-%d %H:%M UTC')}",
    ]
    if project.description:
        lines.append("")
        lines.append(project.description)
    if project.fallback_data:
        lines.append("")
        lines.append("> Live data was unavailable; this report uses synthetic data.")
    return Slide(title=title, content="\n".join(lines))


def _metrics_slide(project: ProjectData) -> Slide:
    if not project.metrics:
        return Slide("Key Metrics", "_No metrics available._")
    rows = ["| Metric | Value |", "|---|---|"]
    rows.extend(f"| {metric.name} | {metric.value} |" for metric in project.metrics)
    return Slide("Key Metrics", "\n".join(rows))


def _status_slide(project: ProjectData) -> Slide:
    total = len(project.tasks)
    lines = []
    for status in NormalizedStatus:
        rule = STATUS_RULES[status]
        count = sum(1 for task in project.tasks if task.normalized_status == status)
        lines.append(f"- **{rule.category}** ({rule.color}): {count} ({percentage(count, total)}%)")
    return Slide("Task Status", "\n".join(lines))


def _priority_slide(project: ProjectData) -> Slide:
    lines = []
    for priority in reversed(list(NormalizedPriority)):
        count = sum(1 for task in project.tasks if task.normalized_priority == priority)
        lines.append(f"- **{priority.value.capitalize()}** ({PRIORITY_COLORS[priority]}): {count}")
    return Slide("Priorities", "\n".join(lines))


def _team_slide(project: ProjectData) -> Slide:
    if not project.team:
        return Slide("Team", "_No team members listed._")
    lines = []
    for member in project.team:
        assigned = sum(1 for task in project.tasks if task.assignee == member.name)
        lines.append(f"- **{member.name}**, {member.role} ({assigned} tasks)")
    return Slide("Team", "\n".join(lines))


def _tasks_slide(project: ProjectData) -> Slide:
    if not project.tasks:
        return Slide("Tasks", "_No tasks._")
    rows = ["| Task | Status | Assignee | Priority |", "|---|---|---|---|"]
    rows.extend(
        f"| {task.name or task.id} | {task.display_category} | {task.assignee} | "
        f"{task.normalized_priority.value} |"
        for task in project.tasks
    )
    return Slide("Tasks", "\n".join(rows))


def _sprints_slide(project: ProjectData) -> Slide:
    if not project.sprints:
        return Slide("Sprints", "_No sprints._")
    lines = []
    for sprint in project.sprints:
        start = sprint.start_date.strftime("%Y-%m-%d") if sprint.start_date else "?"
        end = sprint.end_date.strftime("%Y-%m-%d") if sprint.end_date else "?"
        completion = f"{sprint.completion}%" if sprint.completion is not None else "n/a"
        lines.append(f"- **{sprint.name}** {start} to {end}, {sprint.status or 'unknown'}, {completion}")
    return Slide("Sprints", "\n".join(lines))


def _quality_slide(project: ProjectData) -> Slide:
    quality = project.data_quality
    lines = [
        f"- Completeness: {quality.completeness}%",
        f"- Accuracy: {quality.accuracy}%",
        f"- Freshness: {quality.freshness}%",
    ]
    if project.fallback_data:
        lines.append("")
        lines.append("_Scores are fixed values for synthetic data._")
    return Slide("Data Quality", "\n".join(lines))


SlideBuilder = Callable[[ProjectData], Slide]

TEMPLATES: Dict[str, List[SlideBuilder]] = {
    "standard": [_metrics_slide, _status_slide, _team_slide, _sprints_slide],
    "executive": [_metrics_slide, _status_slide],
    "detailed": [
        _metrics_slide, _status_slide, _priority_slide, _team_slide,
        _tasks_slide, _sprints_slide, _quality_slide,
    ],
}


class MarkdownDeckGenerator(ReportGenerator):
    """Writes one Markdown deck per report under the storage directory"""

    def __init__(self, storage_dir: str, clock: Callable[[], datetime] = utc_now):
        self.storage_dir = storage_dir
        self._clock = clock

    async def generate(
        self,
        project: ProjectData,
        template_id: str,
        on_progress: ProgressCallback,
        title: Optional[str] = None
    ) -> str:
        builders = TEMPLATES.get(template_id)
        if builders is None:
            raise GenerationError(
                f"Unknown template: {template_id}",
                {"template_id": template_id, "available": sorted(TEMPLATES)},
            )

        slides = [_title_slide(project, title or project.name)]
        total = len(builders) + 1
        on_progress(percentage(1, total))
        for index, build in enumerate(builders, start=2):
            # Cancellation point
            await asyncio.sleep(0)
            slides.append(build(project))
            on_progress(percentage(index, total))

        path = os.path.join(
            self.storage_dir,
            report_filename(
                project.platform.value, project.name, template_id, self._clock(), token=uuid.uuid4().hex[:8]
            ),
        )
        self._write(path, slides)
        logger.info("Wrote %s deck with %d slides to %s", template_id, len(slides), path)
        return path

    @staticmethod
    def _write(path: str, slides: List[Slide]) -> None:
        content = "\n\n---\n\n".join(f"# {slide.title}\n\n{slide.content}" for slide in slides)
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            # Never overwrite another job's artifact
            with open(path, "x", encoding="utf-8") as f:
                f.write(content + "\n")
        except OSError as e:
            raise GenerationError(f"Failed to write report: {e}", {"path": path}) from e
