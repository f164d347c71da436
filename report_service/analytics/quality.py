# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Data quality scoring.

    completeness  tasks with a name, a status and a real assignee
    accuracy      tasks whose assignee is Unassigned or on the roster
    freshness     tasks updated within the trailing window

Each score is an integer percentage of the task list; an empty task list
scores 0 on all three.
"""

from datetime import datetime, timedelta
from typing import Callable, Sequence

from ..models.project_data import UNASSIGNED, DataQuality, ProjectData, Task, TeamMember
from ..utils.dates import percentage, utc_now


class DataQualityScorer:
    """Scores a project's task list"""

    def __init__(self, freshness_window_days: int = 30, clock: Callable[[], datetime] = utc_now):
        self.freshness_window = timedelta(days=freshness_window_days)
        self._clock = clock

    def score(self, project: ProjectData) -> DataQuality:
        return self.score_tasks(project.tasks, project.team)

    def score_tasks(self, tasks: Sequence[Task], team: Sequence[TeamMember]) -> DataQuality:
        total = len(tasks)
        if total == 0:
            return DataQuality(completeness=0, accuracy=0, freshness=0)

        roster = {member.name for member in team}
        cutoff = self._clock() - self.freshness_window

        complete = sum(
            1 for task in tasks
            if task.name.strip() and task.raw_status.strip() and task.assignee != UNASSIGNED
        )
        accurate = sum(1 for task in tasks if task.assignee == UNASSIGNED or task.assignee in roster)
        fresh = sum(1 for task in tasks if self._is_fresh(task, cutoff))

        return DataQuality(
            completeness=percentage(complete, total),
            accuracy=percentage(accurate, total),
            freshness=percentage(fresh, total),
        )

    @staticmethod
    def _is_fresh(task: Task, cutoff: datetime) -> bool:
        return task.updated is not None and task.updated >= cutoff
