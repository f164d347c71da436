# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Task metrics calculator.

Derives headline figures from an already-normalized task list.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..models.project_data import (
    UNASSIGNED,
    Metric,
    NormalizedPriority,
    NormalizedStatus,
    Task,
    TeamMember,
)
from ..normalization.tables import STATUS_RULES
from ..utils.dates import percentage


@dataclass
class TaskMetrics:
    """Derived task figures for one project"""
    total_tasks: int = 0
    status_counts: Dict[NormalizedStatus, int] = field(default_factory=dict)
    status_percentages: Dict[NormalizedStatus, int] = field(default_factory=dict)
    priority_counts: Dict[NormalizedPriority, int] = field(default_factory=dict)
    unassigned_count: int = 0
    top_contributor: Optional[str] = None
    top_contributor_tasks: int = 0
    average_tasks_per_member: Optional[float] = None
    completion_rate: int = 0
    blocked_count: int = 0

    def to_metrics(self) -> List[Metric]:
        metrics = [
            Metric(name="Total Tasks", value=self.total_tasks),
            Metric(name="Completion Rate", value=self.completion_rate),
            Metric(name="Blocked Tasks", value=self.blocked_count),
            Metric(name="Unassigned Tasks", value=self.unassigned_count),
        ]
        for status in NormalizedStatus:
            category = STATUS_RULES[status].category
            metrics.append(Metric(name=f"{category} Tasks", value=self.status_counts.get(status, 0)))
            metrics.append(Metric(name=f"{category} %", value=self.status_percentages.get(status, 0)))
        for priority in NormalizedPriority:
            metrics.append(Metric(
                name=f"{priority.value.capitalize()} Priority",
                value=self.priority_counts.get(priority, 0),
            ))
        if self.top_contributor:
            metrics.append(Metric(name="Top Contributor", value=self.top_contributor))
        if self.average_tasks_per_member is not None:
            metrics.append(Metric(name="Average Tasks per Member", value=self.average_tasks_per_member))
        return metrics


def completion_rate(tasks: Sequence[Task]) -> int:
    """Percentage of tasks normalized as done; 0 for an empty list"""
    done = sum(1 for task in tasks if task.normalized_status == NormalizedStatus.DONE)
    return percentage(done, len(tasks))


class TaskMetricsCalculator:
    """Computes TaskMetrics from normalized tasks and the team roster"""

    @staticmethod
    def calculate(tasks: Sequence[Task], team: Sequence[TeamMember]) -> TaskMetrics:
        total = len(tasks)
        status_counts = Counter(task.normalized_status for task in tasks)
        priority_counts = Counter(task.normalized_priority for task in tasks)

        assignee_counts = Counter(task.assignee for task in tasks if task.assignee != UNASSIGNED)
        top_contributor, top_tasks = None, 0
        if assignee_counts:
            # Ties go to the assignee seen first
            top_contributor, top_tasks = assignee_counts.most_common(1)[0]

        average = round(total / len(team), 1) if team else None

        return TaskMetrics(
            total_tasks=total,
            status_counts={status: status_counts.get(status, 0) for status in NormalizedStatus},
            status_percentages={
                status: percentage(status_counts.get(status, 0), total) for status in NormalizedStatus
            },
            priority_counts={priority: priority_counts.get(priority, 0) for priority in NormalizedPriority},
            unassigned_count=total - sum(assignee_counts.values()),
            top_contributor=top_contributor,
            top_contributor_tasks=top_tasks,
            average_tasks_per_member=average,
            completion_rate=completion_rate(tasks),
            blocked_count=status_counts.get(NormalizedStatus.BLOCKED, 0),
        )
