# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
TROFOS adapter

Backlog items use `assignedTo` and `storyPoints`; sprints report a
PLANNING/ACTIVE/COMPLETED status and an optional velocity.
"""

from typing import Any, Dict, List, Optional

from ..models.project_data import Metric, Platform
from ..models.raw import TaskRecord, TrofosPayload
from .base import (
    BasePlatformAdapter,
    first,
    label_of,
    list_field,
    name_of,
    optional_float,
    optional_int,
    optional_str,
    require_object,
)


class TrofosAdapter(BasePlatformAdapter):
    """TROFOS projects, backlogs and sprints"""

    platform = Platform.TROFOS
    url_templates = (
        "/api/connections/{connection_id}/projects/{project_id}",
        "/api/trofos/connections/{connection_id}/projects/{project_id}",
        "/api/connections/{connection_id}/trofos/projects/{project_id}",
    )

    def parse_payload(self, body: Any) -> TrofosPayload:
        body = require_object(body, self.platform)
        return TrofosPayload(
            id=optional_str(body.get("id")),
            name=optional_str(first(body, "name", "pname")),
            description=optional_str(body.get("description")),
            backlog_items=list_field(body, "backlogItems", "backlogs", "tasks"),
            team=list_field(body, "team", "resources", "users"),
            sprints=list_field(body, "sprints"),
            metrics=list_field(body, "metrics"),
            sprint_count=optional_int(body.get("sprintCount")),
            total_story_points=optional_float(body.get("totalStoryPoints")),
        )

    def extract_tasks(self, payload: TrofosPayload) -> List[TaskRecord]:
        tasks = []
        for index, item in enumerate(payload.backlog_items):
            if not isinstance(item, dict):
                continue
            tasks.append(TaskRecord(
                id=str(first(item, "id") or f"trofos-{index + 1}"),
                name=str(first(item, "title", "name") or ""),
                raw_status=label_of(item.get("status")),
                assignee=name_of(first(item, "assignedTo", "assignee")),
                raw_priority=label_of(item.get("priority")),
                created=first(item, "createdAt", "created_at"),
                updated=first(item, "updatedAt", "updated_at"),
                description=optional_str(item.get("description")),
                labels=[str(item["type"])] if item.get("type") else [],
                story_points=optional_float(first(item, "storyPoints", "story_points", "points")),
                sprint_id=optional_str(first(item, "sprintId", "sprint_id")),
            ))
        return tasks

    def platform_metrics(self, payload: TrofosPayload) -> List[Metric]:
        metrics = [
            Metric(name="Sprint Count", value=self._sprint_count(payload)),
            Metric(name="Total Story Points", value=self._total_story_points(payload)),
        ]
        velocity = self._average_velocity(payload)
        if velocity is not None:
            metrics.append(Metric(name="Average Velocity", value=velocity))
        return metrics

    def extract_platform_specific(self, payload: TrofosPayload) -> Dict[str, Any]:
        return {
            "backlogCount": len(payload.backlog_items),
            "sprintCount": self._sprint_count(payload),
            "totalStoryPoints": self._total_story_points(payload),
        }

    @staticmethod
    def _sprint_count(payload: TrofosPayload) -> int:
        return payload.sprint_count if payload.sprint_count is not None else len(payload.sprints)

    def _total_story_points(self, payload: TrofosPayload) -> float:
        if payload.total_story_points is not None:
            return payload.total_story_points
        return sum(task.story_points or 0 for task in self.extract_tasks(payload))

    @staticmethod
    def _average_velocity(payload: TrofosPayload) -> Optional[float]:
        velocities = []
        for sprint in payload.sprints:
            if not isinstance(sprint, dict):
                continue
            velocity = optional_float(sprint.get("velocity"))
            if str(sprint.get("status", "")).upper() == "COMPLETED" and velocity is not None:
                velocities.append(velocity)
        if not velocities:
            return None
        return round(sum(velocities) / len(velocities), 1)
