# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Monday.com adapter

Boards carry items whose `status` and `priority` may be plain labels or
column objects, and whose `assignee` may be a string, a person object
or a list of people.
"""

from typing import Any, Dict, List

from ..models.project_data import Metric, Platform
from ..models.raw import MondayPayload, TaskRecord
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


class MondayAdapter(BasePlatformAdapter):
    """Monday.com boards and items"""

    platform = Platform.MONDAY
    url_templates = (
        "/api/connections/{connection_id}/projects/{project_id}",
        "/api/connections/{connection_id}/boards/{project_id}",
        "/api/monday/connections/{connection_id}/boards/{project_id}",
    )

    def parse_payload(self, body: Any) -> MondayPayload:
        body = require_object(body, self.platform)
        return MondayPayload(
            id=optional_str(body.get("id")),
            name=optional_str(first(body, "name", "title")),
            description=optional_str(body.get("description")),
            items=list_field(body, "items", "tasks"),
            team=list_field(body, "team", "members", "subscribers"),
            sprints=list_field(body, "sprints"),
            metrics=list_field(body, "metrics"),
            groups=list_field(body, "groups"),
            columns=list_field(body, "columns"),
            items_count=optional_int(body.get("itemsCount")),
            board_state=optional_str(first(body, "boardState", "state")),
        )

    def extract_tasks(self, payload: MondayPayload) -> List[TaskRecord]:
        tasks = []
        for index, item in enumerate(payload.items):
            if not isinstance(item, dict):
                continue
            group = item.get("group")
            group_name = label_of(first(group, "title", "name")) if isinstance(group, dict) else label_of(group)
            tasks.append(TaskRecord(
                id=str(first(item, "id") or f"monday-{index + 1}"),
                name=str(first(item, "name", "title") or ""),
                raw_status=label_of(item.get("status")),
                assignee=name_of(first(item, "assignee", "owner", "people")),
                raw_priority=label_of(item.get("priority")),
                created=first(item, "created", "created_at", "createdAt"),
                updated=first(item, "updated", "updated_at", "updatedAt"),
                description=optional_str(item.get("description")),
                labels=[group_name] if group_name else [],
                story_points=optional_float(first(item, "storyPoints", "estimate")),
                sprint_id=optional_str(first(item, "sprintId")),
            ))
        return tasks

    def platform_metrics(self, payload: MondayPayload) -> List[Metric]:
        metrics = [Metric(name="Board Items", value=self._items_count(payload))]
        if payload.board_state:
            metrics.append(Metric(name="Board State", value=payload.board_state))
        return metrics

    def extract_platform_specific(self, payload: MondayPayload) -> Dict[str, Any]:
        return {
            "groups": payload.groups,
            "columns": payload.columns,
            "itemsCount": self._items_count(payload),
            "boardState": payload.board_state,
        }

    @staticmethod
    def _items_count(payload: MondayPayload) -> int:
        return payload.items_count if payload.items_count is not None else len(payload.items)
