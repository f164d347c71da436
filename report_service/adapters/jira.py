# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Jira adapter

Accepts both the gateway's flattened issue shape
(`summary`, `status`, `assignee`, `priority`) and the REST-native shape
where the same data lives under `fields`.
"""

from typing import Any, Dict, List

from ..models.project_data import Metric, Platform
from ..models.raw import JiraPayload, TaskRecord
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


class JiraAdapter(BasePlatformAdapter):
    """Jira projects and issues"""

    platform = Platform.JIRA
    url_templates = (
        "/api/connections/{connection_id}/projects/{project_id}",
        "/api/jira/connections/{connection_id}/projects/{project_id}",
        "/api/platforms/jira/connections/{connection_id}/projects/{project_id}",
    )

    def parse_payload(self, body: Any) -> JiraPayload:
        body = require_object(body, self.platform)
        return JiraPayload(
            id=optional_str(first(body, "id", "key")),
            key=optional_str(body.get("key")),
            name=optional_str(body.get("name")),
            description=optional_str(body.get("description")),
            issues=list_field(body, "issues", "tasks"),
            team=list_field(body, "team", "members"),
            sprints=list_field(body, "sprints"),
            metrics=list_field(body, "metrics"),
            issue_count=optional_int(body.get("issueCount")),
            open_issues=optional_int(body.get("openIssues")),
        )

    def extract_tasks(self, payload: JiraPayload) -> List[TaskRecord]:
        tasks = []
        for index, issue in enumerate(payload.issues):
            if not isinstance(issue, dict):
                continue
            fields: Dict[str, Any] = issue.get("fields") if isinstance(issue.get("fields"), dict) else {}
            labels = first(issue, "labels") or fields.get("labels") or []
            tasks.append(TaskRecord(
                id=str(first(issue, "key", "id") or f"jira-{index + 1}"),
                name=str(first(issue, "summary", "name") or fields.get("summary") or ""),
                raw_status=label_of(first(issue, "status") or fields.get("status")),
                assignee=name_of(first(issue, "assignee") or fields.get("assignee")),
                raw_priority=label_of(first(issue, "priority") or fields.get("priority")),
                created=first(issue, "created") or fields.get("created"),
                updated=first(issue, "updated") or fields.get("updated"),
                description=optional_str(first(issue, "description") or fields.get("description")),
                labels=[str(label) for label in labels] if isinstance(labels, list) else [],
                story_points=optional_float(
                    first(issue, "storyPoints") or fields.get("customfield_10016")
                ),
                sprint_id=optional_str(first(issue, "sprintId")),
            ))
        return tasks

    def platform_metrics(self, payload: JiraPayload) -> List[Metric]:
        metrics = []
        if payload.key:
            metrics.append(Metric(name="Project Key", value=payload.key))
        issue_count = payload.issue_count if payload.issue_count is not None else len(payload.issues)
        metrics.append(Metric(name="Issue Count", value=issue_count))
        if payload.open_issues is not None:
            metrics.append(Metric(name="Open Issues", value=payload.open_issues))
        return metrics

    def extract_platform_specific(self, payload: JiraPayload) -> Dict[str, Any]:
        return {
            "projectKey": payload.key,
            "issueCount": payload.issue_count if payload.issue_count is not None else len(payload.issues),
        }
