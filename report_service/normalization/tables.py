# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Status and priority lookup tables per platform.

Keys are lowercase, trimmed platform strings. The tables are read-only
mappings and are passed into StatusPriorityNormalizer at construction.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple

from ..models.project_data import NormalizedPriority, NormalizedStatus, Platform


class StatusRule(NamedTuple):
    normalized: NormalizedStatus
    category: str
    color: str


class PriorityRule(NamedTuple):
    normalized: NormalizedPriority
    numeric: int


# Display categories and colors
TODO = StatusRule(NormalizedStatus.TODO, "To Do", "#6B7280")
IN_PROGRESS = StatusRule(NormalizedStatus.IN_PROGRESS, "In Progress", "#3B82F6")
DONE = StatusRule(NormalizedStatus.DONE, "Done", "#10B981")
BLOCKED = StatusRule(NormalizedStatus.BLOCKED, "Blocked", "#EF4444")

STATUS_RULES: Dict[NormalizedStatus, StatusRule] = {
    rule.normalized: rule for rule in (TODO, IN_PROGRESS, DONE, BLOCKED)
}

PRIORITY_COLORS: Dict[NormalizedPriority, str] = {
    NormalizedPriority.CRITICAL: "#DE350B",
    NormalizedPriority.HIGH: "#FF5630",
    NormalizedPriority.MEDIUM: "#FFAB00",
    NormalizedPriority.LOW: "#36B37E",
}

DEFAULT_PRIORITY = PriorityRule(NormalizedPriority.MEDIUM, 3)


def _status_table(**groups) -> Dict[str, StatusRule]:
    table: Dict[str, StatusRule] = {}
    for rule_name, names in groups.items():
        rule = {"todo": TODO, "progress": IN_PROGRESS, "done": DONE, "blocked": BLOCKED}[rule_name]
        for name in names:
            table[name] = rule
    return table


_COMMON_TODO = ("to do", "todo", "open", "new", "created", "backlog")
_COMMON_PROGRESS = ("in progress", "inprogress", "progress", "in review", "review", "testing", "development")
_COMMON_DONE = ("done", "complete", "completed", "closed", "resolved", "finished")
_COMMON_BLOCKED = ("blocked", "impediment", "on hold")

JIRA_STATUSES = _status_table(
    todo=_COMMON_TODO + ("selected for development", "reopened"),
    progress=_COMMON_PROGRESS + ("in development", "code review", "qa"),
    done=_COMMON_DONE + ("won't do", "won't fix"),
    blocked=_COMMON_BLOCKED + ("pending",),
)

MONDAY_STATUSES = _status_table(
    todo=_COMMON_TODO + ("not started",),
    progress=_COMMON_PROGRESS + ("working on it", "waiting for review"),
    done=_COMMON_DONE,
    blocked=_COMMON_BLOCKED + ("stuck", "pending"),
)

# TROFOS uses "pending" for items not yet picked up
TROFOS_STATUSES = _status_table(
    todo=_COMMON_TODO + ("pending", "to_do", "planned"),
    progress=_COMMON_PROGRESS + ("in_progress", "ongoing"),
    done=_COMMON_DONE,
    blocked=_COMMON_BLOCKED + ("on_hold",),
)

_COMMON_PRIORITIES = {
    "critical": PriorityRule(NormalizedPriority.CRITICAL, 5),
    "high": PriorityRule(NormalizedPriority.HIGH, 4),
    "medium": PriorityRule(NormalizedPriority.MEDIUM, 3),
    "low": PriorityRule(NormalizedPriority.LOW, 2),
}

JIRA_PRIORITIES = {
    **_COMMON_PRIORITIES,
    "highest": PriorityRule(NormalizedPriority.CRITICAL, 5),
    "blocker": PriorityRule(NormalizedPriority.CRITICAL, 5),
    "major": PriorityRule(NormalizedPriority.HIGH, 4),
    "minor": PriorityRule(NormalizedPriority.LOW, 2),
    "lowest": PriorityRule(NormalizedPriority.LOW, 1),
    "trivial": PriorityRule(NormalizedPriority.LOW, 1),
}

MONDAY_PRIORITIES = {
    **_COMMON_PRIORITIES,
    "urgent": PriorityRule(NormalizedPriority.CRITICAL, 5),
}

TROFOS_PRIORITIES = {
    **_COMMON_PRIORITIES,
    "very high": PriorityRule(NormalizedPriority.CRITICAL, 5),
    "very_high": PriorityRule(NormalizedPriority.CRITICAL, 5),
    "very low": PriorityRule(NormalizedPriority.LOW, 1),
    "very_low": PriorityRule(NormalizedPriority.LOW, 1),
}


def _freeze(tables: Mapping[Platform, Mapping[str, Any]]) -> Mapping[Platform, Mapping[str, Any]]:
    return MappingProxyType({platform: MappingProxyType(dict(table)) for platform, table in tables.items()})


DEFAULT_STATUS_TABLES = _freeze({
    Platform.JIRA: JIRA_STATUSES,
    Platform.MONDAY: MONDAY_STATUSES,
    Platform.TROFOS: TROFOS_STATUSES,
})

DEFAULT_PRIORITY_TABLES = _freeze({
    Platform.JIRA: JIRA_PRIORITIES,
    Platform.MONDAY: MONDAY_PRIORITIES,
    Platform.TROFOS: TROFOS_PRIORITIES,
})
