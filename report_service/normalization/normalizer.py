# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Status and priority normalization.

Maps arbitrary platform strings onto the four canonical statuses and the
four canonical priorities. Both operations are total: every input,
including None and the empty string, produces a canonical value.
"""

from typing import Any, Mapping, NamedTuple, Optional

from ..models.project_data import UNASSIGNED, NormalizedPriority, NormalizedStatus, Platform, Task
from ..models.raw import TaskRecord
from ..utils.dates import parse_datetime
from .tables import (
    BLOCKED,
    DEFAULT_PRIORITY,
    DEFAULT_PRIORITY_TABLES,
    DEFAULT_STATUS_TABLES,
    DONE,
    IN_PROGRESS,
    TODO,
    PriorityRule,
    StatusRule,
)


class StatusResult(NamedTuple):
    normalized: NormalizedStatus
    category: str
    color: str


class PriorityResult(NamedTuple):
    normalized: NormalizedPriority
    numeric: int


# Ordered substring heuristics for unmapped statuses
_STATUS_HEURISTICS = (
    (("done", "complete", "close"), DONE),
    (("progress", "develop", "work"), IN_PROGRESS),
    (("block", "stuck", "wait"), BLOCKED),
)


def _key(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, dict):
        raw = raw.get("name") or raw.get("label") or raw.get("text") or ""
    return str(raw).strip().lower()


class StatusPriorityNormalizer:
    """Lookup-then-heuristic normalizer over injected per-platform tables"""

    def __init__(
        self,
        status_tables: Optional[Mapping[Platform, Mapping[str, StatusRule]]] = None,
        priority_tables: Optional[Mapping[Platform, Mapping[str, PriorityRule]]] = None,
    ):
        self._status_tables = status_tables if status_tables is not None else DEFAULT_STATUS_TABLES
        self._priority_tables = priority_tables if priority_tables is not None else DEFAULT_PRIORITY_TABLES

    def normalize_status(self, raw: Any, platform: Platform) -> StatusResult:
        key = _key(raw)
        rule = self._status_tables.get(platform, {}).get(key)
        if rule is None:
            rule = self._heuristic_status(key)
        return StatusResult(rule.normalized, rule.category, rule.color)

    @staticmethod
    def _heuristic_status(key: str) -> StatusRule:
        for keywords, rule in _STATUS_HEURISTICS:
            if any(keyword in key for keyword in keywords):
                return rule
        return TODO

    def normalize_priority(self, raw: Any, platform: Platform) -> PriorityResult:
        key = _key(raw)
        rule = self._priority_tables.get(platform, {}).get(key, DEFAULT_PRIORITY)
        return PriorityResult(rule.normalized, rule.numeric)

    def normalize_task(self, record: TaskRecord, platform: Platform) -> Task:
        """Build a canonical Task from an adapter's TaskRecord"""
        status = self.normalize_status(record.raw_status, platform)
        priority = self.normalize_priority(record.raw_priority, platform)
        assignee = (record.assignee or "").strip() or UNASSIGNED
        return Task(
            id=record.id,
            name=record.name.strip(),
            raw_status=record.raw_status,
            normalized_status=status.normalized,
            display_category=status.category,
            color=status.color,
            assignee=assignee,
            raw_priority=record.raw_priority,
            normalized_priority=priority.normalized,
            created=parse_datetime(record.created),
            updated=parse_datetime(record.updated),
            description=record.description,
            labels=list(record.labels),
            story_points=record.story_points,
            sprint_id=record.sprint_id,
        )
