# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Tagged raw payload records.

Each platform adapter parses the gateway's JSON body into one of these
records. Item lists keep the platform's native dictionaries; only the
owning adapter knows their field names.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

from .project_data import Platform


@dataclass
class JiraPayload:
    """Jira project with its issues"""
    platform: ClassVar[Platform] = Platform.JIRA
    id: Optional[str] = None
    key: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    issues: List[Dict[str, Any]] = field(default_factory=list)
    team: List[Dict[str, Any]] = field(default_factory=list)
    sprints: List[Dict[str, Any]] = field(default_factory=list)
    metrics: List[Dict[str, Any]] = field(default_factory=list)
    issue_count: Optional[int] = None
    open_issues: Optional[int] = None


@dataclass
class MondayPayload:
    """Monday.com board with its items"""
    platform: ClassVar[Platform] = Platform.MONDAY
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    items: List[Dict[str, Any]] = field(default_factory=list)
    team: List[Dict[str, Any]] = field(default_factory=list)
    sprints: List[Dict[str, Any]] = field(default_factory=list)
    metrics: List[Dict[str, Any]] = field(default_factory=list)
    groups: List[Any] = field(default_factory=list)
    columns: List[Any] = field(default_factory=list)
    items_count: Optional[int] = None
    board_state: Optional[str] = None


@dataclass
class TrofosPayload:
    """TROFOS project with backlog and sprints"""
    platform: ClassVar[Platform] = Platform.TROFOS
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    backlog_items: List[Dict[str, Any]] = field(default_factory=list)
    team: List[Dict[str, Any]] = field(default_factory=list)
    sprints: List[Dict[str, Any]] = field(default_factory=list)
    metrics: List[Dict[str, Any]] = field(default_factory=list)
    sprint_count: Optional[int] = None
    total_story_points: Optional[float] = None


RawPayload = Union[JiraPayload, MondayPayload, TrofosPayload]


@dataclass
class TaskRecord:
    """Platform-neutral task fields pulled out of a raw item, before normalization"""
    id: str
    name: str
    raw_status: str = ""
    assignee: Optional[str] = None
    raw_priority: str = ""
    created: Any = None
    updated: Any = None
    description: Optional[str] = None
    labels: List[str] = field(default_factory=list)
    story_points: Optional[float] = None
    sprint_id: Optional[str] = None
