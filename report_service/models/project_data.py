# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Canonical project data model.

Every platform (Jira, Monday.com, TROFOS) is normalized into these models
before reaching analytics or report generation. Instances are immutable
once constructed; JSON output uses camelCase keys.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..utils.errors import UnsupportedPlatformError


class Platform(str, Enum):
    """Supported upstream platforms"""
    JIRA = "jira"
    MONDAY = "monday"
    TROFOS = "trofos"

    @classmethod
    def parse(cls, value: Union[str, "Platform"]) -> "Platform":
        """Resolve a platform name, accepting `monday.com` as an alias."""
        if isinstance(value, Platform):
            return value
        key = str(value or "").strip().lower()
        if key == "monday.com":
            key = "monday"
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedPlatformError(str(value)) from None


class NormalizedStatus(str, Enum):
    """Reduced status set shared by all platforms"""
    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"
    BLOCKED = "blocked"


class NormalizedPriority(str, Enum):
    """Reduced priority set shared by all platforms"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


UNASSIGNED = "Unassigned"
DEFAULT_ROLE = "Team Member"


class CanonicalModel(BaseModel):
    """Base for read-only canonical records"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class Task(CanonicalModel):
    """A normalized task, issue, board item or backlog item"""
    id: str
    name: str
    raw_status: str = ""
    normalized_status: NormalizedStatus = NormalizedStatus.TODO
    display_category: str = "To Do"
    color: str = "#6B7280"
    assignee: str = UNASSIGNED
    raw_priority: str = ""
    normalized_priority: NormalizedPriority = NormalizedPriority.MEDIUM
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    description: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    story_points: Optional[float] = None
    sprint_id: Optional[str] = None


class TeamMember(CanonicalModel):
    """A project participant, deduplicated by name"""
    id: Optional[str] = None
    name: str
    role: str = DEFAULT_ROLE
    email: Optional[str] = None
    avatar: Optional[str] = None
    department: Optional[str] = None
    skills: List[str] = Field(default_factory=list)


class Sprint(CanonicalModel):
    """A sprint or iteration"""
    id: str
    name: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[str] = None
    completion: Optional[int] = Field(default=None, ge=0, le=100)
    velocity: Optional[float] = None


class Metric(CanonicalModel):
    """A named headline figure shown in reports"""
    name: str
    value: Union[int, float, str]


class DataQuality(CanonicalModel):
    """Completeness, accuracy and freshness as integer percentages"""
    completeness: int = Field(default=0, ge=0, le=100)
    accuracy: int = Field(default=0, ge=0, le=100)
    freshness: int = Field(default=0, ge=0, le=100)


class ProjectData(CanonicalModel):
    """The canonical project snapshot consumed by report generators"""
    id: str
    name: str
    platform: Platform
    description: Optional[str] = None
    tasks: List[Task] = Field(default_factory=list)
    team: List[TeamMember] = Field(default_factory=list)
    metrics: List[Metric] = Field(default_factory=list)
    sprints: List[Sprint] = Field(default_factory=list)
    platform_specific: Dict[str, Any] = Field(default_factory=dict)
    fallback_data: bool = False
    data_quality: DataQuality = Field(default_factory=DataQuality)
    last_updated: datetime

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys for generators and the API"""
        return self.model_dump(mode="json", by_alias=True)
