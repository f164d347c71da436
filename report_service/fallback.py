# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Fallback and sample project data.

Provides deterministic synthetic ProjectData without contacting any
platform:

- `generate` builds the failure placeholder substituted whenever the
  live pipeline cannot produce a result.
- `generate_sample` builds the curated demo project for a platform.

Both set `fallbackData` and pin `dataQuality` to fixed synthetic values.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .models.project_data import (
    DataQuality,
    Metric,
    Platform,
    ProjectData,
    Sprint,
    TeamMember,
)
from .models.raw import TaskRecord
from .models.requests import FetchConfig
from .normalization.normalizer import StatusPriorityNormalizer
from .utils.dates import utc_now

# Synthetic, not measured
FALLBACK_QUALITY = DataQuality(completeness=85, accuracy=90, freshness=100)

PLATFORM_LABELS = {
    Platform.JIRA: "Jira",
    Platform.MONDAY: "Monday.com",
    Platform.TROFOS: "TROFOS",
}

SYSTEM_ADMIN = TeamMember(
    id="fallback_member",
    name="System Admin",
    role="Administrator",
    email="admin@system.local",
)

# (name, status, assignee, priority)
SampleTask = Tuple[str, str, str, str]


class FallbackDataProvider:
    """Deterministic synthetic datasets per platform"""

    # Sample projects: tasks, team and headline metrics per platform
    SAMPLE_TASKS: Dict[Platform, Sequence[SampleTask]] = {
        Platform.JIRA: (
            ("PRISM-1: Setup Project Repository", "Done", "Kelvin", "High"),
            ("PRISM-2: Implement Auth Service", "In Progress", "Jian Da", "Highest"),
            ("PRISM-3: Create Frontend Components", "In Progress", "Bryan", "Medium"),
            ("PRISM-4: Fix Login Bug", "To Do", "Kelvin", "High"),
        ),
        Platform.MONDAY: (
            ("Design UI Components", "Done", "Bryan", "Medium"),
            ("Implement API Gateway", "Working on it", "Jian Da", "High"),
            ("Write Unit Tests", "Working on it", "Kelvin", "Medium"),
            ("Setup CI/CD Pipeline", "Stuck", "Jian Da", "Critical"),
        ),
        Platform.TROFOS: (
            ("Market Research", "Completed", "Bryan", "MEDIUM"),
            ("Competitor Analysis", "Completed", "Kelvin", "LOW"),
            ("Platform Development", "In Progress", "Jian Da", "HIGH"),
            ("User Testing", "Pending", "Bryan", "MEDIUM"),
        ),
    }

    SAMPLE_TEAMS: Dict[Platform, Sequence[Tuple[str, str]]] = {
        Platform.JIRA: (
            ("Kelvin", "Project Lead"),
            ("Jian Da", "Backend Developer"),
            ("Bryan", "Frontend Developer"),
        ),
        Platform.MONDAY: (
            ("Bryan", "UI/UX Designer"),
            ("Jian Da", "Backend Developer"),
            ("Kelvin", "Full Stack Developer"),
        ),
        Platform.TROFOS: (
            ("Bryan", "Research Lead"),
            ("Jian Da", "Technical Lead"),
            ("Kelvin", "Project Manager"),
        ),
    }

    SAMPLE_METRICS: Dict[Platform, Sequence[Tuple[str, Any]]] = {
        Platform.JIRA: (("Story Points Completed", 34), ("Open Issues", 23), ("Bugs", 7)),
        Platform.MONDAY: (("Tasks Completed", 45), ("In Progress", 15), ("Blocked", 5)),
        Platform.TROFOS: (("Tasks Completed", 27), ("Resources Utilized", "85%"), ("Budget Consumed", "32%")),
    }

    def __init__(
        self,
        normalizer: Optional[StatusPriorityNormalizer] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.normalizer = normalizer or StatusPriorityNormalizer()
        self._clock = clock

    def generate(self, config: FetchConfig, reason: Optional[str] = None) -> ProjectData:
        """
        Build the placeholder project used when a live fetch fails.

        Args:
            config: The fetch request that failed
            reason: Short failure description kept in the extension bag

        Returns:
            ProjectData with a single "fetch failed" task and a System Admin team
        """
        now = self._clock()
        platform = config.platform
        task = self.normalizer.normalize_task(
            TaskRecord(
                id="fallback_1",
                name="Data fetch failed - using sample data",
                raw_status="Error",
                assignee="System",
                raw_priority="High",
                created=now,
                updated=now,
            ),
            platform,
        )
        return ProjectData(
            id=config.project_id,
            name=config.title or f"{PLATFORM_LABELS[platform]} Project - {config.project_id}",
            platform=platform,
            description="Fallback data - unable to fetch from platform",
            tasks=[task],
            team=[SYSTEM_ADMIN],
            metrics=[
                Metric(name="Status", value="Data Unavailable"),
                Metric(name="Connection", value="Failed"),
                Metric(name="Last Attempt", value=now.isoformat()),
            ],
            sprints=self._synthetic_sprints(platform, now),
            platform_specific={
                **self._extension_bag(platform, task_count=1),
                "fallbackReason": reason or "unknown",
            },
            fallback_data=True,
            data_quality=FALLBACK_QUALITY,
            last_updated=now,
        )

    def generate_sample(self, platform: Platform, project_id: str = "sample", title: Optional[str] = None) -> ProjectData:
        """Build the curated demo project for a platform"""
        now = self._clock()
        tasks = [
            self.normalizer.normalize_task(
                TaskRecord(
                    id=f"{platform.value}-sample-{index + 1}",
                    name=name,
                    raw_status=status,
                    assignee=assignee,
                    raw_priority=priority,
                    created=now - timedelta(days=21 - index * 3),
                    updated=now - timedelta(days=index),
                ),
                platform,
            )
            for index, (name, status, assignee, priority) in enumerate(self.SAMPLE_TASKS[platform])
        ]
        return ProjectData(
            id=project_id,
            name=title or f"{PLATFORM_LABELS[platform]} Sample Project",
            platform=platform,
            description=f"Sample data for {PLATFORM_LABELS[platform]}",
            tasks=tasks,
            team=[
                TeamMember(id=f"{platform.value}-member-{index + 1}", name=name, role=role)
                for index, (name, role) in enumerate(self.SAMPLE_TEAMS[platform])
            ],
            metrics=[Metric(name=name, value=value) for name, value in self.SAMPLE_METRICS[platform]],
            sprints=self._synthetic_sprints(platform, now),
            platform_specific={**self._extension_bag(platform, task_count=len(tasks)), "sample": True},
            fallback_data=True,
            data_quality=FALLBACK_QUALITY,
            last_updated=now,
        )

    @staticmethod
    def _synthetic_sprints(platform: Platform, now: datetime) -> List[Sprint]:
        """A finished sprint followed by the current one"""
        finished, current = ("COMPLETED", "ACTIVE") if platform == Platform.TROFOS else ("closed", "active")
        return [
            Sprint(
                id=f"{platform.value}-sprint-1",
                name="Sprint 1",
                start_date=now - timedelta(days=28),
                end_date=now - timedelta(days=15),
                status=finished,
                completion=100,
            ),
            Sprint(
                id=f"{platform.value}-sprint-2",
                name="Sprint 2",
                start_date=now - timedelta(days=14),
                end_date=now - timedelta(days=1),
                status=current,
                completion=65,
            ),
        ]

    @staticmethod
    def _extension_bag(platform: Platform, task_count: int) -> Dict[str, Any]:
        if platform == Platform.JIRA:
            return {"projectKey": None, "issueCount": task_count}
        if platform == Platform.MONDAY:
            return {"groups": [], "columns": [], "itemsCount": task_count, "boardState": None}
        return {"backlogCount": task_count, "sprintCount": 2, "totalStoryPoints": 0}
