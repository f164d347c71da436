# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Pytest configuration and fixtures for all tests.

This file ensures the project root is in the Python path
so that imports work correctly for all test modules.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import pytest for fixtures
import pytest

FIXED_NOW = datetime(2025, 4, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def project_root_path():
    """Return the project root path."""
    return project_root


@pytest.fixture
def fixed_now():
    """A fixed 'now' used by clocks in tests."""
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock callable returning FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def jira_body():
    """Gateway response for a Jira project, mixing flat and REST-native issues."""
    return {
        "id": "10001",
        "key": "PRISM",
        "name": "PRISM Platform",
        "description": "Reporting platform",
        "issues": [
            {
                "key": "PRISM-1",
                "summary": "Setup Project Repository",
                "status": {"name": "Done"},
                "assignee": {"displayName": "Kelvin"},
                "priority": {"name": "High"},
                "created": "2025-04-01T09:00:00.000+0000",
                "updated": "2025-04-10T09:00:00.000+0000",
            },
            {
                "key": "PRISM-2",
                "fields": {
                    "summary": "Implement Auth Service",
                    "status": {"name": "In Progress"},
                    "assignee": {"displayName": "Jian Da"},
                    "priority": {"name": "Highest"},
                    "created": "2025-04-02T09:00:00.000+0000",
                    "updated": "2025-04-18T09:00:00.000+0000",
                    "customfield_10016": 5,
                },
            },
            {
                "key": "PRISM-3",
                "summary": "Fix Login Bug",
                "status": "Waiting for Customer",
                "assignee": "Bryan",
                "priority": "Medium",
                "created": "2025-04-05T09:00:00Z",
                "updated": "2025-04-19T09:00:00Z",
            },
            {
                "key": "PRISM-4",
                "summary": "Write Onboarding Docs",
                "status": "To Do",
                "assignee": None,
                "priority": "Low",
                "created": "2025-02-01T00:00:00Z",
                "updated": "2025-02-15T00:00:00Z",
            },
        ],
        "team": [
            {"displayName": "Kelvin", "role": "Project Lead", "emailAddress": "kelvin@example.com"},
            {"displayName": "User 1", "role": "Tester"},
        ],
        "sprints": [
            {"id": 1, "name": "Sprint 1", "startDate": "2025-04-01", "endDate": "2025-04-14", "state": "closed"},
        ],
        "issueCount": 4,
        "openIssues": 3,
    }


@pytest.fixture
def monday_body():
    """Gateway response for a Monday.com board."""
    return {
        "id": "board-1",
        "name": "Website Redesign",
        "items": [
            {
                "id": "1",
                "name": "Design UI Components",
                "status": "Done",
                "assignee": "Bryan",
                "priority": "Medium",
                "created_at": "2025-04-01T10:00:00Z",
                "updated_at": "2025-04-15T10:00:00Z",
                "group": {"id": "g1", "title": "Sprint A"},
            },
            {
                "id": "2",
                "title": "Implement API Gateway",
                "status": {"label": "Working on it"},
                "assignee": {"name": "Jian Da"},
                "priority": "High",
                "created": "2025-04-03T10:00:00Z",
                "updated": "2025-04-16T10:00:00Z",
            },
            {
                "id": "3",
                "name": "Setup CI/CD Pipeline",
                "status": "Stuck",
                "assignee": [{"name": "Kelvin"}, {"name": "Bryan"}],
                "priority": "Critical",
                "created_at": "2025-04-04T10:00:00Z",
                "updated_at": "2025-04-17T10:00:00Z",
            },
        ],
        "team": [{"name": "Bryan", "role": "UI/UX Designer"}],
        "groups": [{"id": "g1", "title": "Sprint A"}],
        "columns": [{"id": "status", "title": "Status"}],
        "itemsCount": 3,
        "boardState": "active",
    }


@pytest.fixture
def trofos_body():
    """Gateway response for a TROFOS project."""
    return {
        "id": "42",
        "name": "Research Portal",
        "backlogItems": [
            {
                "id": 1,
                "title": "Market Research",
                "status": "Completed",
                "assignedTo": "Bryan",
                "priority": "HIGH",
                "storyPoints": 5,
                "createdAt": "2025-03-01T08:00:00Z",
                "updatedAt": "2025-04-12T08:00:00Z",
                "sprintId": 1,
            },
            {
                "id": 2,
                "title": "Platform Development",
                "status": "In Progress",
                "assignedTo": {"name": "Jian Da"},
                "priority": "MEDIUM",
                "storyPoints": 8,
                "sprintId": 2,
            },
            {
                "id": 3,
                "name": "User Testing",
                "status": "Pending",
                "assignee": "Kelvin",
                "priority": "LOW",
                "story_points": 3,
            },
        ],
        "resources": [{"name": "Kelvin", "role": "Project Manager"}],
        "sprints": [
            {"id": 1, "name": "Sprint 1", "start_date": "2025-03-01", "end_date": "2025-03-14",
             "status": "COMPLETED", "velocity": 18},
            {"id": 2, "name": "Sprint 2", "startDate": "2025-03-15", "endDate": "2025-03-28",
             "status": "COMPLETED", "velocity": 21},
            {"id": 3, "name": "Sprint 3", "status": "ACTIVE", "velocity": 5},
        ],
        "sprintCount": 3,
    }


@pytest.fixture
def sample_project(clock):
    """Canonical sample project for job and generator tests."""
    from report_service.fallback import FallbackDataProvider
    from report_service.models.project_data import Platform

    return FallbackDataProvider(clock=clock).generate_sample(Platform.JIRA)


@pytest.fixture
def data_service(sample_project):
    """Stand-in ProjectDataService returning the sample project."""
    from unittest.mock import AsyncMock, MagicMock

    service = MagicMock()
    service.fetch_project_data = AsyncMock(return_value=sample_project)
    return service


@pytest.fixture
def make_job():
    """Factory for queued report jobs."""
    from report_service.models.report_job import ReportJob

    def _make_job(title="Project Report", template_id="standard", **configuration):
        return ReportJob(
            title=title,
            platform="jira",
            template_id=template_id,
            configuration={"connectionId": "c1", "projectId": "p1", **configuration},
        )

    return _make_job
