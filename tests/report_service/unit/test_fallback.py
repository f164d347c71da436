# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Unit tests for FallbackDataProvider
"""

import pytest

from report_service.fallback import FALLBACK_QUALITY, FallbackDataProvider
from report_service.models.project_data import NormalizedStatus, Platform
from report_service.models.requests import FetchConfig


@pytest.fixture
def provider(clock):
    return FallbackDataProvider(clock=clock)


def config(platform=Platform.JIRA, title=None):
    return FetchConfig(platform=platform, connection_id="c1", project_id="p1", title=title)


class TestGenerate:
    """Tests for the failure placeholder."""

    def test_shape(self, provider, fixed_now):
        """Test the placeholder is fully populated and flagged."""
        project = provider.generate(config(), "boom")

        assert project.fallback_data is True
        assert project.id == "p1"
        assert project.name == "Jira Project - p1"
        assert project.description == "Fallback data - unable to fetch from platform"
        assert len(project.tasks) == 1
        assert project.tasks[0].id == "fallback_1"
        assert "fetch failed" in project.tasks[0].name
        assert project.tasks[0].assignee == "System"
        assert [(m.name, m.role) for m in project.team] == [("System Admin", "Administrator")]
        assert project.team[0].email == "admin@system.local"
        assert len(project.sprints) == 2
        assert project.data_quality == FALLBACK_QUALITY
        assert project.last_updated == fixed_now
        assert project.platform_specific["fallbackReason"] == "boom"

    def test_metrics(self, provider, fixed_now):
        """Test the unavailability metrics."""
        metrics = {m.name: m.value for m in provider.generate(config()).metrics}
        assert metrics == {
            "Status": "Data Unavailable",
            "Connection": "Failed",
            "Last Attempt": fixed_now.isoformat(),
        }

    def test_title_used_as_name(self, provider):
        """Test the configured title names the project."""
        assert provider.generate(config(title="Q2 Review")).name == "Q2 Review"

    def test_deterministic(self, provider):
        """Test repeated calls give identical data."""
        assert provider.generate(config(), "x") == provider.generate(config(), "x")

    @pytest.mark.parametrize("platform,key", [
        (Platform.JIRA, "projectKey"),
        (Platform.MONDAY, "boardState"),
        (Platform.TROFOS, "backlogCount"),
    ])
    def test_platform_flavored_extension_bag(self, provider, platform, key):
        """Test each platform gets its own extension bag keys."""
        project = provider.generate(config(platform))
        assert project.platform == platform
        assert key in project.platform_specific

    def test_trofos_sprint_statuses(self, provider):
        """Test TROFOS sprints use its status vocabulary."""
        sprints = provider.generate(config(Platform.TROFOS)).sprints
        assert [s.status for s in sprints] == ["COMPLETED", "ACTIVE"]


class TestGenerateSample:
    """Tests for the curated demo datasets."""

    @pytest.mark.parametrize("platform", list(Platform))
    def test_sample_shape(self, provider, platform):
        """Test sample projects have tasks, team and two sprints."""
        project = provider.generate_sample(platform)
        assert project.fallback_data is True
        assert len(project.tasks) == 4
        assert len(project.team) == 3
        assert len(project.sprints) == 2
        assert project.data_quality == FALLBACK_QUALITY

    def test_monday_vocabulary_normalized(self, provider):
        """Test Monday statuses go through the normalizer."""
        tasks = provider.generate_sample(Platform.MONDAY).tasks
        assert [t.normalized_status for t in tasks] == [
            NormalizedStatus.DONE,
            NormalizedStatus.IN_PROGRESS,
            NormalizedStatus.IN_PROGRESS,
            NormalizedStatus.BLOCKED,
        ]

    def test_trofos_roles(self, provider):
        """Test TROFOS sample roles."""
        team = provider.generate_sample(Platform.TROFOS).team
        assert [(m.name, m.role) for m in team] == [
            ("Bryan", "Research Lead"),
            ("Jian Da", "Technical Lead"),
            ("Kelvin", "Project Manager"),
        ]
