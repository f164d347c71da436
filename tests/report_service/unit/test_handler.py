# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Unit tests for ReportHandler
"""

import pytest

from report_service.handlers import ReportHandler
from report_service.jobs import InMemoryJobStore, ReportOrchestrator, ReportWorkerPool
from report_service.models.report_job import JobStatus
from report_service.utils.errors import (
    InvalidJobTransitionError,
    JobNotFoundError,
    QueueFullError,
    ReportNotReadyError,
    ValidationError,
)


@pytest.fixture
def store():
    return InMemoryJobStore()


@pytest.fixture
def handler(store, data_service):
    # Workers are never started; jobs stay queued
    orchestrator = ReportOrchestrator(data_service, generator=None, store=store)
    return ReportHandler(store, ReportWorkerPool(orchestrator, store, size=1, max_queue_size=2))


VALID = {"platform": "jira", "connectionId": "c1", "projectId": "p1", "title": "Q2 Review"}


class TestCreateReport:
    """Tests for create_report."""

    def test_creates_queued_job(self, handler, store):
        """Test a valid request yields a queued job."""
        job = handler.create_report({**VALID, "configuration": {"audience": "exec"}})

        assert job.status == JobStatus.QUEUED
        assert job.title == "Q2 Review"
        assert job.platform == "jira"
        assert job.template_id == "standard"
        assert job.configuration == {"audience": "exec", "connectionId": "c1", "projectId": "p1"}
        assert store.get(job.id) is not None
        assert handler.pool.queued_count == 1

    def test_default_title(self, handler):
        """Test the title defaults to Project Report."""
        payload = {key: value for key, value in VALID.items() if key != "title"}
        assert handler.create_report(payload).title == "Project Report"

    def test_title_from_configuration(self, handler):
        """Test a title sent inside configuration names the job."""
        payload = {key: value for key, value in VALID.items() if key != "title"}
        job = handler.create_report({**payload, "configuration": {"title": "Sprint Demo"}})
        assert job.title == "Sprint Demo"

    def test_top_level_title_wins(self, handler):
        """Test the top-level title takes precedence over configuration."""
        job = handler.create_report({**VALID, "configuration": {"title": "Sprint Demo"}})
        assert job.title == "Q2 Review"

    def test_numeric_ids(self, handler):
        """Test integer project and connection ids are accepted as strings."""
        job = handler.create_report({"platform": "trofos", "connectionId": 7, "projectId": 42})
        assert job.configuration["connectionId"] == "7"
        assert job.configuration["projectId"] == "42"

    def test_monday_alias(self, handler):
        """Test monday.com is accepted as monday."""
        assert handler.create_report({**VALID, "platform": "monday.com"}).platform == "monday"

    @pytest.mark.parametrize("payload, field", [
        ({"platform": "jira", "projectId": "p1"}, "connectionId"),
        ({"platform": "jira", "connectionId": "c1", "projectId": ""}, "projectId"),
        ({"platform": "asana", "connectionId": "c1", "projectId": "p1"}, "platform"),
        ({**VALID, "title": "x" * 201}, "title"),
    ])
    def test_invalid_request_creates_no_job(self, handler, store, payload, field):
        """Test invalid requests are rejected before any job exists."""
        with pytest.raises(ValidationError) as exc_info:
            handler.create_report(payload)

        assert field in exc_info.value.message
        assert len(store) == 0
        assert handler.pool.queued_count == 0

    def test_queue_full_creates_no_job(self, handler, store):
        """Test a refused submit leaves no job behind."""
        handler.create_report(VALID)
        handler.create_report(VALID)
        with pytest.raises(QueueFullError):
            handler.create_report(VALID)
        assert len(store) == 2


class TestQueries:
    """Tests for status, listing and downloads."""

    def test_get_status(self, handler):
        """Test status polling fields."""
        job = handler.create_report(VALID)
        assert handler.get_status(job.id) == {"status": JobStatus.QUEUED, "progress": 0, "error": None}

    def test_unknown_job(self, handler):
        """Test unknown ids raise JobNotFoundError."""
        with pytest.raises(JobNotFoundError):
            handler.get_report("missing")
        with pytest.raises(JobNotFoundError):
            handler.get_status("missing")

    def test_list_newest_first(self, handler):
        """Test listing order."""
        first = handler.create_report(VALID)
        second = handler.create_report(VALID)
        assert [job.id for job in handler.list_reports()] == [second.id, first.id]

    def test_download_not_ready(self, handler):
        """Test downloads require a completed job."""
        job = handler.create_report(VALID)
        with pytest.raises(ReportNotReadyError):
            handler.resolve_download(job.id)

    def test_download_missing_file(self, handler, store, tmp_path):
        """Test a completed job whose artifact vanished."""
        job = handler.create_report(VALID)
        job.start()
        job.complete(str(tmp_path / "gone.md"))
        store.save(job)
        with pytest.raises(JobNotFoundError, match="Report file not found"):
            handler.resolve_download(job.id)

    def test_download_path(self, handler, store, tmp_path):
        """Test a completed job resolves to its artifact."""
        artifact = tmp_path / "report.md"
        artifact.write_text("# Report\n")
        job = handler.create_report(VALID)
        job.start()
        job.complete(str(artifact))
        store.save(job)
        assert handler.resolve_download(job.id) == str(artifact)


class TestCancelReport:
    """Tests for cancel_report."""

    def test_cancel_queued(self, handler):
        """Test cancelling a queued job fails it."""
        job = handler.create_report(VALID)
        cancelled = handler.cancel_report(job.id)
        assert cancelled.status == JobStatus.FAILED
        assert cancelled.error == "Report generation cancelled"

    def test_cancel_terminal(self, handler):
        """Test terminal jobs cannot be cancelled."""
        job = handler.create_report(VALID)
        handler.cancel_report(job.id)
        with pytest.raises(InvalidJobTransitionError):
            handler.cancel_report(job.id)
