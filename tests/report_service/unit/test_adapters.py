# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Unit tests for platform adapters, the gateway client and the registry
"""

import httpx
import pytest

from report_service.adapters import (
    AdapterRegistry,
    JiraAdapter,
    MondayAdapter,
    TrofosAdapter,
    default_registry,
)
from report_service.client import GatewayClient
from report_service.models.project_data import Platform
from report_service.models.raw import JiraPayload, MondayPayload, TrofosPayload
from report_service.utils.errors import (
    ConnectorAuthError,
    ConnectorError,
    ConnectorNotFoundError,
    UnsupportedPlatformError,
)


def make_client(handler, token=None):
    """GatewayClient backed by an httpx.MockTransport."""
    return GatewayClient("http://gateway", token=token, timeout=5.0, transport=httpx.MockTransport(handler))


class TestGatewayClient:
    """Tests for GatewayClient error mapping."""

    @pytest.mark.asyncio
    async def test_returns_json_and_sends_token(self):
        """Test a 200 response is decoded and the bearer token is sent."""
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"id": "1"})

        async with make_client(handler, token="secret") as client:
            assert await client.get_json("/x") == {"id": "1"}
        assert seen["auth"] == "Bearer secret"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error_cls", [
        (401, ConnectorAuthError),
        (403, ConnectorAuthError),
        (404, ConnectorNotFoundError),
        (500, ConnectorError),
    ])
    async def test_status_errors(self, status, error_cls):
        """Test non-200 statuses map to connector errors."""
        async with make_client(lambda request: httpx.Response(status)) as client:
            with pytest.raises(error_cls) as exc_info:
                await client.get_json("/x")
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        """Test an undecodable body raises ConnectorError."""
        async with make_client(lambda request: httpx.Response(200, content=b"{not json")) as client:
            with pytest.raises(ConnectorError, match="Malformed JSON"):
                await client.get_json("/x")

    @pytest.mark.asyncio
    async def test_null_body(self):
        """Test a null body raises ConnectorError."""
        async with make_client(lambda request: httpx.Response(200, content=b"null")) as client:
            with pytest.raises(ConnectorError, match="Empty"):
                await client.get_json("/x")

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test transport timeouts raise ConnectorError."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ConnectorError, match="timed out"):
                await client.get_json("/x")

    def test_trailing_slash_removed(self):
        """Test trailing slash is removed from base URL."""
        assert GatewayClient("http://gateway/").base_url == "http://gateway"


class TestCandidateFetch:
    """Tests for trying candidate URL templates in order."""

    @pytest.mark.asyncio
    async def test_first_success_wins(self, jira_body):
        """Test the adapter stops at the first 200 response."""
        calls = []

        def handler(request):
            calls.append(request.url.path)
            if request.url.path.startswith("/api/connections/"):
                return httpx.Response(404)
            return httpx.Response(200, json=jira_body)

        async with make_client(handler) as client:
            payload = await JiraAdapter(client).fetch("c1", "p1")

        assert isinstance(payload, JiraPayload)
        assert calls == [
            "/api/connections/c1/projects/p1",
            "/api/jira/connections/c1/projects/p1",
        ]

    @pytest.mark.asyncio
    async def test_empty_body_tries_next_candidate(self, monday_body):
        """Test a null body counts as a failed candidate."""
        responses = iter([httpx.Response(200, content=b"null"), httpx.Response(200, json=monday_body)])

        async with make_client(lambda request: next(responses)) as client:
            payload = await MondayAdapter(client).fetch("c1", "b1")

        assert payload.name == "Website Redesign"

    @pytest.mark.asyncio
    async def test_all_candidates_fail_raises_last_error(self):
        """Test the last candidate's error propagates."""
        statuses = iter([500, 401, 404])

        async with make_client(lambda request: httpx.Response(next(statuses))) as client:
            with pytest.raises(ConnectorNotFoundError):
                await TrofosAdapter(client).fetch("c1", "p1")

    @pytest.mark.asyncio
    async def test_unwraps_data_envelope(self, trofos_body):
        """Test a {success, data} envelope is stripped."""
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": trofos_body})

        async with make_client(handler) as client:
            payload = await TrofosAdapter(client).fetch("c1", "42")

        assert payload.name == "Research Portal"

    def test_ids_are_url_quoted(self):
        """Test connection and project ids are escaped in paths."""
        adapter = JiraAdapter(GatewayClient("http://gateway"))
        assert adapter.candidate_paths("a/b", "p 1")[0] == "/api/connections/a%2Fb/projects/p%201"


class TestJiraAdapter:
    """Tests for Jira extraction."""

    @pytest.fixture
    def adapter(self):
        return JiraAdapter(GatewayClient("http://gateway"))

    def test_extract_tasks_handles_both_shapes(self, adapter, jira_body):
        """Test flat and fields-nested issues."""
        tasks = adapter.extract_tasks(adapter.parse_payload(jira_body))
        assert [t.id for t in tasks] == ["PRISM-1", "PRISM-2", "PRISM-3", "PRISM-4"]
        assert tasks[0].raw_status == "Done"
        assert tasks[0].assignee == "Kelvin"
        assert tasks[1].name == "Implement Auth Service"
        assert tasks[1].raw_priority == "Highest"
        assert tasks[1].story_points == 5.0
        assert tasks[3].assignee is None

    def test_metrics_and_extension_bag(self, adapter, jira_body):
        """Test platform metrics and extension bag."""
        payload = adapter.parse_payload(jira_body)
        metrics = {m.name: m.value for m in adapter.extract_metrics(payload)}
        assert metrics == {"Project Key": "PRISM", "Issue Count": 4, "Open Issues": 3}
        assert adapter.extract_platform_specific(payload) == {"projectKey": "PRISM", "issueCount": 4}

    def test_upstream_metrics_come_first(self, adapter, jira_body):
        """Test upstream metric entries precede platform metrics."""
        jira_body["metrics"] = [{"name": "Bugs", "value": 7}]
        metrics = adapter.extract_metrics(adapter.parse_payload(jira_body))
        assert metrics[0].name == "Bugs"

    def test_sprints(self, adapter, jira_body):
        """Test sprint parsing."""
        sprints = adapter.extract_sprints(adapter.parse_payload(jira_body))
        assert len(sprints) == 1
        assert sprints[0].name == "Sprint 1"
        assert sprints[0].status == "closed"
        assert sprints[0].start_date.day == 1

    def test_non_object_payload_rejected(self, adapter):
        """Test a list body is a shape error."""
        with pytest.raises(ConnectorError):
            adapter.parse_payload([1, 2, 3])

    def test_non_list_issues_rejected(self, adapter):
        """Test a non-list issues field is a shape error."""
        with pytest.raises(ConnectorError):
            adapter.parse_payload({"name": "x", "issues": {"a": 1}})


class TestMondayAdapter:
    """Tests for Monday.com extraction."""

    @pytest.fixture
    def adapter(self):
        return MondayAdapter(GatewayClient("http://gateway"))

    def test_assignee_shapes(self, adapter, monday_body):
        """Test string, object and list assignees."""
        tasks = adapter.extract_tasks(adapter.parse_payload(monday_body))
        assert [t.assignee for t in tasks] == ["Bryan", "Jian Da", "Kelvin"]
        assert tasks[1].name == "Implement API Gateway"
        assert tasks[1].raw_status == "Working on it"
        assert tasks[0].labels == ["Sprint A"]

    def test_metrics_and_extension_bag(self, adapter, monday_body):
        """Test board metrics and extension bag."""
        payload = adapter.parse_payload(monday_body)
        assert isinstance(payload, MondayPayload)
        metrics = {m.name: m.value for m in adapter.extract_metrics(payload)}
        assert metrics == {"Board Items": 3, "Board State": "active"}
        bag = adapter.extract_platform_specific(payload)
        assert bag["itemsCount"] == 3
        assert bag["groups"] == [{"id": "g1", "title": "Sprint A"}]
        assert bag["boardState"] == "active"


class TestTrofosAdapter:
    """Tests for TROFOS extraction."""

    @pytest.fixture
    def adapter(self):
        return TrofosAdapter(GatewayClient("http://gateway"))

    def test_extract_tasks(self, adapter, trofos_body):
        """Test backlog items with alternate field names."""
        payload = adapter.parse_payload(trofos_body)
        assert isinstance(payload, TrofosPayload)
        tasks = adapter.extract_tasks(payload)
        assert [t.name for t in tasks] == ["Market Research", "Platform Development", "User Testing"]
        assert [t.assignee for t in tasks] == ["Bryan", "Jian Da", "Kelvin"]
        assert [t.story_points for t in tasks] == [5.0, 8.0, 3.0]
        assert tasks[0].sprint_id == "1"

    def test_team_from_resources(self, adapter, trofos_body):
        """Test resources are read as the team array."""
        team = adapter.extract_team(adapter.parse_payload(trofos_body))
        assert [(m.name, m.role) for m in team] == [("Kelvin", "Project Manager")]

    def test_metrics(self, adapter, trofos_body):
        """Test sprint count, story points and completed-sprint velocity."""
        metrics = {m.name: m.value for m in adapter.extract_metrics(adapter.parse_payload(trofos_body))}
        assert metrics["Sprint Count"] == 3
        assert metrics["Total Story Points"] == 16
        assert metrics["Average Velocity"] == 19.5

    def test_no_completed_sprints_omits_velocity(self, adapter, trofos_body):
        """Test Average Velocity is omitted without completed sprints."""
        trofos_body["sprints"] = [{"name": "Sprint 1", "status": "PLANNING"}]
        names = [m.name for m in adapter.extract_metrics(adapter.parse_payload(trofos_body))]
        assert "Average Velocity" not in names

    def test_extension_bag(self, adapter, trofos_body):
        """Test extension bag contents."""
        bag = adapter.extract_platform_specific(adapter.parse_payload(trofos_body))
        assert bag == {"backlogCount": 3, "sprintCount": 3, "totalStoryPoints": 16}


class TestAdapterRegistry:
    """Tests for the platform registry."""

    def test_default_registry(self):
        """Test all three platforms are registered."""
        client = GatewayClient("http://gateway")
        registry = default_registry()
        assert isinstance(registry.create(Platform.JIRA, client), JiraAdapter)
        assert isinstance(registry.create("monday.com", client), MondayAdapter)
        assert isinstance(registry.create("TROFOS", client), TrofosAdapter)

    def test_unknown_platform(self):
        """Test unknown platform names raise UnsupportedPlatformError."""
        with pytest.raises(UnsupportedPlatformError):
            default_registry().create("asana", GatewayClient("http://gateway"))

    def test_unregistered_platform(self):
        """Test a known platform without an adapter raises."""
        registry = AdapterRegistry([JiraAdapter])
        with pytest.raises(UnsupportedPlatformError):
            registry.create(Platform.TROFOS, GatewayClient("http://gateway"))
