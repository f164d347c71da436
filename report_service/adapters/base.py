# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Base platform adapter interface

Each adapter fetches one project from the integrations gateway and turns
the platform's native JSON into platform-neutral records. Field names
of a platform appear only in its adapter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from urllib.parse import quote

from ..client.gateway_client import GatewayClient
from ..models.project_data import DEFAULT_ROLE, Metric, Platform, Sprint, TeamMember
from ..models.raw import RawPayload, TaskRecord
from ..utils.dates import parse_datetime
from ..utils.errors import ConnectorError

logger = logging.getLogger(__name__)


class BasePlatformAdapter(ABC):
    """
    Abstract base class for platform adapters

    Subclasses declare their platform and a prioritized tuple of candidate
    URL templates. `fetch` tries the templates in order and returns on the
    first 200 response with a non-empty body.
    """

    platform: ClassVar[Platform]
    url_templates: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, client: GatewayClient):
        self.client = client

    # ==================== Fetching ====================

    def candidate_paths(self, connection_id: str, project_id: str) -> List[str]:
        return [
            template.format(
                connection_id=quote(str(connection_id), safe=""),
                project_id=quote(str(project_id), safe=""),
            )
            for template in self.url_templates
        ]

    async def fetch(self, connection_id: str, project_id: str) -> RawPayload:
        """
        Fetch and parse the project payload.

        Raises:
            ConnectorError: the last candidate's error when every candidate
                fails, or a payload shape error from parsing
        """
        last_error: Optional[ConnectorError] = None
        for path in self.candidate_paths(connection_id, project_id):
            try:
                body = await self.client.get_json(path)
            except ConnectorError as e:
                logger.warning(
                    "%s candidate %s failed: %s", self.platform.value, path, e.message
                )
                last_error = e
                continue
            logger.info("%s project %s fetched from %s", self.platform.value, project_id, path)
            return self.parse_payload(_unwrap(body))

        if last_error is None:
            last_error = ConnectorError(f"No URL templates configured for {self.platform.value}")
        raise last_error

    # ==================== Parsing & Extraction ====================

    @abstractmethod
    def parse_payload(self, body: Any) -> RawPayload:
        """Parse the decoded JSON body into the platform's tagged record"""
        pass

    @abstractmethod
    def extract_tasks(self, payload: RawPayload) -> List[TaskRecord]:
        """Pull tasks out of the payload, unnormalized"""
        pass

    @abstractmethod
    def platform_metrics(self, payload: RawPayload) -> List[Metric]:
        """Headline figures only this platform provides"""
        pass

    @abstractmethod
    def extract_platform_specific(self, payload: RawPayload) -> Dict[str, Any]:
        """Extension bag of platform-only passthrough data"""
        pass

    def extract_team(self, payload: RawPayload) -> List[TeamMember]:
        """Members listed in the payload's dedicated team array"""
        members = []
        for entry in payload.team:
            member = member_from(entry)
            if member is not None:
                members.append(member)
        return members

    def extract_sprints(self, payload: RawPayload) -> List[Sprint]:
        sprints = []
        for index, entry in enumerate(payload.sprints):
            sprint = sprint_from(entry, index, self.platform)
            if sprint is not None:
                sprints.append(sprint)
        return sprints

    def extract_metrics(self, payload: RawPayload) -> List[Metric]:
        """Upstream metric entries first, then platform metrics"""
        metrics = []
        for entry in payload.metrics:
            if isinstance(entry, dict) and entry.get("name") and entry.get("value") is not None:
                metrics.append(Metric(name=str(entry["name"]), value=_metric_value(entry["value"])))
        metrics.extend(self.platform_metrics(payload))
        return metrics

    def project_name(self, payload: RawPayload) -> Optional[str]:
        return payload.name

    def project_id(self, payload: RawPayload) -> Optional[str]:
        return payload.id


# ==================== Shared helpers ====================

def _unwrap(body: Any) -> Any:
    """Strip a `{"success": ..., "data": {...}}` envelope"""
    if isinstance(body, dict) and isinstance(body.get("data"), dict) and set(body) <= {"success", "data", "message"}:
        return body["data"]
    return body


def require_object(body: Any, platform: Platform) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ConnectorError(
            f"Unexpected {platform.value} payload: expected an object, got {type(body).__name__}"
        )
    return body


def list_field(body: Dict[str, Any], *keys: str) -> List[Any]:
    """First present list among keys; a non-list value is a shape error"""
    for key in keys:
        value = body.get(key)
        if value is None:
            continue
        if not isinstance(value, list):
            raise ConnectorError(f"Unexpected payload: '{key}' must be a list")
        return value
    return []


def first(entry: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = entry.get(key)
        if value is not None and value != "":
            return value
    return None


def optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def optional_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def optional_float(value: Any) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def name_of(value: Any) -> Optional[str]:
    """Display name from a string, a person object or a list of either"""
    if value is None:
        return None
    if isinstance(value, list):
        for item in value:
            name = name_of(item)
            if name:
                return name
        return None
    if isinstance(value, dict):
        value = first(value, "displayName", "name", "full_name", "fullName", "username", "email")
    text = str(value).strip() if value is not None else ""
    return text or None


def label_of(value: Any) -> str:
    """Text of a status or priority given as a string or an object"""
    if isinstance(value, dict):
        value = first(value, "name", "label", "text", "value")
    return str(value).strip() if value is not None else ""


def member_from(entry: Any) -> Optional[TeamMember]:
    if isinstance(entry, str):
        name = entry.strip()
        return TeamMember(name=name) if name else None
    if not isinstance(entry, dict):
        return None
    name = name_of(entry)
    if not name:
        return None
    skills = entry.get("skills") or []
    return TeamMember(
        id=optional_str(first(entry, "id", "accountId", "userId")),
        name=name,
        role=str(first(entry, "role", "title", "position", "resource_type") or DEFAULT_ROLE),
        email=optional_str(first(entry, "email", "emailAddress")),
        avatar=optional_str(first(entry, "avatar", "avatarUrl", "photo")),
        department=optional_str(entry.get("department")),
        skills=[str(s) for s in skills] if isinstance(skills, list) else [],
    )


def sprint_from(entry: Any, index: int, platform: Platform) -> Optional[Sprint]:
    if not isinstance(entry, dict):
        return None
    completion = optional_int(first(entry, "completion", "progress", "completionRate"))
    if completion is not None:
        completion = max(0, min(100, completion))
    return Sprint(
        id=str(first(entry, "id") or f"{platform.value}-sprint-{index + 1}"),
        name=str(first(entry, "name", "title") or f"Sprint {index + 1}"),
        start_date=parse_datetime(first(entry, "startDate", "start_date")),
        end_date=parse_datetime(first(entry, "endDate", "end_date")),
        status=optional_str(first(entry, "status", "state")),
        completion=completion,
        velocity=optional_float(entry.get("velocity")),
    )


def _metric_value(value: Any) -> Any:
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return value
    return str(value)
