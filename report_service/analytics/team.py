# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Team roster builder.

Merges task assignees and the payload's team array into one roster keyed
by display name.
"""

from typing import Any, Dict, Iterable, List

from ..models.project_data import DEFAULT_ROLE, UNASSIGNED, Task, TeamMember

# Leaked test accounts such as "User 1" or "User123"
PLACEHOLDER_PREFIX = "User"


def is_placeholder(name: str) -> bool:
    return not name or name == UNASSIGNED or name.startswith(PLACEHOLDER_PREFIX)


class TeamRosterBuilder:
    """Builds a deduplicated roster; later entries win on conflicting fields"""

    @staticmethod
    def build(tasks: Iterable[Task], members: Iterable[TeamMember]) -> List[TeamMember]:
        """
        Merge assignees and listed members.

        Args:
            tasks: Normalized tasks, contributing their assignee names
            members: Members from the payload's dedicated team array

        Returns:
            Roster in first-seen order, without placeholder names
        """
        merged: Dict[str, Dict[str, Any]] = {}

        for task in tasks:
            name = task.assignee.strip()
            if is_placeholder(name):
                continue
            merged.setdefault(name, {"name": name})

        for member in members:
            name = member.name.strip()
            if is_placeholder(name):
                continue
            entry = merged.setdefault(name, {"name": name})
            for field, value in member.model_dump(exclude={"name"}).items():
                if field == "role" and value == DEFAULT_ROLE:
                    continue
                if value not in (None, "", []):
                    entry[field] = value

        return [TeamMember(**fields) for fields in merged.values()]
