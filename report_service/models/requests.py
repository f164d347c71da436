# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service Request Models
"""
Pydantic models for API request validation.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .project_data import Platform
from ..utils.errors import UnsupportedPlatformError


def _coerce_platform(value: Any) -> Platform:
    try:
        return Platform.parse(value)
    except UnsupportedPlatformError as e:
        raise ValueError(e.message) from e


class FetchConfig(BaseModel):
    """What to fetch: one project on one platform connection."""
    platform: Platform
    connection_id: str
    project_id: str
    title: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    @field_validator("platform", mode="before")
    @classmethod
    def _parse_platform(cls, value: Any) -> Platform:
        return _coerce_platform(value)


class ReportRequest(BaseModel):
    """Request for generating a report."""
    platform: Platform
    connection_id: str = Field(min_length=1)
    project_id: str = Field(min_length=1)
    title: str = Field(default="Project Report", min_length=1, max_length=200)
    template_id: str = "standard"
    configuration: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def _title_from_configuration(cls, data: Any) -> Any:
        # Clients may send the title inside configuration instead
        if isinstance(data, dict) and data.get("title") is None:
            configuration = data.get("configuration")
            if isinstance(configuration, dict) and configuration.get("title") is not None:
                return {**data, "title": configuration["title"]}
        return data

    @field_validator("platform", mode="before")
    @classmethod
    def _parse_platform(cls, value: Any) -> Platform:
        return _coerce_platform(value)

    @field_validator("connection_id", "project_id", "title", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        # Numeric ids (TROFOS projects) are accepted as strings
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value
