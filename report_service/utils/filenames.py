# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

import re
from datetime import datetime
from typing import Optional

_UNSAFE = re.compile(r"[^A-Za-z0-9]+")


def slugify(value: str, fallback: str = "project") -> str:
    """Lowercase, underscore-separated token safe for file names."""
    slug = _UNSAFE.sub("_", value or "").strip("_").lower()
    return slug[:60] or fallback


def report_filename(platform: str, project_name: str, template_id: str,
                    generated_at: datetime, token: Optional[str] = None,
                    extension: str = "md") -> str:
    """Build `<platform>_<project>_<template>_<timestamp>[_<token>].<ext>`.

    The timestamp has millisecond resolution; `token` tells apart
    artifacts generated within the same millisecond.
    """
    timestamp = f"{generated_at.strftime('%Y%m%d%H%M%S')}{generated_at.microsecond // 1000:03d}"
    parts = [slugify(platform), slugify(project_name), slugify(template_id), timestamp]
    if token:
        parts.append(slugify(token))
    return f"{'_'.join(parts)}.{extension}"
