# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service Configuration
"""
Configuration management for the Report Service.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Report Service settings."""

    # Service settings
    service_name: str = "Report Service"
    service_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8002

    # Platform integrations gateway
    api_gateway_url: str = "http://localhost:3000"
    api_gateway_token: str | None = None
    request_timeout: int = 30  # seconds, per upstream call

    # Worker pool
    worker_pool_size: int = 4
    max_queue_size: int = 100
    job_timeout: int = 600  # seconds, per job

    # Artifacts
    storage_dir: str = "storage"

    # Data quality
    freshness_window_days: int = 30

    # Serve the curated demo dataset instead of contacting the gateway
    use_sample_data: bool = False

    class Config:
        env_prefix = "REPORT_SERVICE_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
