# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Project Data Service

Fetches one project from its platform and turns it into canonical
ProjectData. `fetch_project_data` never raises: any failure in fetching,
parsing, normalization or scoring is replaced by fallback data.
"""

import logging
from typing import Optional

from ..adapters.registry import AdapterRegistry, default_registry
from ..analytics.metrics import TaskMetricsCalculator
from ..analytics.quality import DataQualityScorer
from ..analytics.team import TeamRosterBuilder
from ..client.gateway_client import GatewayClient
from ..config import Settings
from ..fallback import PLATFORM_LABELS, FallbackDataProvider
from ..models.project_data import ProjectData
from ..models.requests import FetchConfig
from ..normalization.normalizer import StatusPriorityNormalizer
from ..utils.dates import utc_now
from ..utils.errors import ReportServiceError

logger = logging.getLogger(__name__)


class ProjectDataService:
    """Composes adapters, normalization, analytics and fallback"""

    def __init__(
        self,
        client: GatewayClient,
        registry: Optional[AdapterRegistry] = None,
        normalizer: Optional[StatusPriorityNormalizer] = None,
        scorer: Optional[DataQualityScorer] = None,
        fallback: Optional[FallbackDataProvider] = None,
        use_sample_data: bool = False
    ):
        """
        Initialize the service.

        Args:
            client: Gateway client shared by all adapters
            registry: Platform -> adapter lookup
            normalizer: Status and priority normalizer
            scorer: Data quality scorer
            fallback: Provider of fallback and sample data
            use_sample_data: Serve sample data instead of contacting the gateway
        """
        self.client = client
        self.registry = registry or default_registry()
        self.normalizer = normalizer or StatusPriorityNormalizer()
        self.scorer = scorer or DataQualityScorer()
        self.fallback = fallback or FallbackDataProvider(self.normalizer)
        self.use_sample_data = use_sample_data

    @classmethod
    def from_settings(cls, settings: Settings, client: GatewayClient) -> "ProjectDataService":
        normalizer = StatusPriorityNormalizer()
        return cls(
            client=client,
            normalizer=normalizer,
            scorer=DataQualityScorer(freshness_window_days=settings.freshness_window_days),
            fallback=FallbackDataProvider(normalizer),
            use_sample_data=settings.use_sample_data,
        )

    async def fetch_project_data(self, config: FetchConfig) -> ProjectData:
        """
        Fetch and normalize a project.

        Args:
            config: Platform, connection id and project id

        Returns:
            Live ProjectData, or fallback data with `fallback_data=True`
        """
        logger.info(
            "Fetching %s project %s (connection %s)",
            config.platform.value, config.project_id, config.connection_id
        )
        if self.use_sample_data:
            logger.info("Sample data mode: serving demo %s project", config.platform.value)
            return self.fallback.generate_sample(config.platform, config.project_id, config.title)

        try:
            return await self._fetch_live(config)
        except Exception as e:
            reason = e.message if isinstance(e, ReportServiceError) else f"{type(e).__name__}: {e}"
            logger.warning(
                "Using fallback data for %s project %s (connection %s): %s",
                config.platform.value, config.project_id, config.connection_id, reason
            )
            return self.fallback.generate(config, reason)

    async def _fetch_live(self, config: FetchConfig) -> ProjectData:
        platform = config.platform
        adapter = self.registry.create(platform, self.client)
        payload = await adapter.fetch(config.connection_id, config.project_id)

        tasks = [self.normalizer.normalize_task(record, platform) for record in adapter.extract_tasks(payload)]
        team = TeamRosterBuilder.build(tasks, adapter.extract_team(payload))
        task_metrics = TaskMetricsCalculator.calculate(tasks, team)

        project_id = adapter.project_id(payload) or config.project_id
        name = (
            adapter.project_name(payload)
            or config.title
            or f"{PLATFORM_LABELS[platform]} Project - {project_id}"
        )
        project = ProjectData(
            id=project_id,
            name=name,
            platform=platform,
            description=payload.description,
            tasks=tasks,
            team=team,
            metrics=adapter.extract_metrics(payload) + task_metrics.to_metrics(),
            sprints=adapter.extract_sprints(payload),
            platform_specific=adapter.extract_platform_specific(payload),
            fallback_data=False,
            last_updated=utc_now(),
        )
        project = project.model_copy(update={"data_quality": self.scorer.score(project)})
        logger.info(
            "Fetched %s project %s: %d tasks, %d members",
            platform.value, project.id, len(tasks), len(team)
        )
        return project
