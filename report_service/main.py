# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

# Report Service - Main Application
"""
FastAPI application for the Report Service.
Queues report jobs and serves their status and artifacts.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .client import GatewayClient
from .config import Settings, get_settings
from .generators import MarkdownDeckGenerator, ReportGenerator
from .handlers import ReportHandler
from .jobs import InMemoryJobStore, ReportOrchestrator, ReportWorkerPool
from .routers import reports_router
from .services import ProjectDataService
from .utils.errors import error_handler
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    generator: Optional[ReportGenerator] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Service settings, defaults to the cached environment settings
        generator: Report generator, defaults to the Markdown deck generator
        transport: Optional httpx transport for the gateway client
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        # Startup
        setup_logging(settings.log_level, settings.log_file, settings.debug)
        logger.info(f"Starting {settings.service_name} v{settings.service_version}")

        client = GatewayClient.from_settings(settings, transport=transport)
        store = InMemoryJobStore()
        orchestrator = ReportOrchestrator(
            data_service=ProjectDataService.from_settings(settings, client),
            generator=generator or MarkdownDeckGenerator(settings.storage_dir),
            store=store,
        )
        pool = ReportWorkerPool(
            orchestrator,
            store,
            size=settings.worker_pool_size,
            max_queue_size=settings.max_queue_size,
            job_timeout=float(settings.job_timeout),
        )
        await pool.start()
        app.state.report_handler = ReportHandler(store, pool)
        app.state.worker_pool = pool

        yield

        # Shutdown
        logger.info(f"Shutting down {settings.service_name}")
        await pool.stop()
        await client.aclose()

    app = FastAPI(
        title=settings.service_name,
        version=settings.service_version,
        description="Report generation for Jira, Monday.com and TROFOS projects",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        body = error_handler(exc)
        body["details"] = {}
        return JSONResponse(status_code=500, content=body)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        pool: ReportWorkerPool = request.app.state.worker_pool
        return {
            "status": "healthy" if pool.started else "unhealthy",
            "version": settings.service_version,
            "queued_jobs": pool.queued_count,
            "running_jobs": pool.running_count,
        }

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "docs": "/docs",
            "health": "/health"
        }

    app.include_router(reports_router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "report_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
