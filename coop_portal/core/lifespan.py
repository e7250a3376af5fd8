"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring of infrastructure (telemetry,
DB engine); no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from coop_portal.core.config import get_settings
from coop_portal.infrastructure.persistence import database
from coop_portal.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: telemetry (if enabled) with FastAPI and SQLAlchemy
    instrumentation. Shutdown: telemetry flush, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.setup() is not None:
            set_telemetry(telemetry)
            telemetry.instrument_fastapi(app)
            database.get_session_factory()
            telemetry.instrument_sqlalchemy(database.engine)

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
