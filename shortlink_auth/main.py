# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Entrypoint for the Shortlink Auth service.

Startup applies the bundled permission schemas to SpiceDB before the server
accepts any request. A failed synchronization aborts the lifespan, so
uvicorn exits with a non-zero status and the error (schema path and cause)
is in the startup log.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI

from shortlink_auth.application_context import ApplicationContext
from shortlink_auth.common.config_loader import load_configuration
from shortlink_auth.common.structures import Configuration
from shortlink_auth.core import monitoring_controller
from shortlink_auth.logs.log_setup import log_setup
from shortlink_auth.services.permission.permission_service import PermissionService

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "shortlink-auth"


def create_app(configuration: Optional[Configuration] = None) -> FastAPI:
    if configuration is None:
        configuration = load_configuration()
    base_url = configuration.app.base_url

    log_setup(
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        log_level=configuration.app.log_level,
        log_format=configuration.app.log_format,
    )
    ApplicationContext(configuration)
    application_context = ApplicationContext.get_instance()
    logger.info(f"🛠️ create_app() called with base_url={base_url}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Synchronize the permission schemas, serve, then tear down.
        - Startup blocks until every bundled schema is written.
        - `yield` hands control to the server.
        - `finally` signals shutdown to the permission service and closes the engine.
        """
        logger.info("🚀 Lifespan enter.")
        shutdown_event = asyncio.Event()
        try:
            permission_service = await PermissionService.create(
                application_context.get_schema_engine(),
                shutdown_event,
                bundle=application_context.get_permission_bundle(),
                extension=configuration.permissions.extension,
                synchronize=application_context.should_sync_schema(),
            )
        except Exception:
            logger.critical(
                "❌ Permission schema synchronization FAILED! Service cannot start.",
                exc_info=True,
            )
            await application_context.close_connections()
            raise

        app.state.configuration = configuration
        app.state.permission_service = permission_service

        try:
            yield
        finally:
            logger.info("🧹 Lifespan exit: orderly shutdown.")
            shutdown_event.set()
            watcher = permission_service.shutdown_watcher
            if watcher is not None:
                await watcher
            await application_context.close_connections()
            logger.info("✅ Shutdown complete.")

    app = FastAPI(
        docs_url=f"{base_url}/docs",
        redoc_url=f"{base_url}/redoc",
        openapi_url=f"{base_url}/openapi.json",
        lifespan=lifespan,
    )

    router = APIRouter(prefix=base_url)
    router.include_router(monitoring_controller.router)
    app.include_router(router)
    logger.info("🧩 All controllers registered.")
    return app


def run() -> None:
    configuration = load_configuration()
    uvicorn.run(
        create_app(configuration),
        host=configuration.app.address,
        port=configuration.app.port,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    run()
