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


from __future__ import annotations

import asyncio
import logging
from importlib.resources.abc import Traversable

from shortlink_auth.security.rebac.schema_engine import SchemaEngine
from shortlink_auth.services.permission.resource_loader import (
    SCHEMA_EXTENSION,
    bundled_permissions,
)
from shortlink_auth.services.permission.schema_synchronizer import SchemaSynchronizer
from shortlink_auth.services.permission.structures import SynchronizationResult

logger = logging.getLogger(__name__)


class PermissionService:
    """
    Owner of the permission schema lifecycle.

    Building the service synchronizes the bundled schemas; a service instance
    therefore only exists once the engine holds the schema shipped with this
    build. The engine handle is borrowed: closing it is the caller's job.

    The one exception is `synchronize=False` (`sync_schema_on_init: false`):
    the operator then takes responsibility for the engine schema and the
    service starts with `synchronized` set to False.
    """

    def __init__(
        self,
        engine: SchemaEngine,
        synchronization: SynchronizationResult,
        log: logging.Logger,
        synchronized: bool = True,
    ):
        self._engine = engine
        self._synchronization = synchronization
        self._synchronized = synchronized
        self._log = log
        self._shutdown_watcher: asyncio.Task[None] | None = None

    @classmethod
    async def create(
        cls,
        engine: SchemaEngine,
        shutdown_event: asyncio.Event,
        *,
        log: logging.Logger | None = None,
        bundle: Traversable | None = None,
        extension: str = SCHEMA_EXTENSION,
        synchronize: bool = True,
    ) -> "PermissionService":
        """
        Synchronize the schemas then start the shutdown watcher.

        Any synchronization error propagates unchanged and no service is
        returned, so the caller can never serve with a partial schema.
        """
        log = log or logger
        if synchronize:
            synchronizer = SchemaSynchronizer(engine)
            result = await synchronizer.synchronize_bundle(
                bundle if bundle is not None else bundled_permissions(), extension
            )
            log.info(
                "Permission migrations completed",
                extra={"files": len(result), "written_at": result.last_token},
            )
        else:
            result = SynchronizationResult()
            log.warning("Permission migrations skipped (sync_schema_on_init=false)")

        service = cls(engine, result, log, synchronized=synchronize)
        service._shutdown_watcher = asyncio.create_task(
            service._wait_for_shutdown(shutdown_event),
            name="permission-shutdown-watcher",
        )
        return service

    @property
    def ready(self) -> bool:
        return self._shutdown_watcher is not None and not self._shutdown_watcher.done()

    @property
    def synchronized(self) -> bool:
        """False when startup skipped the schema synchronization."""
        return self._synchronized

    @property
    def synchronization(self) -> SynchronizationResult:
        return self._synchronization

    @property
    def shutdown_watcher(self) -> asyncio.Task[None] | None:
        return self._shutdown_watcher

    async def _wait_for_shutdown(self, shutdown_event: asyncio.Event) -> None:
        await shutdown_event.wait()
        self._log.info("Permission service shutdown")
