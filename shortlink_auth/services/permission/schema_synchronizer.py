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


"""
Ordered application of the bundled permission schemas to the policy engine.

Definitions are applied one by one in bundle order and the run stops at the
first failure. A later file may rely on types introduced by an earlier one,
so neither reordering nor best-effort continuation is allowed. Each run
re-applies every definition without diffing; the engine treats an unchanged
schema write as a no-op.
"""

from __future__ import annotations

import logging
from importlib.resources.abc import Traversable
from typing import Iterable

from shortlink_auth.security.rebac.schema_engine import SchemaEngine
from shortlink_auth.services.permission.errors import SchemaApplyError
from shortlink_auth.services.permission.resource_loader import (
    SCHEMA_EXTENSION,
    load_schema_resources,
)
from shortlink_auth.services.permission.schema_parser import parse_schema_resource
from shortlink_auth.services.permission.structures import (
    SchemaResource,
    SynchronizationResult,
    SyncOutcome,
)

logger = logging.getLogger(__name__)


class SchemaSynchronizer:
    """Parses and writes schema definitions, fail-fast, in the given order.

    Meant to run once at startup. It must not be invoked concurrently on the
    same engine session: a second call while one is in flight raises.
    """

    def __init__(self, engine: SchemaEngine):
        self._engine = engine
        self._running = False

    async def synchronize(
        self, resources: Iterable[SchemaResource]
    ) -> SynchronizationResult:
        """
        Apply every resource to the engine.

        Raises:
            SchemaParseError: a definition is malformed. Definitions before it
                have been written, none after it.
            SchemaApplyError: the engine failed a write. No further write is
                issued.
            RuntimeError: a synchronization is already running.
        """
        if self._running:
            raise RuntimeError("schema synchronization is already in progress")
        self._running = True
        try:
            return await self._apply_all(resources)
        finally:
            self._running = False

    async def synchronize_bundle(
        self, root: Traversable, extension: str = SCHEMA_EXTENSION
    ) -> SynchronizationResult:
        """Load the definitions under ``root`` and apply them."""
        return await self.synchronize(load_schema_resources(root, extension))

    async def _apply_all(
        self, resources: Iterable[SchemaResource]
    ) -> SynchronizationResult:
        result = SynchronizationResult()
        for resource in resources:
            request = parse_schema_resource(resource)
            try:
                token = await self._engine.write_schema(request)
            except Exception as e:
                logger.error(
                    "[PERMISSIONS] Schema write failed for %s after %d applied definition(s)",
                    resource.path,
                    len(result),
                )
                raise SchemaApplyError(resource.path, e) from e
            logger.info(
                "[PERMISSIONS] Applied schema %s",
                resource.path,
                extra={"path": resource.path, "written_at": token},
            )
            result.outcomes.append(SyncOutcome(path=resource.path, written_at=token))
        return result
