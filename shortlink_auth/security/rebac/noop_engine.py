"""Schema engine used when ReBAC is disabled."""

from __future__ import annotations

import logging

from authzed.api.v1 import WriteSchemaRequest

from shortlink_auth.security.rebac.schema_engine import SchemaEngine

logger = logging.getLogger(__name__)


class NoopSchemaEngine(SchemaEngine):
    """
    A no-op engine that accepts every schema and does not persist anything.
    """

    @property
    def enabled(self) -> bool:
        return False

    async def write_schema(self, request: WriteSchemaRequest) -> str | None:
        logger.debug("ReBAC disabled, ignoring schema write (%d bytes)", len(request.schema))
        return None
