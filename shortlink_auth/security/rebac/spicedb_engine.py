"""SpiceDB-backed implementation of the schema engine.

Unlike authzed's ``Client`` facade, the engine opens its own ``grpc.aio``
channel so that the owner can close it on shutdown.
"""

from __future__ import annotations

import logging
import os

import grpc
from authzed.api.v1 import WriteSchemaRequest
from authzed.api.v1.schema_service_pb2_grpc import SchemaServiceStub
from grpcutil import bearer_token_credentials, insecure_bearer_token_credentials

from shortlink_auth.common.structures import SpiceDbRebacConfig
from shortlink_auth.security.rebac.schema_engine import SchemaEngine

logger = logging.getLogger(__name__)


class SpiceDbSchemaEngine(SchemaEngine):
    """Writes schemas to a SpiceDB instance over an asyncio gRPC channel."""

    def __init__(
        self,
        config: SpiceDbRebacConfig,
        *,
        token: str | None = None,
    ) -> None:
        if not config.endpoint:
            raise ValueError(
                "SpiceDB endpoint must be provided via configuration",
            )

        resolved_token = token or os.getenv(config.token_env_var)
        if not resolved_token:
            raise ValueError(
                "SpiceDB token must be provided via parameter or environment "
                f"({config.token_env_var})",
            )

        if config.insecure:
            credentials = insecure_bearer_token_credentials(resolved_token)
        else:
            credentials = bearer_token_credentials(resolved_token)

        self._config = config
        self._timeout = (
            config.timeout_millisec / 1000 if config.timeout_millisec else None
        )
        self._channel = grpc.aio.secure_channel(config.endpoint, credentials)
        self._schema_service = SchemaServiceStub(self._channel)

    async def write_schema(self, request: WriteSchemaRequest) -> str | None:
        logger.debug(
            "Writing schema to SpiceDB at %s (%d bytes)",
            self._config.endpoint,
            len(request.schema),
        )
        response = await self._schema_service.WriteSchema(
            request, timeout=self._timeout
        )
        if response.HasField("written_at"):
            return response.written_at.token
        return None

    async def close(self) -> None:
        await self._channel.close()
