from __future__ import annotations

from abc import ABC, abstractmethod

from authzed.api.v1 import WriteSchemaRequest


class SchemaEngine(ABC):
    """Abstract base for the policy engine that stores the authorization schema.

    The handle is long-lived and shared. Whoever builds it also closes it;
    the schema synchronization only issues calls through it.
    """

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def write_schema(self, request: WriteSchemaRequest) -> str | None:
        """Create or replace the schema held by the engine.

        Returns a backend-specific consistency token when available.
        """

    async def close(self) -> None:
        """Release the underlying connection, if any."""
        return None
