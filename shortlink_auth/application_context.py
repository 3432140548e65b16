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


import logging
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Optional

from shortlink_auth.common.structures import Configuration
from shortlink_auth.security.rebac.rebac_factory import schema_engine_factory
from shortlink_auth.security.rebac.schema_engine import SchemaEngine
from shortlink_auth.services.permission.resource_loader import bundled_permissions

logger = logging.getLogger(__name__)


class ApplicationContext:
    """
    Composition root of the service. Builds and owns the long-lived
    collaborators (the schema engine connection) from the configuration.
    """

    _instance: Optional["ApplicationContext"] = None
    _schema_engine_instance: Optional[SchemaEngine] = None

    def __init__(self, config: Configuration):
        if ApplicationContext._instance is not None:
            return

        self.config = config
        ApplicationContext._instance = self
        self._log_config_summary()

    @classmethod
    def get_instance(cls) -> "ApplicationContext":
        """
        Get the singleton instance of ApplicationContext.
        Raises:
            RuntimeError: If the ApplicationContext is not initialized.
        """
        if cls._instance is None:
            raise RuntimeError("ApplicationContext is not initialized yet.")
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Reset the singleton instance (used in tests)."""
        cls._instance = None

    def get_config(self) -> Configuration:
        return self.config

    def get_schema_engine(self) -> SchemaEngine:
        if self._schema_engine_instance is None:
            self._schema_engine_instance = schema_engine_factory(self.config.security)
        return self._schema_engine_instance

    def get_permission_bundle(self) -> Traversable:
        bundle_path = self.config.permissions.bundle_path
        if bundle_path:
            return Path(bundle_path).expanduser()
        return bundled_permissions()

    def should_sync_schema(self) -> bool:
        rebac = self.config.security.rebac
        return rebac is None or rebac.sync_schema_on_init

    async def close_connections(self) -> None:
        if self._schema_engine_instance is not None:
            await self._schema_engine_instance.close()
            self._schema_engine_instance = None

    def _log_config_summary(self):
        rebac = self.config.security.rebac
        logger.info("🔧 Application configuration summary:")
        logger.info("  🌐 Base URL: %s", self.config.app.base_url)
        if rebac is None or not rebac.enabled:
            logger.info("  🔐 ReBAC: disabled")
        else:
            logger.info(
                "  🔐 ReBAC: SpiceDB at %s (insecure=%s, sync_schema_on_init=%s)",
                rebac.endpoint,
                rebac.insecure,
                rebac.sync_schema_on_init,
            )
        logger.info(
            "  📜 Permission bundle: %s (*%s)",
            self.config.permissions.bundle_path or "packaged",
            self.config.permissions.extension,
        )
