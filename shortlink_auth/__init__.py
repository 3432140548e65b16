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


from shortlink_auth.common.structures import (
    AppConfig,
    Configuration,
    PermissionsConfig,
    SecurityConfiguration,
    SpiceDbRebacConfig,
)
from shortlink_auth.security.rebac import (
    NoopSchemaEngine,
    SchemaEngine,
    SpiceDbSchemaEngine,
    schema_engine_factory,
)
from shortlink_auth.services.permission import (
    PermissionService,
    ResourceLoadError,
    SchemaApplyError,
    SchemaParseError,
    SchemaResource,
    SchemaSyncError,
    SchemaSynchronizer,
    SynchronizationResult,
)

__all__ = [
    "AppConfig",
    "Configuration",
    "NoopSchemaEngine",
    "PermissionService",
    "PermissionsConfig",
    "ResourceLoadError",
    "SchemaApplyError",
    "SchemaEngine",
    "SchemaParseError",
    "SchemaResource",
    "SchemaSyncError",
    "SchemaSynchronizer",
    "SecurityConfiguration",
    "SpiceDbRebacConfig",
    "SpiceDbSchemaEngine",
    "SynchronizationResult",
    "schema_engine_factory",
]
