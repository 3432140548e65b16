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


from typing import Literal, Optional

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    name: Optional[str] = "Shortlink Auth"
    base_url: str = "/auth/v1"
    address: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"
    log_format: Literal["rich", "json"] = "rich"


class SpiceDbRebacConfig(BaseModel):
    """Configuration for the SpiceDB engine holding the authorization schema."""

    type: Literal["spicedb"] = "spicedb"
    enabled: bool = Field(
        default=True,
        description="Disable to start without an engine (never in production). Schema writes are then ignored.",
    )
    endpoint: str = Field(
        ..., description="gRPC endpoint for the SpiceDB implementation (host:port)"
    )
    insecure: bool = Field(
        default=False, description="Use insecure connection instead of TLS"
    )
    sync_schema_on_init: bool = Field(
        default=True, description="Synchronize the bundled schemas at startup"
    )
    token_env_var: str = Field(
        default="SPICEDB_TOKEN",
        description="Environment variable that stores the SpiceDB preshared key",
    )
    timeout_millisec: int | None = Field(
        default=10_000,
        gt=0,
        description="Deadline in milliseconds for each SpiceDB call (None waits forever)",
    )


class SecurityConfiguration(BaseModel):
    rebac: SpiceDbRebacConfig | None = None


class PermissionsConfig(BaseModel):
    """Where the schema definitions are read from."""

    extension: str = Field(
        default=".yaml", description="Suffix of the schema definition files"
    )
    bundle_path: Optional[str] = Field(
        default=None,
        description="Directory to read definitions from instead of the packaged bundle",
    )


class Configuration(BaseModel):
    app: AppConfig = AppConfig()
    security: SecurityConfiguration = SecurityConfiguration()
    permissions: PermissionsConfig = PermissionsConfig()
