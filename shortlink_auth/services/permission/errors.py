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
Failures raised while synchronizing the bundled permission schemas.

Every error carries the bundle path of the offending definition and the
underlying cause. They are all fatal to startup and are never retried:
a malformed bundled file is a build defect, and transport retries belong
to the gRPC client.
"""

from __future__ import annotations


class SchemaSyncError(Exception):
    """Base class for every schema synchronization failure."""

    action = "synchronize schema"

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        message = f"failed to {self.action} '{path}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ResourceLoadError(SchemaSyncError):
    """The bundled resource tree could not be walked or a file could not be read."""

    action = "load schema resource"


class SchemaParseError(SchemaSyncError):
    """A bundled definition is not a valid schema-write document."""

    action = "parse schema"


class SchemaApplyError(SchemaSyncError):
    """The policy engine rejected or failed to process a schema write."""

    action = "write schema"
