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

import re
from pathlib import Path

import grpc
import pytest
from authzed.api.v1 import WriteSchemaRequest

from shortlink_auth.application_context import ApplicationContext
from shortlink_auth.security.rebac.schema_engine import SchemaEngine


class RecordingSchemaEngine(SchemaEngine):
    """In-memory engine that records every schema write in call order."""

    def __init__(self, fail_on_call: int | None = None):
        self.calls: list[str] = []
        self.fail_on_call = fail_on_call
        self.closed = False

    async def write_schema(self, request: WriteSchemaRequest) -> str | None:
        self.calls.append(request.schema)
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise grpc.aio.AioRpcError(
                code=grpc.StatusCode.INVALID_ARGUMENT,
                initial_metadata=grpc.aio.Metadata(),
                trailing_metadata=grpc.aio.Metadata(),
                details="schema rejected",
            )
        return f"token-{len(self.calls)}"

    async def close(self) -> None:
        self.closed = True


class EagerValidatingSchemaEngine(RecordingSchemaEngine):
    """Rejects writes whose relations reference a type it has never seen."""

    _DEFINITION = re.compile(r"definition\s+(\w+)")
    _RELATION_TARGET = re.compile(r"relation\s+\w+\s*:\s*(\w+)")

    def __init__(self):
        super().__init__()
        self.known_types: set[str] = set()

    async def write_schema(self, request: WriteSchemaRequest) -> str | None:
        self.calls.append(request.schema)
        defined = set(self._DEFINITION.findall(request.schema))
        for target in self._RELATION_TARGET.findall(request.schema):
            if target not in defined and target not in self.known_types:
                raise ValueError(f"object definition `{target}` not found")
        self.known_types |= defined
        return f"token-{len(self.calls)}"


def write_definition(root: Path, relative: str, schema: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    body = "\n".join(f"  {line}" for line in schema.splitlines())
    path.write_text(f"schema: |\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture
def bundle(tmp_path: Path) -> Path:
    root = tmp_path / "permissions"
    root.mkdir()
    return root


@pytest.fixture
def recording_engine() -> RecordingSchemaEngine:
    return RecordingSchemaEngine()


@pytest.fixture(autouse=True)
def reset_application_context():
    ApplicationContext.reset_instance()
    yield
    ApplicationContext.reset_instance()
