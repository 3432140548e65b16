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


from pathlib import Path

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from shortlink_auth.common.structures import (
    AppConfig,
    Configuration,
    PermissionsConfig,
    SecurityConfiguration,
    SpiceDbRebacConfig,
)
from shortlink_auth.main import create_app, run
from shortlink_auth.services.permission.errors import SchemaApplyError, SchemaParseError
from tests.conftest import RecordingSchemaEngine, write_definition

BASE_URL = "/auth/v1"


def _configuration(bundle_path: Path | None = None) -> Configuration:
    return Configuration(
        app=AppConfig(base_url=BASE_URL, log_level="info"),
        permissions=PermissionsConfig(
            bundle_path=str(bundle_path) if bundle_path else None
        ),
    )


@pytest.fixture
def engine(monkeypatch) -> RecordingSchemaEngine:
    engine = RecordingSchemaEngine()
    monkeypatch.setattr(
        "shortlink_auth.application_context.schema_engine_factory",
        lambda security_config: engine,
    )
    return engine


def test_healthz():
    with TestClient(create_app(_configuration())) as client:
        response = client.get(f"{BASE_URL}/healthz")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_ready_after_packaged_schema_synchronization(engine: RecordingSchemaEngine):
    with TestClient(create_app(_configuration())) as client:
        response = client.get(f"{BASE_URL}/ready")
        service = client.app.state.permission_service

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "status": "ready",
        "synchronized": True,
        "schemas": ["shortlink.yaml"],
    }
    assert len(engine.calls) == 1
    assert not service.ready
    assert engine.closed


def test_not_ready_without_lifespan():
    client = TestClient(create_app(_configuration()))

    response = client.get(f"{BASE_URL}/ready")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


def test_malformed_bundle_aborts_startup(tmp_path: Path, engine: RecordingSchemaEngine):
    write_definition(tmp_path, "a.yaml", "definition a {}")
    (tmp_path / "b.yaml").write_text("- not a mapping\n")
    write_definition(tmp_path, "c.yaml", "definition c {}")

    with pytest.raises(SchemaParseError, match="b.yaml"):
        with TestClient(create_app(_configuration(tmp_path))):
            pass

    assert engine.calls == ["definition a {}\n"]
    assert engine.closed


def test_engine_rejection_aborts_startup(tmp_path: Path, monkeypatch):
    write_definition(tmp_path, "a.yaml", "definition a {}")
    failing = RecordingSchemaEngine(fail_on_call=1)
    monkeypatch.setattr(
        "shortlink_auth.application_context.schema_engine_factory",
        lambda security_config: failing,
    )

    with pytest.raises(SchemaApplyError, match="a.yaml"):
        with TestClient(create_app(_configuration(tmp_path))):
            pass


def test_ready_reports_skipped_synchronization(engine: RecordingSchemaEngine):
    configuration = _configuration()
    configuration.security = SecurityConfiguration(
        rebac=SpiceDbRebacConfig(
            endpoint="localhost:50051", sync_schema_on_init=False
        )
    )

    with TestClient(create_app(configuration)) as client:
        response = client.get(f"{BASE_URL}/ready")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ready", "synchronized": False, "schemas": []}
    assert engine.calls == []


def test_failed_synchronization_exits_with_non_zero_status(
    tmp_path: Path, monkeypatch
):
    bundle = tmp_path / "permissions"
    bundle.mkdir()
    (bundle / "broken.yaml").write_text("schema: [unterminated\n")
    config_file = tmp_path / "configuration.yaml"
    config_file.write_text(
        f"app:\n  address: 127.0.0.1\n  port: 0\n"
        f"permissions:\n  bundle_path: {bundle}\n"
    )
    monkeypatch.setenv("ENV_FILE", str(tmp_path / ".env"))
    monkeypatch.setenv("CONFIG_FILE", str(config_file))

    with pytest.raises(SystemExit) as exc_info:
        run()

    assert exc_info.value.code not in (0, None)
