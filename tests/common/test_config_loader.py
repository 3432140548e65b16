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


import os
from pathlib import Path

import pytest
import yaml

from shortlink_auth.common.config_loader import load_configuration
from shortlink_auth.common.structures import Configuration
from shortlink_auth.common.utils import parse_server_configuration

REPO_CONFIG = Path(__file__).resolve().parents[2] / "config" / "configuration.yaml"


def test_repository_configuration_is_valid():
    configuration = parse_server_configuration(str(REPO_CONFIG))

    assert configuration.app.base_url == "/auth/v1"
    assert configuration.security.rebac is not None
    assert configuration.security.rebac.type == "spicedb"
    assert configuration.permissions.extension == ".yaml"


def test_defaults_apply_to_an_empty_file(tmp_path: Path):
    config_file = tmp_path / "configuration.yaml"
    config_file.write_text("")

    configuration = parse_server_configuration(str(config_file))

    assert configuration == Configuration()
    assert configuration.security.rebac is None
    assert configuration.permissions.bundle_path is None


def test_invalid_yaml_is_reported(tmp_path: Path):
    config_file = tmp_path / "configuration.yaml"
    config_file.write_text("app: [oops\n")

    with pytest.raises(yaml.YAMLError):
        parse_server_configuration(str(config_file))


def test_load_configuration_uses_environment(tmp_path: Path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("SPICEDB_TOKEN=from-dotenv\n")
    config_file = tmp_path / "configuration.yaml"
    config_file.write_text(
        "app:\n  port: 9100\nsecurity:\n  rebac:\n    endpoint: spicedb:50051\n"
    )
    monkeypatch.delenv("SPICEDB_TOKEN", raising=False)
    monkeypatch.setenv("ENV_FILE", str(env_file))
    monkeypatch.setenv("CONFIG_FILE", str(config_file))

    configuration = load_configuration()

    assert configuration.app.port == 9100
    assert configuration.security.rebac.endpoint == "spicedb:50051"
    assert os.environ.pop("SPICEDB_TOKEN") == "from-dotenv"


def test_load_configuration_requires_the_file(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("ENV_FILE", str(tmp_path / ".env"))
    monkeypatch.setenv("CONFIG_FILE", str(tmp_path / "missing.yaml"))

    with pytest.raises(FileNotFoundError):
        load_configuration()
