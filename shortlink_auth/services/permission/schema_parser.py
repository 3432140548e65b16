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
Decode bundled YAML definitions into SpiceDB ``WriteSchemaRequest`` messages.

A definition is the YAML rendition of the request itself::

    schema: |
      definition user {}
      definition link { relation owner: user }

Field names follow the protobuf JSON mapping and unknown fields are
rejected, so a typo in a bundled file fails the build instead of silently
writing an empty schema.
"""

from __future__ import annotations

import yaml
from authzed.api.v1 import WriteSchemaRequest
from google.protobuf import json_format

from shortlink_auth.services.permission.errors import SchemaParseError
from shortlink_auth.services.permission.structures import SchemaResource


def parse_schema_resource(resource: SchemaResource) -> WriteSchemaRequest:
    """
    Turn one bundled definition into a schema-write request.

    Raises:
        SchemaParseError: the file is empty, is not a YAML mapping, carries
            unknown fields or has a blank schema body.
    """
    try:
        text = resource.data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SchemaParseError(resource.path, e) from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaParseError(resource.path, e) from e

    if document is None:
        raise SchemaParseError(resource.path, ValueError("empty definition"))
    if not isinstance(document, dict):
        raise SchemaParseError(
            resource.path,
            ValueError(
                f"expected a mapping at the top level, got {type(document).__name__}"
            ),
        )

    request = WriteSchemaRequest()
    try:
        json_format.ParseDict(document, request)
    except json_format.ParseError as e:
        raise SchemaParseError(resource.path, e) from e

    if not request.schema.strip():
        raise SchemaParseError(resource.path, ValueError("schema body is empty"))
    return request
