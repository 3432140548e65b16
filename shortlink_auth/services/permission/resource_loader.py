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
Discovery of the permission schemas shipped inside the package.

The definitions live as package data under ``permissions/`` so that the
schema applied at startup is always the one versioned with this build.
The loader accepts any ``Traversable`` (package resources or a plain
``pathlib.Path``) and walks it depth-first, visiting the entries of each
directory in lexicographic order. A directory's content is visited at the
position of its name, exactly like a sorted recursive walk.
"""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable

from shortlink_auth.services.permission.errors import ResourceLoadError
from shortlink_auth.services.permission.structures import SchemaResource

logger = logging.getLogger(__name__)

SCHEMA_EXTENSION = ".yaml"
BUNDLE_DIRECTORY = "permissions"


def bundled_permissions() -> Traversable:
    """Return the read-only tree of schema definitions bundled with the package."""
    return resources.files(__package__).joinpath(BUNDLE_DIRECTORY)


def load_schema_resources(
    root: Traversable, extension: str = SCHEMA_EXTENSION
) -> list[SchemaResource]:
    """
    Read every schema definition under ``root``.

    Args:
        root: Bundle root to walk.
        extension: Only files ending with this suffix are returned.

    Returns:
        The definitions in deterministic walk order. A missing or empty
        bundle returns an empty list.

    Raises:
        ResourceLoadError: listing a directory or reading a matched file
            failed. Nothing is returned in that case.
    """
    try:
        is_dir = root.is_dir()
    except OSError as e:
        raise ResourceLoadError(".", e) from e
    if not is_dir:
        logger.warning("[PERMISSIONS] No schema bundle found at %s", root)
        return []

    found: list[SchemaResource] = []
    _walk(root, "", extension, found)
    logger.debug(
        "[PERMISSIONS] Loaded %d schema definition(s) from %s", len(found), root
    )
    return found


def _walk(
    directory: Traversable,
    prefix: str,
    extension: str,
    found: list[SchemaResource],
) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise ResourceLoadError(prefix or ".", e) from e

    for entry in entries:
        path = f"{prefix}{entry.name}"
        try:
            if entry.is_dir():
                _walk(entry, f"{path}/", extension, found)
                continue
            if not entry.name.endswith(extension):
                continue
            data = entry.read_bytes()
        except OSError as e:
            raise ResourceLoadError(path, e) from e
        found.append(SchemaResource(path=path, data=data))
