from shortlink_auth.services.permission.errors import (
    ResourceLoadError,
    SchemaApplyError,
    SchemaParseError,
    SchemaSyncError,
)
from shortlink_auth.services.permission.permission_service import PermissionService
from shortlink_auth.services.permission.resource_loader import (
    bundled_permissions,
    load_schema_resources,
)
from shortlink_auth.services.permission.schema_parser import parse_schema_resource
from shortlink_auth.services.permission.schema_synchronizer import SchemaSynchronizer
from shortlink_auth.services.permission.structures import (
    SchemaResource,
    SynchronizationResult,
    SyncOutcome,
)

__all__ = [
    "PermissionService",
    "ResourceLoadError",
    "SchemaApplyError",
    "SchemaParseError",
    "SchemaResource",
    "SchemaSyncError",
    "SchemaSynchronizer",
    "SyncOutcome",
    "SynchronizationResult",
    "bundled_permissions",
    "load_schema_resources",
    "parse_schema_resource",
]
