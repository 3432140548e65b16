from shortlink_auth.security.rebac.noop_engine import NoopSchemaEngine
from shortlink_auth.security.rebac.rebac_factory import schema_engine_factory
from shortlink_auth.security.rebac.schema_engine import SchemaEngine
from shortlink_auth.security.rebac.spicedb_engine import SpiceDbSchemaEngine

__all__ = [
    "NoopSchemaEngine",
    "SchemaEngine",
    "SpiceDbSchemaEngine",
    "schema_engine_factory",
]
