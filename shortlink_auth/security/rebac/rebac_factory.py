import logging

from shortlink_auth.common.structures import SecurityConfiguration
from shortlink_auth.security.rebac.noop_engine import NoopSchemaEngine
from shortlink_auth.security.rebac.schema_engine import SchemaEngine
from shortlink_auth.security.rebac.spicedb_engine import SpiceDbSchemaEngine

logger = logging.getLogger(__name__)


def schema_engine_factory(security_config: SecurityConfiguration) -> SchemaEngine:
    """Factory function to create the schema engine based on the provided configuration."""
    rebac_config = security_config.rebac

    if rebac_config is None or not rebac_config.enabled:
        logger.warning("ReBAC is disabled, permission schemas will not be written")
        return NoopSchemaEngine()

    logger.info(
        "Initializing SpiceDB schema engine (endpoint=%s, insecure=%s)",
        rebac_config.endpoint,
        rebac_config.insecure,
    )
    return SpiceDbSchemaEngine(rebac_config)
