# shortlink/core/db.py
"""
Database configuration and initialization module.
Handles Tortoise ORM setup, database connection, and migration configuration.
"""
import logging

from tortoise import Tortoise

from shortlink.config import settings

logger = logging.getLogger("uvicorn.error")

# Database connection URL
# Default is a SQLite file at DB_LOCATION; DATABASE_URL overrides (e.g. postgres://...)
DB_URL = settings.resolved_database_url()

# Tortoise ORM configuration dictionary
# This configuration is also used by Aerich for database migrations
TORTOISE_ORM = {
    "connections": {"default": DB_URL},
    "apps": {
        "models": {
            "models": [
                "shortlink.models.user",         # User accounts
                "shortlink.models.alias",        # Short aliases
                "shortlink.models.stored_file",  # Uploaded file payloads
                "aerich.models",                 # Required: Let Aerich manage migration tables
            ],
            "default_connection": "default",
        },
    },
}

async def init_db():
    """
    Initialize Tortoise ORM database connection.

    Called during application startup. Missing tables are created unless
    GENERATE_SCHEMAS is disabled (when Aerich migrations own the schema).
    """
    await Tortoise.init(config=TORTOISE_ORM)
    if settings.generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    logger.info("[db] connected to %s", TORTOISE_ORM["connections"]["default"].split("@")[-1])

async def close_db():
    """
    Close all database connections.
    """
    await Tortoise.close_connections()
