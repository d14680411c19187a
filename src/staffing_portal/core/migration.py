"""Database migration utilities."""

import os
from pathlib import Path

from alembic import command
from alembic.config import Config
import structlog

logger = structlog.get_logger(__name__)


class MigrationManager:
    """Manages database migrations using Alembic."""

    def __init__(self, alembic_cfg_path: str = "alembic.ini") -> None:
        """Initialize migration manager.

        Args:
            alembic_cfg_path: Path to alembic.ini configuration file
        """
        self.alembic_cfg_path = alembic_cfg_path
        self.config = None

    def _get_alembic_config(self) -> Config:
        """Get Alembic configuration.

        Returns:
            Alembic configuration object

        Raises:
            FileNotFoundError: If alembic.ini is not found
        """
        if self.config is None:
            if not os.path.exists(self.alembic_cfg_path):
                raise FileNotFoundError(f"Alembic config file not found: {self.alembic_cfg_path}")

            self.config = Config(self.alembic_cfg_path)

            # Resolve the script location against the project root
            script_location = self.config.get_main_option("script_location")
            if script_location:
                project_root = Path(__file__).parent.parent.parent.parent
                full_script_path = project_root / script_location
                self.config.set_main_option("script_location", str(full_script_path))

        return self.config

    def run_migrations(self) -> None:
        """Run all pending migrations to upgrade database to latest version."""
        try:
            config = self._get_alembic_config()
            command.upgrade(config, "head")
            logger.info("Database migrations completed successfully")
        except Exception as e:
            logger.error("Failed to run database migrations", error=str(e))
            raise


# Global migration manager instance
migration_manager = MigrationManager()


def run_migrations() -> None:
    """Run all pending database migrations."""
    migration_manager.run_migrations()


def init_database() -> None:
    """Initialize database connection and bring the schema up to date.

    SQLite development databases are created straight from the model
    metadata; every other backend goes through Alembic.
    """
    from .database import db_manager

    logger.info("Initializing database...")
    db_manager.initialize()

    if db_manager.database_url.startswith("sqlite"):
        db_manager.create_tables()
    else:
        run_migrations()

    logger.info("Database initialization completed")
