# ============================================================================
# REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for directory repositories
# PURPOSE: Pick the directory backend named by configuration
# EXPORTS: RepositoryFactory, get_directory_repository, reset_directory_repository
# INTERFACES: Creates instances implementing IDirectoryRepository
# DEPENDENCIES: config, infrastructure.memory_repository, infrastructure.postgresql
# PATTERNS: Factory pattern, Singleton
# ============================================================================

"""
Repository Factory - Central Creation Point

Backends:
- memory: JSON fixture file (DIRECTORY_DATA_PATH)
- postgres: directory schema in PostgreSQL (POSTGIS_* settings)
"""

from typing import Optional

from config import AppConfig, get_config
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType, log_exceptions
from .interface_repository import IDirectoryRepository

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "RepositoryFactory")


class RepositoryFactory:
    """
    Factory for creating directory repository instances.
    """

    @staticmethod
    def create_memory_repository(data_path: str) -> IDirectoryRepository:
        """
        Create a repository from a JSON fixture file.

        Raises:
            ConfigurationError: File missing or invalid
        """
        from .memory_repository import InMemoryDirectoryRepository

        logger.info(f"Creating in-memory directory repository from {data_path}")
        return InMemoryDirectoryRepository.from_file(data_path)

    @staticmethod
    def create_postgres_repository(config: AppConfig) -> IDirectoryRepository:
        """
        Create a PostgreSQL repository.

        Raises:
            ConfigurationError: Database settings incomplete
        """
        from .postgresql import PostgreSQLDirectoryRepository

        if not config.database.is_configured:
            raise ConfigurationError(
                "DIRECTORY_BACKEND=postgres requires POSTGIS_HOST and POSTGIS_DATABASE"
            )
        logger.info(f"Creating PostgreSQL directory repository (schema: {config.database.schema_name})")
        return PostgreSQLDirectoryRepository(config)

    @staticmethod
    @log_exceptions(ComponentType.REPOSITORY, "RepositoryFactory")
    def create_directory_repository(config: Optional[AppConfig] = None) -> IDirectoryRepository:
        """
        Create the repository selected by DIRECTORY_BACKEND.

        Args:
            config: Application config (uses singleton if not provided)

        Returns:
            IDirectoryRepository implementation
        """
        config = config or get_config()
        if config.directory_backend == "memory":
            return RepositoryFactory.create_memory_repository(config.directory_data_path)
        if config.directory_backend == "postgres":
            return RepositoryFactory.create_postgres_repository(config)
        raise ConfigurationError(f"Unknown directory backend: {config.directory_backend!r}")


# Module-level singleton
_repository_instance: Optional[IDirectoryRepository] = None


def get_directory_repository() -> IDirectoryRepository:
    """
    Get singleton directory repository for the configured backend.
    """
    global _repository_instance
    if _repository_instance is None:
        _repository_instance = RepositoryFactory.create_directory_repository()
    return _repository_instance


def reset_directory_repository() -> None:
    global _repository_instance
    _repository_instance = None
