"""
Infrastructure Package - Lazy Loading Implementation.

Repository modules are imported on first attribute access, so importing
this package at function_app load time never reads the environment or
touches the database driver.

Exports:
    IDirectoryRepository: Store contract
    InMemoryDirectoryRepository: JSON fixture backend
    PostgreSQLDirectoryRepository: PostgreSQL backend
    RepositoryFactory, get_directory_repository: Backend selection
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .interface_repository import IDirectoryRepository as _IDirectoryRepository
    from .memory_repository import InMemoryDirectoryRepository as _InMemoryDirectoryRepository
    from .postgresql import PostgreSQLDirectoryRepository as _PostgreSQLDirectoryRepository
    from .factory import RepositoryFactory as _RepositoryFactory


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name == "RepositoryFactory":
        from .factory import RepositoryFactory
        return RepositoryFactory
    elif name == "get_directory_repository":
        from .factory import get_directory_repository
        return get_directory_repository
    elif name == "reset_directory_repository":
        from .factory import reset_directory_repository
        return reset_directory_repository
    elif name == "IDirectoryRepository":
        from .interface_repository import IDirectoryRepository
        return IDirectoryRepository
    elif name == "InMemoryDirectoryRepository":
        from .memory_repository import InMemoryDirectoryRepository
        return InMemoryDirectoryRepository
    elif name == "PostgreSQLDirectoryRepository":
        from .postgresql import PostgreSQLDirectoryRepository
        return PostgreSQLDirectoryRepository
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "IDirectoryRepository",
    "InMemoryDirectoryRepository",
    "PostgreSQLDirectoryRepository",
    "RepositoryFactory",
    "get_directory_repository",
    "reset_directory_repository",
]
