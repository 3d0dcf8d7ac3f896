# ============================================================================
# DIRECTORY REPOSITORY INTERFACE
# ============================================================================
# STATUS: Infrastructure - contract for term, entry and site stores
# PURPOSE: Abstract interface every directory backend implements
# EXPORTS: IDirectoryRepository
# DEPENDENCIES: abc, core.models
# PATTERNS: Interface segregation, dependency inversion
# ============================================================================

"""
Directory Repository Interface

Defines the read-only contract for the upstream stores the directory
consumes: taxonomy terms and directory entries held by one tenant, and the
network-wide site registry.

Every tenant-scoped method takes the tenant's site id explicitly; there is
no "current site" state anywhere in a repository.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import (
    CategoryTerm,
    DirectoryEntry,
    EntryQuery,
    SiteDetails,
    TermQuery,
)


class IDirectoryRepository(ABC):
    """
    Interface for directory store lookups.

    Implementations must raise UpstreamQueryError for any failure of the
    underlying store so callers can treat it as "no results".
    """

    @abstractmethod
    def get_terms(self, site_id: int, query: TermQuery) -> List[CategoryTerm]:
        """
        Category terms of a tenant matching the query.

        Args:
            site_id: Tenant holding the taxonomy
            query: Parsed term filter

        Returns:
            Matching terms in the query's order
        """
        pass

    @abstractmethod
    def get_entries(self, site_id: int, query: EntryQuery) -> List[DirectoryEntry]:
        """
        Directory entries of a tenant matching the query.

        Args:
            site_id: Tenant holding the entries
            query: Parsed entry filter

        Returns:
            Matching entries in the query's order, limited/offset per query
        """
        pass

    @abstractmethod
    def get_entry_terms(self, site_id: int, entry_id: int, taxonomy: str) -> List[CategoryTerm]:
        """
        Terms of one taxonomy assigned to an entry.
        """
        pass

    @abstractmethod
    def get_site(self, blog_id: int) -> Optional[SiteDetails]:
        """
        Member site from the network registry.

        Returns:
            SiteDetails or None if the site does not exist
        """
        pass

    def get_main_site_id(self, network_id: int) -> Optional[int]:
        """
        Main site of a network, when the backend tracks networks.

        Returns:
            Site id or None when unknown
        """
        return None
