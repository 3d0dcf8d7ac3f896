# ============================================================================
# DIRECTORY SERVICE
# ============================================================================
# STATUS: Business logic - directory query layer
# PURPOSE: Category, entry, site, permalink and logo lookups against the directory tenant
# EXPORTS: DirectoryService, get_directory_service, reset_directory_service
# DEPENDENCIES: config, core.models, infrastructure, services.logo
# ============================================================================
"""
Directory Service Layer.

Every lookup runs against the directory tenant: the site whose stores hold
the directory categories and entries. The tenant id is passed explicitly to
each repository call.

Tenant resolution:
    1. DIRECTORY_SITE_ID when set
    2. The main site of NETWORK_ID, when the store knows one
    3. MAIN_SITE_ID (default 1)

Failures of the underlying stores (UpstreamQueryError) are logged and
turned into empty results; callers never see them.

Usage:
    service = get_directory_service()

    for term in service.list_categories({"hide_empty": True}):
        sites = service.list_sites_by_term(term)

    logo_html = service.get_site_logo(site_id=4, size=(72, 72))
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit, urlunsplit

from config import AppConfig, ShortcodeDefaults, get_config
from core.models import (
    CategoryTerm,
    DirectoryEntry,
    EntryQuery,
    LogoSize,
    SiteDetails,
    TermQuery,
)
from exceptions import UpstreamQueryError
from infrastructure.interface_repository import IDirectoryRepository
from util_logger import LoggerFactory, ComponentType
from .logo import custom_logo_html, featured_image_html

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DirectoryService")

PERMALINK_SCHEMES = ("http", "https", "relative")


# Module-level singleton
_service_instance: Optional["DirectoryService"] = None


def get_directory_service() -> "DirectoryService":
    """
    Get singleton DirectoryService instance.
    """
    global _service_instance
    if _service_instance is None:
        _service_instance = DirectoryService()
    return _service_instance


def reset_directory_service() -> None:
    global _service_instance
    _service_instance = None


class DirectoryService:
    """
    Read-only queries over the directory tenant's categories and entries.
    """

    def __init__(
        self,
        repository: Optional[IDirectoryRepository] = None,
        config: Optional[AppConfig] = None,
        directory_site_id: Optional[int] = None
    ):
        """
        Initialize service.

        Args:
            repository: Directory stores (configured backend if not provided)
            config: Application config (uses singleton if not provided)
            directory_site_id: Tenant override, resolved lazily if not provided
        """
        self.config = config or get_config()
        if repository is None:
            from infrastructure.factory import get_directory_repository
            repository = get_directory_repository()
        self.repository = repository
        self.taxonomy = self.config.directory_taxonomy
        self._directory_site_id = directory_site_id
        logger.debug("DirectoryService initialized")

    # =========================================================================
    # TENANT
    # =========================================================================

    @property
    def directory_site_id(self) -> int:
        """Directory tenant id, resolved once."""
        if self._directory_site_id is None:
            self._directory_site_id = self._resolve_directory_site_id()
        return self._directory_site_id

    def _resolve_directory_site_id(self) -> int:
        if self.config.directory_site_id is not None:
            return self.config.directory_site_id
        try:
            main_site = self.repository.get_main_site_id(self.config.current_network_id)
        except UpstreamQueryError as e:
            logger.warning(f"Could not look up main site of network {self.config.current_network_id}: {e}")
            main_site = None
        if main_site is not None:
            return main_site
        return self.config.resolve_directory_site_id()

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    def list_categories(self, args: Optional[Dict[str, Any]] = None,
                        geo_only: bool = False) -> List[CategoryTerm]:
        """
        Directory categories matching a term filter.

        Args:
            args: Raw term filter (hide_empty defaults to false)
            geo_only: Only categories carrying geo meta

        Returns:
            Matching terms, [] on upstream failure
        """
        try:
            query = TermQuery.from_args(
                args,
                taxonomy=self.taxonomy,
                geo_key=ShortcodeDefaults.GEO_META_KEY if geo_only else None,
            )
            return self.repository.get_terms(self.directory_site_id, query)
        except UpstreamQueryError as e:
            logger.error(f"Category query failed on site {self.directory_site_id}: {e}")
            return []

    def list_location_categories(self, args: Optional[Dict[str, Any]] = None) -> List[CategoryTerm]:
        """Categories carrying geo meta."""
        return self.list_categories(args, geo_only=True)

    # =========================================================================
    # ENTRIES AND SITES
    # =========================================================================

    def _term_constraint(self, term: CategoryTerm) -> Dict[str, Any]:
        return {
            'taxonomy': term.taxonomy or self.taxonomy,
            'field': 'term_id',
            'terms': [term.term_id],
            'operator': 'IN',
        }

    def list_entries_by_term(self, term: CategoryTerm,
                             args: Optional[Dict[str, Any]] = None) -> List[DirectoryEntry]:
        """
        Directory entries filed under a category.

        Args:
            term: Category
            args: Raw entry filter, ANDed with the category constraint

        Returns:
            Matching entries, [] on upstream failure
        """
        try:
            query = EntryQuery.from_args(
                args,
                taxonomy=self.taxonomy,
                extra_constraints=[self._term_constraint(term)],
            )
            return self.repository.get_entries(self.directory_site_id, query)
        except UpstreamQueryError as e:
            logger.error(f"Entry query for term {term.term_id} ({term.slug}) failed: {e}")
            return []

    def list_sites_by_term(self, term: CategoryTerm,
                           args: Optional[Dict[str, Any]] = None) -> List[SiteDetails]:
        """
        Member sites whose directory entries are filed under a category.

        Entries pointing at sites that no longer exist are skipped.
        """
        sites = []
        for entry in self.list_entries_by_term(term, args):
            try:
                site = self.repository.get_site(entry.blog_id)
            except UpstreamQueryError as e:
                logger.error(f"Site lookup for blog {entry.blog_id} failed: {e}")
                continue
            if site is None:
                logger.debug(f"Entry {entry.ID} points at missing site {entry.blog_id}, skipping")
                continue
            sites.append(site)
        return sites

    def resolve_entry(self, site_id: int) -> Optional[DirectoryEntry]:
        """
        The directory entry describing a member site, whatever its status.

        When a site has several entries the most recent one wins.
        """
        query = EntryQuery(
            blog_id=site_id,
            post_status=["any"],
            numberposts=1,
            orderby="date",
            order="DESC",
        )
        try:
            entries = self.repository.get_entries(self.directory_site_id, query)
        except UpstreamQueryError as e:
            logger.error(f"Entry lookup for site {site_id} failed: {e}")
            return None
        return entries[0] if entries else None

    def get_site_terms(self, site_id: int) -> List[CategoryTerm]:
        """Categories assigned to a member site's directory entry."""
        entry = self.resolve_entry(site_id)
        if entry is None:
            return []
        try:
            return self.repository.get_entry_terms(self.directory_site_id, entry.ID, self.taxonomy)
        except UpstreamQueryError as e:
            logger.error(f"Term lookup for entry {entry.ID} failed: {e}")
            return []

    # =========================================================================
    # PERMALINKS AND LOGOS
    # =========================================================================

    def _get_site(self, site_id: int) -> Optional[SiteDetails]:
        try:
            return self.repository.get_site(site_id)
        except UpstreamQueryError as e:
            logger.error(f"Site lookup for blog {site_id} failed: {e}")
            return None

    def get_site_permalink(self, site_id: int, scheme: Optional[str] = None) -> str:
        """
        URL of a member site.

        Args:
            site_id: Member site
            scheme: "http" or "https" to force a scheme, "relative" for the
                    path only; anything else keeps the stored URL

        Returns:
            Site URL, "" when the site does not exist
        """
        site = self._get_site(site_id)
        if site is None:
            return ""
        url = site.siteurl
        if scheme not in PERMALINK_SCHEMES:
            return url
        parts = urlsplit(url)
        if scheme == "relative":
            return urlunsplit(("", "", parts.path or "/", parts.query, parts.fragment))
        return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))

    def get_site_logo(self, site_id: int, size: LogoSize = "post-thumbnail") -> str:
        """
        Logo markup for a member site.

        The directory entry's featured image when it has one, else the
        site's custom logo, else "".
        """
        entry = self.resolve_entry(site_id)
        if entry is not None and entry.thumbnail is not None:
            markup = featured_image_html(entry.thumbnail, size, self.config.image_sizes)
            if markup:
                return markup
        return custom_logo_html(self._get_site(site_id))
