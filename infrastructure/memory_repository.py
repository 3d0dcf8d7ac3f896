# ============================================================================
# IN-MEMORY DIRECTORY REPOSITORY
# ============================================================================
# STATUS: Infrastructure - fixture-backed directory stores
# PURPOSE: Evaluate term/entry queries over records loaded from JSON
# EXPORTS: InMemoryDirectoryRepository
# DEPENDENCIES: pydantic, core.models, infrastructure.interface_repository
# ============================================================================
"""
In-Memory Directory Repository.

Holds sites, terms and entries in dictionaries and evaluates TermQuery and
EntryQuery the same way the PostgreSQL repository does in SQL. Used for
local development (DIRECTORY_BACKEND=memory) and tests.

Fixture format:
    {
        "sites": [{"blog_id": 2, "siteurl": "https://a.example", "blogname": "A"}],
        "networks": {"1": 1},
        "tenants": {
            "1": {
                "terms": [{"term_id": 5, "name": "Boston", "slug": "boston",
                           "meta": {"geo": "42.36,-71.06"}}],
                "entries": [{"ID": 10, "blog_id": 2, "post_title": "A",
                             "term_ids": [5]}]
            }
        }
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from pydantic import ValidationError

from core.models import (
    CategoryTerm,
    DirectoryEntry,
    EntryQuery,
    MetaClause,
    SiteDetails,
    TaxConstraint,
    TermQuery,
)
from exceptions import ConfigurationError, UpstreamQueryError
from util_logger import LoggerFactory, ComponentType
from .interface_repository import IDirectoryRepository

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "InMemoryDirectoryRepository")


@dataclass
class TenantStore:
    """Terms and entries of one tenant."""
    terms: Dict[int, CategoryTerm] = field(default_factory=dict)
    entries: Dict[int, DirectoryEntry] = field(default_factory=dict)


def _meta_matches(term: CategoryTerm, clause: MetaClause) -> bool:
    present = clause.key in term.meta
    value = term.meta.get(clause.key)
    if clause.compare == "EXISTS":
        return present
    if clause.compare == "NOT EXISTS":
        return not present
    if clause.compare == "=":
        return present and str(value) == str(clause.value)
    if clause.compare == "!=":
        return not present or str(value) != str(clause.value)
    # LIKE
    return present and str(clause.value).lower() in str(value).lower()


class InMemoryDirectoryRepository(IDirectoryRepository):
    """
    Directory stores held in process memory.
    """

    def __init__(
        self,
        sites: Optional[Iterable[SiteDetails]] = None,
        tenants: Optional[Dict[int, TenantStore]] = None,
        networks: Optional[Dict[int, int]] = None
    ):
        self._sites: Dict[int, SiteDetails] = {s.blog_id: s for s in (sites or [])}
        self._tenants: Dict[int, TenantStore] = dict(tenants or {})
        self._networks: Dict[int, int] = dict(networks or {})

    # =========================================================================
    # LOADING
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryDirectoryRepository":
        """
        Build a repository from the fixture structure.

        Raises:
            ValueError: Records do not validate
        """
        sites = [SiteDetails.model_validate(s) for s in data.get('sites', [])]
        tenants: Dict[int, TenantStore] = {}
        for site_id, tenant in (data.get('tenants') or {}).items():
            store = TenantStore()
            for raw in tenant.get('terms', []):
                term = CategoryTerm.model_validate(raw)
                store.terms[term.term_id] = term
            for raw in tenant.get('entries', []):
                entry = DirectoryEntry.model_validate(raw)
                store.entries[entry.ID] = entry
            tenants[int(site_id)] = store
        networks = {int(k): int(v) for k, v in (data.get('networks') or {}).items()}
        return cls(sites=sites, tenants=tenants, networks=networks)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InMemoryDirectoryRepository":
        """
        Load the fixture JSON file.

        Raises:
            ConfigurationError: File missing, unreadable or invalid
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            repository = cls.from_dict(data)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Directory data file not found: {path}") from e
        except (OSError, ValueError, ValidationError) as e:
            raise ConfigurationError(f"Directory data file {path} is invalid: {e}") from e
        logger.info(
            f"Loaded directory fixture {path}: {len(repository._sites)} sites, "
            f"{len(repository._tenants)} tenants"
        )
        return repository

    def add_site(self, site: SiteDetails) -> None:
        self._sites[site.blog_id] = site

    def add_term(self, site_id: int, term: CategoryTerm) -> None:
        self._tenants.setdefault(site_id, TenantStore()).terms[term.term_id] = term

    def add_entry(self, site_id: int, entry: DirectoryEntry) -> None:
        self._tenants.setdefault(site_id, TenantStore()).entries[entry.ID] = entry

    # =========================================================================
    # TERMS
    # =========================================================================

    def _store(self, site_id: int) -> TenantStore:
        if site_id not in self._tenants:
            raise UpstreamQueryError(f"Site {site_id} has no directory data")
        return self._tenants[site_id]

    def _term_count(self, store: TenantStore, term_id: int) -> int:
        return sum(
            1 for e in store.entries.values()
            if e.post_status == "publish" and term_id in e.term_ids
        )

    def get_terms(self, site_id: int, query: TermQuery) -> List[CategoryTerm]:
        store = self._store(site_id)
        results = []
        for term in store.terms.values():
            if term.taxonomy != query.taxonomy:
                continue
            count = self._term_count(store, term.term_id)
            if query.hide_empty and count == 0:
                continue
            if query.slug and term.slug not in query.slug:
                continue
            if query.name and term.name not in query.name:
                continue
            if query.include and term.term_id not in query.include:
                continue
            if term.term_id in query.exclude:
                continue
            if query.search and query.search.lower() not in term.name.lower() \
                    and query.search.lower() not in term.slug.lower():
                continue
            if not all(_meta_matches(term, clause) for clause in query.meta_query):
                continue
            results.append(term.model_copy(update={'count': count}))

        if query.orderby != "none":
            sort_keys = {
                'name': lambda t: t.name.lower(),
                'slug': lambda t: t.slug,
                'term_id': lambda t: t.term_id,
                'id': lambda t: t.term_id,
                'count': lambda t: t.count,
            }
            results.sort(key=sort_keys[query.orderby], reverse=query.order == "DESC")

        if query.number:
            results = results[:query.number]
        logger.debug(f"Term query on site {site_id} matched {len(results)} terms")
        return results

    # =========================================================================
    # ENTRIES
    # =========================================================================

    def _resolve_term_ids(self, store: TenantStore, constraint: TaxConstraint) -> Set[int]:
        wanted = {str(t) for t in constraint.terms}
        matched = set()
        for term in store.terms.values():
            if term.taxonomy != constraint.taxonomy:
                continue
            value = {
                'term_id': str(term.term_id),
                'slug': term.slug,
                'name': term.name,
            }[constraint.field]
            if value in wanted:
                matched.add(term.term_id)
        return matched

    def _constraint_matches(self, store: TenantStore, entry: DirectoryEntry,
                            constraint: TaxConstraint) -> bool:
        taxonomy_ids = {
            tid for tid in entry.term_ids
            if tid in store.terms and store.terms[tid].taxonomy == constraint.taxonomy
        }
        if constraint.operator == "EXISTS":
            return bool(taxonomy_ids)
        if constraint.operator == "NOT EXISTS":
            return not taxonomy_ids

        resolved = self._resolve_term_ids(store, constraint)
        if constraint.operator == "IN":
            return bool(resolved & taxonomy_ids)
        if constraint.operator == "NOT IN":
            return not (resolved & taxonomy_ids)
        # AND: every requested term must exist and be assigned
        requested = {str(t) for t in constraint.terms}
        return len(resolved) >= len(requested) > 0 and resolved <= taxonomy_ids

    def _entry_matches(self, store: TenantStore, entry: DirectoryEntry, query: EntryQuery) -> bool:
        if not query.any_status and entry.post_status not in query.post_status:
            return False
        if query.blog_id is not None and entry.blog_id != query.blog_id:
            return False
        if query.post__in and entry.ID not in query.post__in:
            return False
        if entry.ID in query.post__not_in:
            return False
        if not all(self._constraint_matches(store, entry, c) for c in query.required):
            return False
        if query.tax_query:
            matches = (self._constraint_matches(store, entry, c) for c in query.tax_query)
            if query.tax_relation == "OR":
                return any(matches)
            return all(matches)
        return True

    def get_entries(self, site_id: int, query: EntryQuery) -> List[DirectoryEntry]:
        store = self._store(site_id)
        results = [e for e in store.entries.values() if self._entry_matches(store, e, query)]

        if query.orderby != "none":
            sort_keys = {
                'date': lambda e: e.post_date,
                'title': lambda e: e.post_title.lower(),
                'name': lambda e: e.post_name,
                'id': lambda e: e.ID,
            }
            results.sort(key=sort_keys[query.orderby], reverse=query.order == "DESC")

        results = results[query.offset:]
        if query.numberposts >= 0:
            results = results[:query.numberposts]
        logger.debug(f"Entry query on site {site_id} matched {len(results)} entries")
        return results

    def get_entry_terms(self, site_id: int, entry_id: int, taxonomy: str) -> List[CategoryTerm]:
        store = self._store(site_id)
        entry = store.entries.get(entry_id)
        if entry is None:
            return []
        return [
            store.terms[tid] for tid in entry.term_ids
            if tid in store.terms and store.terms[tid].taxonomy == taxonomy
        ]

    # =========================================================================
    # SITES
    # =========================================================================

    def get_site(self, blog_id: int) -> Optional[SiteDetails]:
        return self._sites.get(blog_id)

    def get_main_site_id(self, network_id: int) -> Optional[int]:
        if network_id in self._networks:
            return self._networks[network_id]
        for site in self._sites.values():
            if site.network_id == network_id and site.is_main_site:
                return site.blog_id
        return None
