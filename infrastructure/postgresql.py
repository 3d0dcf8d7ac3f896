# ============================================================================
# POSTGRESQL DIRECTORY REPOSITORY
# ============================================================================
# STATUS: Infrastructure - PostgreSQL-backed directory stores
# PURPOSE: Translate TermQuery/EntryQuery into composed SQL over the directory schema
# EXPORTS: PostgreSQLDirectoryRepository
# DEPENDENCIES: psycopg, psycopg.sql, config, core.models
# VALIDATION: SQL injection prevention via psycopg.sql composition
# ============================================================================
"""
PostgreSQL Directory Repository.

Reads the directory schema (DIRECTORY_SCHEMA, default "directory"):

    sites(blog_id, network_id, siteurl, blogname, domain, path,
          is_main_site, custom_logo jsonb)
    terms(site_id, term_id, taxonomy, name, slug, description, parent)
    termmeta(site_id, term_id, meta_key, meta_value)
    entries(site_id, post_id, blog_id, post_name, post_title, post_excerpt,
            post_content, post_status, post_date, thumbnail jsonb)
    term_relationships(site_id, post_id, term_id)

Every tenant-scoped table carries site_id, so a tenant is a WHERE clause
rather than a connection-level switch.

Thread Safety:
    Each method opens its own connection.
"""

from contextlib import contextmanager
from typing import Any, List, Optional, Tuple

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from config import AppConfig, get_config
from core.models import (
    CategoryTerm,
    DirectoryEntry,
    EntryQuery,
    MetaClause,
    SiteDetails,
    TaxConstraint,
    TermQuery,
)
from exceptions import UpstreamQueryError
from util_logger import LoggerFactory, ComponentType
from .interface_repository import IDirectoryRepository

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "PostgreSQLDirectoryRepository")


_TERM_ORDER_COLUMNS = {
    'name': sql.SQL("lower(name)"),
    'slug': sql.SQL("slug"),
    'term_id': sql.SQL("term_id"),
    'id': sql.SQL("term_id"),
    'count': sql.SQL("count"),
}

_ENTRY_ORDER_COLUMNS = {
    'date': sql.SQL("e.post_date"),
    'title': sql.SQL("lower(e.post_title)"),
    'name': sql.SQL("e.post_name"),
    'id': sql.SQL("e.post_id"),
}

_TERM_FIELD_COLUMNS = {
    'term_id': sql.SQL("t.term_id::text"),
    'slug': sql.SQL("t.slug"),
    'name': sql.SQL("t.name"),
}


class PostgreSQLDirectoryRepository(IDirectoryRepository):
    """
    Directory stores read from PostgreSQL.
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 connection_string: Optional[str] = None):
        """
        Args:
            config: Application config (uses singleton if not provided)
            connection_string: Explicit connection string, overrides config
        """
        self.config = config or get_config()
        self._connection_string = connection_string
        self._schema = self.config.database.schema_name
        logger.debug(f"PostgreSQLDirectoryRepository initialized (schema: {self._schema})")

    def _get_connection_string(self) -> str:
        return self._connection_string or self.config.database.get_connection_string()

    @contextmanager
    def _get_connection(self):
        """
        Context manager for PostgreSQL connections.

        Yields:
            psycopg connection with dict_row factory
        """
        conn = None
        try:
            conn = psycopg.connect(self._get_connection_string(), row_factory=dict_row)
            yield conn
        except psycopg.Error as e:
            logger.error(f"Database error: {e}")
            raise UpstreamQueryError(f"Directory database error: {e}") from e
        finally:
            if conn:
                conn.close()

    def _fetch_all(self, query: sql.Composable, params: List[Any]) -> List[dict]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchall()

    def _fetch_one(self, query: sql.Composable, params: List[Any]) -> Optional[dict]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchone()

    # =========================================================================
    # TERMS
    # =========================================================================

    @staticmethod
    def _meta_condition(clause: MetaClause) -> Tuple[sql.Composable, List[Any]]:
        if clause.compare == "EXISTS":
            return sql.SQL("jsonb_exists(meta, %s)"), [clause.key]
        if clause.compare == "NOT EXISTS":
            return sql.SQL("NOT jsonb_exists(meta, %s)"), [clause.key]
        if clause.compare == "=":
            return sql.SQL("meta ->> %s = %s"), [clause.key, str(clause.value)]
        if clause.compare == "!=":
            return (
                sql.SQL("(NOT jsonb_exists(meta, %s) OR meta ->> %s <> %s)"),
                [clause.key, clause.key, str(clause.value)],
            )
        return sql.SQL("meta ->> %s ILIKE %s"), [clause.key, f"%{clause.value}%"]

    def build_term_query(self, site_id: int, query: TermQuery) -> Tuple[sql.Composed, List[Any]]:
        """
        Compose the SQL for a term query.

        Returns:
            (composed query, parameters)
        """
        params: List[Any] = [site_id, query.taxonomy]
        conditions: List[sql.Composable] = []

        if query.hide_empty:
            conditions.append(sql.SQL("count > 0"))
        if query.slug:
            conditions.append(sql.SQL("slug = ANY(%s)"))
            params.append(list(query.slug))
        if query.name:
            conditions.append(sql.SQL("name = ANY(%s)"))
            params.append(list(query.name))
        if query.include:
            conditions.append(sql.SQL("term_id = ANY(%s)"))
            params.append(list(query.include))
        if query.exclude:
            conditions.append(sql.SQL("NOT (term_id = ANY(%s))"))
            params.append(list(query.exclude))
        if query.search:
            conditions.append(sql.SQL("(name ILIKE %s OR slug ILIKE %s)"))
            params.extend([f"%{query.search}%", f"%{query.search}%"])
        for clause in query.meta_query:
            condition, clause_params = self._meta_condition(clause)
            conditions.append(condition)
            params.extend(clause_params)

        where = sql.SQL("WHERE ") + sql.SQL(" AND ").join(conditions) if conditions else sql.SQL("")

        order = sql.SQL("")
        if query.orderby != "none":
            order = sql.SQL("ORDER BY {column} {direction}").format(
                column=_TERM_ORDER_COLUMNS[query.orderby],
                direction=sql.SQL(query.order),
            )

        limit = sql.SQL("")
        if query.number:
            limit = sql.SQL("LIMIT %s")

        composed = sql.SQL("""
            WITH term_rows AS (
                SELECT t.term_id, t.taxonomy, t.name, t.slug, t.description, t.parent,
                       COALESCE(
                           (SELECT jsonb_object_agg(m.meta_key, m.meta_value)
                            FROM {schema}.termmeta m
                            WHERE m.site_id = t.site_id AND m.term_id = t.term_id),
                           '{{}}'::jsonb
                       ) AS meta,
                       (SELECT count(*)
                        FROM {schema}.term_relationships r
                        JOIN {schema}.entries e
                          ON e.site_id = r.site_id AND e.post_id = r.post_id
                        WHERE r.site_id = t.site_id AND r.term_id = t.term_id
                          AND e.post_status = 'publish') AS count
                FROM {schema}.terms t
                WHERE t.site_id = %s AND t.taxonomy = %s
            )
            SELECT * FROM term_rows
            {where}
            {order}
            {limit}
        """).format(
            schema=sql.Identifier(self._schema),
            where=where,
            order=order,
            limit=limit,
        )
        if query.number:
            params.append(query.number)
        return composed, params

    def get_terms(self, site_id: int, query: TermQuery) -> List[CategoryTerm]:
        composed, params = self.build_term_query(site_id, query)
        rows = self._fetch_all(composed, params)
        logger.debug(f"Term query on site {site_id} matched {len(rows)} terms")
        return [CategoryTerm.from_db_row(row) for row in rows]

    # =========================================================================
    # ENTRIES
    # =========================================================================

    def _constraint_condition(self, constraint: TaxConstraint) -> Tuple[sql.Composable, List[Any]]:
        """One tax constraint as a boolean expression over alias e."""
        assigned = sql.SQL("""
            FROM {schema}.term_relationships r
            JOIN {schema}.terms t ON t.site_id = r.site_id AND t.term_id = r.term_id
            WHERE r.site_id = e.site_id AND r.post_id = e.post_id AND t.taxonomy = %s
        """).format(schema=sql.Identifier(self._schema))

        if constraint.operator == "EXISTS":
            return sql.SQL("EXISTS (SELECT 1 {assigned})").format(assigned=assigned), [constraint.taxonomy]
        if constraint.operator == "NOT EXISTS":
            return sql.SQL("NOT EXISTS (SELECT 1 {assigned})").format(assigned=assigned), [constraint.taxonomy]

        terms = sorted({str(t) for t in constraint.terms})
        if not terms:
            # Nothing can be IN or AND an empty set; everything is NOT IN it
            return sql.SQL("TRUE" if constraint.operator == "NOT IN" else "FALSE"), []

        column = _TERM_FIELD_COLUMNS[constraint.field]
        if constraint.operator == "AND":
            return (
                sql.SQL("(SELECT count(DISTINCT t.term_id) {assigned} AND {column} = ANY(%s)) = %s").format(
                    assigned=assigned, column=column
                ),
                [constraint.taxonomy, terms, len(terms)],
            )
        template = "EXISTS" if constraint.operator == "IN" else "NOT EXISTS"
        return (
            sql.SQL(template + " (SELECT 1 {assigned} AND {column} = ANY(%s))").format(
                assigned=assigned, column=column
            ),
            [constraint.taxonomy, terms],
        )

    def build_entry_query(self, site_id: int, query: EntryQuery) -> Tuple[sql.Composed, List[Any]]:
        """
        Compose the SQL for an entry query.

        Returns:
            (composed query, parameters)
        """
        params: List[Any] = [site_id]
        conditions: List[sql.Composable] = [sql.SQL("e.site_id = %s")]

        if not query.any_status:
            conditions.append(sql.SQL("e.post_status = ANY(%s)"))
            params.append(list(query.post_status))
        if query.blog_id is not None:
            conditions.append(sql.SQL("e.blog_id = %s"))
            params.append(query.blog_id)
        if query.post__in:
            conditions.append(sql.SQL("e.post_id = ANY(%s)"))
            params.append(list(query.post__in))
        if query.post__not_in:
            conditions.append(sql.SQL("NOT (e.post_id = ANY(%s))"))
            params.append(list(query.post__not_in))

        for constraint in query.required:
            condition, constraint_params = self._constraint_condition(constraint)
            conditions.append(condition)
            params.extend(constraint_params)

        if query.tax_query:
            group = []
            for constraint in query.tax_query:
                condition, constraint_params = self._constraint_condition(constraint)
                group.append(condition)
                params.extend(constraint_params)
            joiner = sql.SQL(" OR ") if query.tax_relation == "OR" else sql.SQL(" AND ")
            conditions.append(sql.SQL("(") + joiner.join(group) + sql.SQL(")"))

        order = sql.SQL("")
        if query.orderby != "none":
            order = sql.SQL("ORDER BY {column} {direction}").format(
                column=_ENTRY_ORDER_COLUMNS[query.orderby],
                direction=sql.SQL(query.order),
            )

        limit = sql.SQL("")
        if query.numberposts >= 0:
            limit = sql.SQL("LIMIT %s")
        offset = sql.SQL("")
        if query.offset:
            offset = sql.SQL("OFFSET %s")

        composed = sql.SQL("""
            SELECT e.post_id, e.blog_id, e.post_name, e.post_title, e.post_excerpt,
                   e.post_content, e.post_status, e.post_date, e.thumbnail,
                   ARRAY(SELECT r.term_id FROM {schema}.term_relationships r
                         WHERE r.site_id = e.site_id AND r.post_id = e.post_id
                         ORDER BY r.term_id) AS term_ids
            FROM {schema}.entries e
            WHERE {conditions}
            {order}
            {limit}
            {offset}
        """).format(
            schema=sql.Identifier(self._schema),
            conditions=sql.SQL(" AND ").join(conditions),
            order=order,
            limit=limit,
            offset=offset,
        )
        if query.numberposts >= 0:
            params.append(query.numberposts)
        if query.offset:
            params.append(query.offset)
        return composed, params

    def get_entries(self, site_id: int, query: EntryQuery) -> List[DirectoryEntry]:
        composed, params = self.build_entry_query(site_id, query)
        rows = self._fetch_all(composed, params)
        logger.debug(f"Entry query on site {site_id} matched {len(rows)} entries")
        return [DirectoryEntry.from_db_row(row) for row in rows]

    def get_entry_terms(self, site_id: int, entry_id: int, taxonomy: str) -> List[CategoryTerm]:
        composed = sql.SQL("""
            SELECT t.term_id, t.taxonomy, t.name, t.slug, t.description, t.parent,
                   COALESCE(
                       (SELECT jsonb_object_agg(m.meta_key, m.meta_value)
                        FROM {schema}.termmeta m
                        WHERE m.site_id = t.site_id AND m.term_id = t.term_id),
                       '{{}}'::jsonb
                   ) AS meta
            FROM {schema}.term_relationships r
            JOIN {schema}.terms t ON t.site_id = r.site_id AND t.term_id = r.term_id
            WHERE r.site_id = %s AND r.post_id = %s AND t.taxonomy = %s
            ORDER BY lower(t.name)
        """).format(schema=sql.Identifier(self._schema))
        rows = self._fetch_all(composed, [site_id, entry_id, taxonomy])
        return [CategoryTerm.from_db_row(row) for row in rows]

    # =========================================================================
    # SITES
    # =========================================================================

    def get_site(self, blog_id: int) -> Optional[SiteDetails]:
        composed = sql.SQL("""
            SELECT blog_id, network_id, siteurl, blogname, domain, path,
                   is_main_site, custom_logo
            FROM {schema}.sites
            WHERE blog_id = %s
        """).format(schema=sql.Identifier(self._schema))
        row = self._fetch_one(composed, [blog_id])
        return SiteDetails.from_db_row(row) if row else None

    def get_main_site_id(self, network_id: int) -> Optional[int]:
        composed = sql.SQL("""
            SELECT blog_id FROM {schema}.sites
            WHERE network_id = %s AND is_main_site
            ORDER BY blog_id
            LIMIT 1
        """).format(schema=sql.Identifier(self._schema))
        row = self._fetch_one(composed, [network_id])
        return row['blog_id'] if row else None
