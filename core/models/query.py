# ============================================================================
# QUERY FILTER MODELS
# ============================================================================
# STATUS: Core - typed term/entry filters understood by every repository
# PURPOSE: Parse raw query_args dicts into validated term and entry queries
# EXPORTS: MetaClause, TermQuery, TaxConstraint, EntryQuery
# DEPENDENCIES: pydantic, exceptions
# ============================================================================
"""
Query Filter Models.

Shortcode authors pass filters as free-form JSON (query_args). Repositories
only accept these typed queries; anything that does not parse raises
UpstreamQueryError, which the service layer renders as "no results".

Term filters:
    {"slug": ["news", "sports"], "hide_empty": true, "orderby": "count",
     "order": "DESC", "number": 10, "meta_query": [{"key": "geo"}]}

Entry filters:
    {"tax_query": [{"relation": "OR"},
                   {"field": "slug", "terms": ["news"], "operator": "IN"}],
     "numberposts": -1, "orderby": "title", "order": "ASC"}

Keys a filter does not understand are ignored, and so is an orderby value
that only the other filter type knows.
"""

from typing import Any, Dict, List, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.defaults import AppDefaults, ShortcodeDefaults
from exceptions import UpstreamQueryError


def _as_list(v: Any) -> Any:
    """Scalars and comma-separated strings become lists."""
    if v is None:
        return []
    if isinstance(v, str):
        return [part.strip() for part in v.split(',') if part.strip()]
    if isinstance(v, (int, float)):
        return [v]
    return v


def _upper(v: Any) -> Any:
    return v.strip().upper() if isinstance(v, str) else v


def _lower(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


def _drop_foreign_orderby(data: Dict[str, Any], own: type, other: type) -> None:
    """
    Remove an orderby value meant for the other query type.

    One query_args object feeds both the term and the entry query, so
    "count" (terms) or "title" (entries) is not an error for the other one.
    Values neither type knows are left in place to fail validation.
    """
    orderby = data.get('orderby')
    if orderby is None:
        return
    value = _lower(orderby)
    if value not in _orderby_values(own) and value in _orderby_values(other):
        data.pop('orderby')


def _orderby_values(model: type) -> tuple:
    return get_args(model.model_fields['orderby'].annotation)


# ============================================================================
# TERM QUERIES
# ============================================================================

class MetaClause(BaseModel):
    """One term meta condition."""
    model_config = ConfigDict(extra='ignore')

    key: str
    value: Optional[Any] = None
    compare: Literal["EXISTS", "NOT EXISTS", "=", "!=", "LIKE"] = "EXISTS"

    @field_validator("compare", mode="before")
    @classmethod
    def normalize_compare(cls, v: Any) -> Any:
        return _upper(v)

    def model_post_init(self, __context: Any) -> None:
        # A value without an explicit compare means equality
        if self.value is not None and 'compare' not in self.model_fields_set:
            self.compare = "="


class TermQuery(BaseModel):
    """Filter for category terms."""
    model_config = ConfigDict(extra='ignore')

    taxonomy: str = Field(default=AppDefaults.DIRECTORY_TAXONOMY)
    hide_empty: bool = False
    slug: List[str] = Field(default_factory=list)
    name: List[str] = Field(default_factory=list)
    include: List[int] = Field(default_factory=list)
    exclude: List[int] = Field(default_factory=list)
    search: Optional[str] = None
    orderby: Literal["name", "slug", "term_id", "id", "count", "none"] = "name"
    order: Literal["ASC", "DESC"] = "ASC"
    number: int = Field(default=0, ge=0)
    meta_query: List[MetaClause] = Field(default_factory=list)

    @field_validator("slug", "name", "include", "exclude", mode="before")
    @classmethod
    def listify(cls, v: Any) -> Any:
        return _as_list(v)

    @field_validator("orderby", mode="before")
    @classmethod
    def normalize_orderby(cls, v: Any) -> Any:
        return _lower(v)

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v: Any) -> Any:
        return _upper(v)

    @field_validator("number", mode="before")
    @classmethod
    def normalize_number(cls, v: Any) -> Any:
        # "" and null both mean "no limit"
        return 0 if v in (None, "") else v

    @classmethod
    def from_args(
        cls,
        args: Optional[Dict[str, Any]],
        taxonomy: str = AppDefaults.DIRECTORY_TAXONOMY,
        geo_key: Optional[str] = None
    ) -> "TermQuery":
        """
        Parse a raw filter dict.

        Args:
            args: Raw filter (query_args or query_terms)
            taxonomy: Taxonomy used when the filter does not name one
            geo_key: When set, only terms carrying this meta key match

        Raises:
            UpstreamQueryError: Filter is malformed
        """
        if args is None:
            args = {}
        if not isinstance(args, dict):
            raise UpstreamQueryError(f"Term filter must be an object, was {type(args).__name__}")
        data = {'taxonomy': taxonomy, **args}
        meta_query = data.get('meta_query') or []
        if isinstance(meta_query, dict):
            meta_query = [meta_query]
        if not isinstance(meta_query, list):
            raise UpstreamQueryError(f"meta_query must be a list, was {type(meta_query).__name__}")
        # Drop relation markers; term meta clauses always combine with AND
        meta_query = [m for m in meta_query if not (isinstance(m, dict) and set(m) == {'relation'})]
        if geo_key:
            meta_query = list(meta_query) + [{'key': geo_key}]
        data['meta_query'] = meta_query
        _drop_foreign_orderby(data, cls, EntryQuery)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise UpstreamQueryError(f"Malformed term filter: {e}") from e


# ============================================================================
# ENTRY QUERIES
# ============================================================================

class TaxConstraint(BaseModel):
    """Entries must (or must not) be filed under the given terms."""
    model_config = ConfigDict(extra='ignore')

    taxonomy: str = Field(default=AppDefaults.DIRECTORY_TAXONOMY)
    field: Literal["term_id", "slug", "name"] = "term_id"
    terms: List[Union[int, str]] = Field(default_factory=list)
    operator: Literal["IN", "NOT IN", "AND", "EXISTS", "NOT EXISTS"] = "IN"

    @field_validator("field", mode="before")
    @classmethod
    def normalize_field(cls, v: Any) -> Any:
        v = _lower(v)
        return "term_id" if v == "id" else v

    @field_validator("operator", mode="before")
    @classmethod
    def normalize_operator(cls, v: Any) -> Any:
        return _upper(v)

    @field_validator("terms", mode="before")
    @classmethod
    def listify(cls, v: Any) -> Any:
        return _as_list(v)


class EntryQuery(BaseModel):
    """Filter for directory entries."""
    model_config = ConfigDict(extra='ignore')

    tax_query: List[TaxConstraint] = Field(default_factory=list)
    tax_relation: Literal["AND", "OR"] = "AND"
    # Always ANDed with the tax_query group, whatever its relation
    required: List[TaxConstraint] = Field(default_factory=list)
    numberposts: int = Field(default=-1, ge=-1)
    offset: int = Field(default=0, ge=0)
    post_status: List[str] = Field(default_factory=lambda: ["publish"])
    blog_id: Optional[int] = None
    post__in: List[int] = Field(default_factory=list)
    post__not_in: List[int] = Field(default_factory=list)
    orderby: Literal["date", "title", "name", "id", "none"] = "date"
    order: Literal["ASC", "DESC"] = "DESC"

    @field_validator("post_status", "post__in", "post__not_in", mode="before")
    @classmethod
    def listify(cls, v: Any) -> Any:
        return _as_list(v)

    @field_validator("orderby", mode="before")
    @classmethod
    def normalize_orderby(cls, v: Any) -> Any:
        return _lower(v)

    @field_validator("order", "tax_relation", mode="before")
    @classmethod
    def normalize_upper(cls, v: Any) -> Any:
        return _upper(v)

    @property
    def any_status(self) -> bool:
        return "any" in self.post_status

    @classmethod
    def from_args(
        cls,
        args: Optional[Dict[str, Any]],
        taxonomy: str = AppDefaults.DIRECTORY_TAXONOMY,
        extra_constraints: Optional[List[Dict[str, Any]]] = None
    ) -> "EntryQuery":
        """
        Parse a raw filter dict.

        Args:
            args: Raw filter (query_args)
            taxonomy: Taxonomy used by constraints that do not name one
            extra_constraints: Constraints ANDed with whatever args selects

        Raises:
            UpstreamQueryError: Filter is malformed
        """
        if args is None:
            args = {}
        if not isinstance(args, dict):
            raise UpstreamQueryError(f"Entry filter must be an object, was {type(args).__name__}")

        data = dict(args)
        data.pop('required', None)
        _drop_foreign_orderby(data, cls, TermQuery)
        raw_tax_query = data.pop('tax_query', None) or []
        if not isinstance(raw_tax_query, list):
            raise UpstreamQueryError(
                f"tax_query must be a list, was {type(raw_tax_query).__name__}"
            )

        relation = "AND"
        constraints: List[Dict[str, Any]] = []
        for item in raw_tax_query:
            if not isinstance(item, dict):
                raise UpstreamQueryError(f"tax_query items must be objects, got {item!r}")
            if set(item) == {'relation'}:
                relation = _upper(item['relation'])
                continue
            constraints.append({'taxonomy': taxonomy, **item})

        meta_key = data.pop('meta_key', None)
        meta_value = data.pop('meta_value', None)
        if meta_key is not None:
            if meta_key != ShortcodeDefaults.BLOG_ID_META_KEY:
                raise UpstreamQueryError(f"Unsupported entry meta_key: {meta_key!r}")
            data['blog_id'] = meta_value

        if data.get('numberposts') in (None, ""):
            data.pop('numberposts', None)

        try:
            query = cls.model_validate({
                **data,
                'tax_query': constraints,
                'tax_relation': relation,
            })
            if extra_constraints:
                query.required = [
                    TaxConstraint.model_validate({'taxonomy': taxonomy, **c})
                    for c in extra_constraints
                ]
            return query
        except ValidationError as e:
            raise UpstreamQueryError(f"Malformed entry filter: {e}") from e
