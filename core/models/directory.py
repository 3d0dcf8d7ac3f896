# ============================================================================
# DIRECTORY RECORD MODELS
# ============================================================================
# STATUS: Core - read-only records from the term, entry and site stores
# PURPOSE: Pydantic models for category terms, directory entries and member sites
# EXPORTS: ImageRendition, ImageAttachment, CategoryTerm, DirectoryEntry, SiteDetails
# DEPENDENCIES: pydantic
# ============================================================================
"""
Directory Record Models.

The directory tenant stores one entry per member site. Entries are grouped
by category terms; a term may carry a single "lat,lng" string under its
"geo" meta key, which makes it mappable. Member sites themselves live in the
network's site registry.

Architecture:
    Directory tenant
    ├── terms (+ term meta "geo")
    ├── entries (blog_id -> member site, featured image)
    └── term relationships (entry <-> term)

    Network
    └── sites (siteurl, blogname, custom logo)

Usage:
    from core.models import CategoryTerm

    term = CategoryTerm(term_id=3, name="Boston", slug="boston",
                        meta={"geo": "42.36,-71.06"})
    term.geo  # "42.36,-71.06"
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.defaults import AppDefaults, ShortcodeDefaults


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# IMAGES
# ============================================================================

class ImageRendition(BaseModel):
    """One resized copy of an image."""
    url: str
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class ImageAttachment(BaseModel):
    """
    An uploaded image with its intermediate renditions.

    Used for directory entry featured images and site custom logos.
    """
    model_config = ConfigDict(extra='ignore')

    url: str = Field(description="Full-size image URL")
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
    alt: str = Field(default="")
    sizes: Dict[str, ImageRendition] = Field(
        default_factory=dict,
        description="Named renditions, e.g. {'thumbnail': {...}}"
    )


# ============================================================================
# TAXONOMY
# ============================================================================

class CategoryTerm(BaseModel):
    """
    A directory category.

    Many entries may share a category; a category may be mappable (has a
    "geo" meta value) or not.
    """
    model_config = ConfigDict(extra='ignore')

    term_id: int
    name: str
    slug: str
    taxonomy: str = Field(default=AppDefaults.DIRECTORY_TAXONOMY)
    description: str = Field(default="")
    parent: int = Field(default=0)
    count: int = Field(default=0, ge=0)
    meta: Dict[str, Any] = Field(default_factory=dict)

    @property
    def geo(self) -> Any:
        """Stored geo meta value, normally a "lat,lng" string."""
        return self.meta.get(ShortcodeDefaults.GEO_META_KEY)

    @property
    def is_mappable(self) -> bool:
        geo = self.geo
        return geo is not None and geo != ""

    @classmethod
    def from_db_row(cls, row: Dict[str, Any]) -> "CategoryTerm":
        """
        Create CategoryTerm from database row.

        Args:
            row: Database row as dict (from psycopg dict_row); term meta
                 arrives aggregated as a JSON object under "meta"

        Returns:
            CategoryTerm instance
        """
        return cls(
            term_id=row.get('term_id'),
            name=row.get('name'),
            slug=row.get('slug'),
            taxonomy=row.get('taxonomy') or AppDefaults.DIRECTORY_TAXONOMY,
            description=row.get('description') or "",
            parent=row.get('parent') or 0,
            count=row.get('count') or 0,
            meta=row.get('meta') or {},
        )


# ============================================================================
# DIRECTORY ENTRIES
# ============================================================================

class DirectoryEntry(BaseModel):
    """
    One member site's listing in the directory tenant.

    Created by site administrators in the host platform; read-only here.
    """
    model_config = ConfigDict(extra='ignore')

    ID: int = Field(description="Entry id within the directory tenant")
    blog_id: int = Field(description="Member site this entry describes")
    post_name: str = Field(default="")
    post_title: str = Field(default="")
    post_excerpt: str = Field(default="")
    post_content: str = Field(default="")
    post_status: str = Field(default="publish")
    post_date: datetime = Field(default_factory=_utc_now)
    term_ids: List[int] = Field(default_factory=list)
    thumbnail: Optional[ImageAttachment] = None

    @field_validator("post_date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        # Naive timestamps are stored as UTC
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)

    @classmethod
    def from_db_row(cls, row: Dict[str, Any]) -> "DirectoryEntry":
        """Create DirectoryEntry from database row."""
        thumbnail = row.get('thumbnail')
        return cls(
            ID=row.get('post_id'),
            blog_id=row.get('blog_id'),
            post_name=row.get('post_name') or "",
            post_title=row.get('post_title') or "",
            post_excerpt=row.get('post_excerpt') or "",
            post_content=row.get('post_content') or "",
            post_status=row.get('post_status') or "publish",
            post_date=row.get('post_date') or _utc_now(),
            term_ids=row.get('term_ids') or [],
            thumbnail=ImageAttachment.model_validate(thumbnail) if thumbnail else None,
        )


# ============================================================================
# SITE REGISTRY
# ============================================================================

class SiteDetails(BaseModel):
    """A member site as known to the network's site registry."""
    model_config = ConfigDict(extra='ignore')

    blog_id: int
    siteurl: str
    blogname: str
    domain: str = Field(default="")
    path: str = Field(default="/")
    network_id: int = Field(default=1)
    is_main_site: bool = Field(default=False)
    custom_logo: Optional[ImageAttachment] = None

    @classmethod
    def from_db_row(cls, row: Dict[str, Any]) -> "SiteDetails":
        """Create SiteDetails from database row."""
        logo = row.get('custom_logo')
        return cls(
            blog_id=row.get('blog_id'),
            siteurl=row.get('siteurl'),
            blogname=row.get('blogname') or "",
            domain=row.get('domain') or "",
            path=row.get('path') or "/",
            network_id=row.get('network_id') or 1,
            is_main_site=bool(row.get('is_main_site')),
            custom_logo=ImageAttachment.model_validate(logo) if logo else None,
        )
