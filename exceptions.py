# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by parser, repositories, services and triggers
# PURPOSE: Exception hierarchy separating bad shortcode input from upstream failures
# EXPORTS: DirectoryError, InvalidInputError, UpstreamQueryError, NotApplicableError, ConfigurationError
# DEPENDENCIES: None (standard library only)
# PATTERNS: Exception hierarchy for error categorization
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Invalid input (the shortcode author wrote something we cannot use)
2. Upstream failures (the term/entry/site stores could not answer)
3. Not applicable (the feature was invoked outside a multisite network)

None of these should ever reach a page visitor. The dispatcher and the
service layer turn them into empty markup; only ConfigurationError is
allowed to stop the application at startup.
"""


class DirectoryError(Exception):
    """
    Base class for expected runtime failures of the directory feature.
    """
    pass


class InvalidInputError(DirectoryError, ValueError):
    """
    Shortcode attributes could not be turned into ShortcodeOptions.

    Examples:
        - query_args.tax_query is a string while site_category_in is set
        - display is neither "list" nor "map"
        - logo_size is a three-element list
    """
    pass


class UpstreamQueryError(DirectoryError):
    """
    The taxonomy/content/site stores reported a failure.

    Examples:
        - Malformed query filter (number="abc", unknown tax_query field)
        - Database connection lost
        - Fixture file unreadable
    """
    pass


class NotApplicableError(DirectoryError):
    """
    The directory was invoked outside of multi-tenant mode.
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the system from operating.

    Examples:
        - DIRECTORY_BACKEND set to an unknown value
        - DIRECTORY_SITE_ID not an integer
        - Postgres backend selected without POSTGIS_HOST
    """
    pass
