"""
Site directory page interface module.

Exports:
    SiteDirectoryInterface: Page rendering [site-directory] for a member site
"""

from .interface import SiteDirectoryInterface

__all__ = ['SiteDirectoryInterface']
