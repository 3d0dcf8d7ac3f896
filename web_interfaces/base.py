"""
Web interfaces base module.

Abstract base class and common utilities for the directory's web pages.

Exports:
    BaseInterface: Abstract base class with common HTML utilities

Dependencies:
    azure.functions: HTTP request handling
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import azure.functions as func

from config import __version__
from services.markup import esc_html


class BaseInterface(ABC):
    """
    Abstract base class for all web interfaces.

    Provides:
        - HTML document structure (wrap_html)
        - Query parameter helpers
        - Header and empty-state components

    Each interface must implement:
        - render(request) -> str
    """

    # Common CSS used by all interfaces
    COMMON_CSS = """
        :root {
            --ds-blue-primary: #0071BC;
            --ds-navy: #053657;
            --ds-gray: #626F86;
            --ds-gray-light: #e9ecef;
            --ds-bg: #f8f9fa;
        }

        body {
            font-family: "Open Sans", Arial, sans-serif;
            background: var(--ds-bg);
            margin: 0;
            padding: 20px;
            color: var(--ds-navy);
            font-size: 14px;
            line-height: 1.6;
        }

        .container {
            max-width: 1200px;
            margin: 0 auto;
        }

        .dashboard-header {
            background: white;
            padding: 25px 30px;
            border-radius: 3px;
            box-shadow: 0 1px 3px rgba(0,0,0,0.1);
            margin-bottom: 20px;
            border-left: 4px solid var(--ds-blue-primary);
        }

        .dashboard-header h1 {
            font-size: 24px;
            margin: 0 0 8px;
        }

        .subtitle {
            color: var(--ds-gray);
            margin: 0;
        }

        .page-content {
            background: white;
            padding: 25px 30px;
            border-radius: 3px;
            box-shadow: 0 1px 3px rgba(0,0,0,0.1);
        }

        .empty-state {
            text-align: center;
            color: var(--ds-gray);
            padding: 40px 20px;
        }

        .site-footer {
            margin-top: 20px;
            color: var(--ds-gray);
            font-size: 12px;
            text-align: center;
        }
    """

    @abstractmethod
    def render(self, request: func.HttpRequest) -> str:
        """
        Generate HTML for this interface.

        Args:
            request: Azure Functions HttpRequest object

        Returns:
            Complete HTML string (full document)
        """
        pass

    def get_query_params(self, request: func.HttpRequest) -> Dict[str, Any]:
        """
        Extract query parameters from request.

        Example:
            # Request: /api/interface/site-directory?display=list&site_id=3
            params = self.get_query_params(request)
            # params = {'display': 'list', 'site_id': '3'}
        """
        return {key: request.params.get(key) for key in request.params}

    def wrap_html(
        self,
        title: str,
        content: str,
        custom_css: str = "",
        head_html: str = "",
        footer_html: str = ""
    ) -> str:
        """
        Wrap content in complete HTML document.

        Args:
            title: Page title (escaped)
            content: HTML content for page body
            custom_css: Additional CSS specific to this interface
            head_html: Stylesheet links and head scripts of the page's assets
            footer_html: Footer scripts, printed after the content

        Returns:
            Complete HTML document string
        """
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{esc_html(title)}</title>
    {head_html}
    <style>
        {self.COMMON_CSS}
        {custom_css}
    </style>
</head>
<body>
    <div class="container">
        {content}
        <footer class="site-footer">Multisite Directory v{__version__}</footer>
    </div>
    {footer_html}
</body>
</html>"""

    def render_header(self, title: str, subtitle: str = "") -> str:
        """Dashboard header with title and optional subtitle (both escaped)."""
        subtitle_html = f'<p class="subtitle">{esc_html(subtitle)}</p>' if subtitle else ""
        return f"""
        <header class="dashboard-header">
            <h1>{esc_html(title)}</h1>
            {subtitle_html}
        </header>
        """

    def render_empty_state(self, title: str = "Nothing to show",
                           message: str = "") -> str:
        return f"""
        <div class="empty-state">
            <h3>{esc_html(title)}</h3>
            <p>{esc_html(message)}</p>
        </div>
        """
