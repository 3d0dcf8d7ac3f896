"""
Health Check HTTP Trigger.

System health monitoring endpoint for GET /api/health.

Components Monitored:
    - Configuration
    - Directory store (tenant resolution and a one-term query)
    - Shortcode registration

Exports:
    HealthCheckTrigger: Health check trigger class
    health_check_trigger: Singleton trigger instance
"""

from typing import Dict, Any, List
import sys

import azure.functions as func
from .http_base import SystemMonitoringTrigger
from config import __version__, debug_config, get_config
from core.models import TermQuery


class HealthCheckTrigger(SystemMonitoringTrigger):
    """Health check HTTP trigger implementation."""

    def __init__(self):
        super().__init__("health_check")

    def get_allowed_methods(self) -> List[str]:
        """Health check only supports GET."""
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Perform health check.

        Args:
            req: HTTP request (not used for health check)

        Returns:
            Health status data
        """
        health_data = {
            "status": "healthy",
            "version": __version__,
            "components": {},
            "environment": {
                "python_version": sys.version.split()[0],
                "function_runtime": "python",
            },
            "errors": []
        }

        checks = [
            ("configuration", self._check_configuration, "Environment-driven settings"),
            ("directory_store", self._check_directory_store, "Term, entry and site stores"),
            ("shortcodes", self._check_shortcodes, "Registered shortcodes and assets"),
        ]
        for name, check, description in checks:
            result = self.check_component_health(name, check, description)
            health_data["components"][name] = result
            if result["status"] == "unhealthy":
                health_data["status"] = "unhealthy"
                health_data["errors"].append(
                    result.get("error") or result.get("details", {}).get("error") or f"{name} unhealthy"
                )

        return health_data

    def _check_configuration(self) -> Dict[str, Any]:
        return debug_config()

    def _check_directory_store(self) -> Dict[str, Any]:
        from infrastructure.factory import get_directory_repository
        from services import get_directory_service

        config = get_config()
        if not config.multisite_enabled:
            return {"_status": "disabled", "message": "MULTISITE is off; the directory renders nothing"}

        service = get_directory_service()
        site_id = service.directory_site_id
        # Straight to the repository: the service hides store failures
        terms = get_directory_repository().get_terms(
            site_id, TermQuery(taxonomy=config.directory_taxonomy, number=1)
        )
        return {
            "backend": config.directory_backend,
            "directory_site_id": site_id,
            "has_categories": bool(terms),
        }

    def _check_shortcodes(self) -> Dict[str, Any]:
        from shortcodes import get_registries

        shortcodes, assets = get_registries()
        return {
            "shortcodes": shortcodes.tags(),
            "scripts": assets.handles("script"),
            "styles": assets.handles("style"),
        }


# Singleton instance
health_check_trigger = HealthCheckTrigger()
