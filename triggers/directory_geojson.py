# ============================================================================
# DIRECTORY GEOJSON HTTP TRIGGER
# ============================================================================
# STATUS: HTTP Trigger - map data as a standalone GeoJSON document
# PURPOSE: Serve the FeatureCollection the map view embeds, for external clients
# EXPORTS: DirectoryGeoJSONTrigger, directory_geojson_trigger
# INTERFACES: BaseHttpTrigger (http_base.py)
# DEPENDENCIES: config, core.attributes, services
# ENTRY_POINTS: directory_geojson_trigger.handle_request(req)
# ============================================================================
"""
Directory GeoJSON HTTP Trigger.

GET /api/directory/geojson?site_category_in=news,sports&logo_size=thumbnail

Accepts the same query filters as the shortcode and returns the
FeatureCollection as application/geo+json. Outside multisite mode the
collection is empty.

Exports:
    DirectoryGeoJSONTrigger: Trigger class
    directory_geojson_trigger: Singleton trigger instance
"""

from typing import Any, Dict, List, Optional

import azure.functions as func

from config import AppConfig, get_config
from core.attributes import DEFAULT_ATTRIBUTES, parse_shortcode_attributes
from core.models import FeatureCollection
from services import DirectoryService, build_feature_collection, get_directory_service
from .http_base import BaseHttpTrigger


class DirectoryGeoJSONTrigger(BaseHttpTrigger):
    """Map data endpoint."""

    mimetype = "application/geo+json"
    envelope = False

    def __init__(self, service: Optional[DirectoryService] = None,
                 config: Optional[AppConfig] = None):
        super().__init__("directory_geojson")
        self._service = service
        self._config = config

    @property
    def service(self) -> DirectoryService:
        if self._service is None:
            self._service = get_directory_service()
        return self._service

    @property
    def config(self) -> AppConfig:
        return self._config or get_config()

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Build the FeatureCollection.

        Raises:
            InvalidInputError: Filters cannot be parsed (400)
        """
        params = self.extract_query_params(req, optional_params=list(DEFAULT_ATTRIBUTES))
        options = parse_shortcode_attributes(params, taxonomy=self.config.directory_taxonomy,
                                             url_encoded=False)

        if not self.config.multisite_enabled:
            self.logger.debug("Multisite disabled, returning empty FeatureCollection")
            return FeatureCollection().to_geojson()

        terms = self.service.list_location_categories(options.term_query_args)
        collection = build_feature_collection(self.service, terms, options.logo_size, options.query_args)
        return collection.to_geojson()


# Singleton instance
directory_geojson_trigger = DirectoryGeoJSONTrigger()
