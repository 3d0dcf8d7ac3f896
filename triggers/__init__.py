"""
Triggers Package.

Azure Functions HTTP trigger implementations.

HTTP Endpoints:
    /api/health: System health check
    /api/directory/geojson: Directory map data as GeoJSON

Exports:
    Base trigger classes; trigger instances are imported from their modules
"""

# Only import base classes to avoid initialization at import time
from .http_base import BaseHttpTrigger, SystemMonitoringTrigger

__all__ = [
    'BaseHttpTrigger',
    'SystemMonitoringTrigger',
]
