"""
Web interfaces registry module.

Central registry for web interface modules with decorator-based registration
and dynamic interface loading by name.

Exports:
    InterfaceRegistry: Registry class with decorator pattern for interface registration
    BaseInterface: Base class for all web interfaces
    unified_interface_handler: HTTP handler for /api/interface/{name} route
"""

from typing import Dict, Type, Optional, List
import azure.functions as func
import logging

from services.markup import esc_html
from .base import BaseInterface

logger = logging.getLogger(__name__)


class InterfaceRegistry:
    """
    Registry for all web interfaces.

    Example:
        @InterfaceRegistry.register('site-directory')
        class SiteDirectoryInterface(BaseInterface):
            def render(self, request):
                return self.wrap_html("Directory", "<h1>Hello</h1>")

        # Now /api/interface/site-directory works automatically.
    """

    # Class-level storage for registered interfaces
    _interfaces: Dict[str, Type[BaseInterface]] = {}

    @classmethod
    def register(cls, name: str):
        """
        Decorator to register an interface.

        Args:
            name: Interface name (used in URL: /api/interface/{name})
        """
        def decorator(interface_class: Type[BaseInterface]):
            if name in cls._interfaces:
                existing = cls._interfaces[name]
                logger.warning(
                    f"Interface '{name}' already registered "
                    f"({existing.__name__}), overwriting with {interface_class.__name__}"
                )

            cls._interfaces[name] = interface_class
            logger.info(f"Registered interface: '{name}' -> {interface_class.__name__}")

            return interface_class

        return decorator

    @classmethod
    def get(cls, name: str) -> Optional[Type[BaseInterface]]:
        """Interface class by name, or None if not found."""
        return cls._interfaces.get(name)

    @classmethod
    def list_all(cls) -> List[str]:
        return list(cls._interfaces.keys())

    @classmethod
    def get_all(cls) -> Dict[str, Type[BaseInterface]]:
        return cls._interfaces.copy()


def unified_interface_handler(req: func.HttpRequest) -> func.HttpResponse:
    """
    Unified HTTP handler for all web interfaces.

    Route: /api/interface/{name}

    Examples:
        GET /api/interface/site-directory?display=list&site_id=3
        GET /api/interface/site-directory?text=[site-directory style="height:400px"]

    Error Responses:
        400: Missing interface name
        404: Interface not found
        500: Error rendering interface
    """
    interface_name = req.route_params.get('name')

    if not interface_name:
        available = ", ".join(InterfaceRegistry.list_all())
        return func.HttpResponse(
            f"Missing interface name.\n\n"
            f"Available interfaces: {available}\n\n"
            f"Usage: /api/interface/{{name}}",
            status_code=400,
            mimetype="text/plain"
        )

    interface_class = InterfaceRegistry.get(interface_name)

    if not interface_class:
        return func.HttpResponse(
            f"Interface '{interface_name}' not found.\n\n"
            f"Available interfaces:\n" +
            "\n".join(f"  /api/interface/{name}" for name in InterfaceRegistry.list_all()),
            status_code=404,
            mimetype="text/plain"
        )

    try:
        logger.info(f"Rendering interface: {interface_name}")

        interface = interface_class()
        html = interface.render(req)

        return func.HttpResponse(
            html,
            mimetype="text/html",
            status_code=200
        )

    except ValueError as e:
        logger.warning(f"Bad request for interface '{interface_name}': {e}")
        return func.HttpResponse(
            _error_page(interface_name, "Invalid Request", str(e)),
            mimetype="text/html",
            status_code=400
        )

    except Exception as e:
        logger.error(
            f"Error rendering interface '{interface_name}': {e}",
            exc_info=True
        )
        return func.HttpResponse(
            _error_page(interface_name, "Error Rendering Interface", str(e)),
            mimetype="text/html",
            status_code=500
        )


def _error_page(interface_name: str, heading: str, message: str) -> str:
    return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>Error - {esc_html(interface_name)}</title>
            <style>
                body {{
                    font-family: sans-serif;
                    background: #fee;
                    padding: 40px;
                    text-align: center;
                }}
                .error-box {{
                    background: white;
                    border: 2px solid #c33;
                    border-radius: 8px;
                    padding: 30px;
                    max-width: 600px;
                    margin: 0 auto;
                }}
                h1 {{ color: #c33; }}
                pre {{
                    background: #f5f5f5;
                    padding: 15px;
                    border-radius: 4px;
                    text-align: left;
                    overflow-x: auto;
                }}
            </style>
        </head>
        <body>
            <div class="error-box">
                <h1>{esc_html(heading)}</h1>
                <p><strong>Interface:</strong> {esc_html(interface_name)}</p>
                <pre>{esc_html(message)}</pre>
            </div>
        </body>
        </html>
        """


# Importing interface modules runs their @InterfaceRegistry.register() decorators
from .site_directory import interface as _site_directory  # noqa: E402,F401


# Public API
__all__ = [
    'BaseInterface',
    'InterfaceRegistry',
    'unified_interface_handler'
]
