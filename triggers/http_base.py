"""
HTTP Trigger Base Class.

Abstract base class for the directory's Azure Functions HTTP triggers
providing consistent request/response handling.

Specialized Trigger Types:
    BaseHttpTrigger: Generic JSON endpoint
    SystemMonitoringTrigger: Health and diagnostics

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    SystemMonitoringTrigger: Base class for monitoring
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
import uuid
import json
import traceback
from datetime import datetime, timezone

import azure.functions as func
from util_logger import LoggerFactory
from util_logger import ComponentType


class BaseHttpTrigger(ABC):
    """
    Abstract base class for Azure Functions HTTP triggers.

    Subclasses implement process_request() and raise:
        ValueError: Client errors (400), includes InvalidInputError
        FileNotFoundError: Not found (404)
        Exception: Internal server errors (500)
    """

    # Response content type; envelope=False returns process_request() data as-is
    mimetype = "application/json"
    envelope = True

    def __init__(self, trigger_name: str):
        """
        Initialize HTTP trigger with name for logging context.

        Args:
            trigger_name: Name of the trigger for logging (e.g., "directory_geojson")
        """
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"HttpTrigger.{trigger_name}")

    # ========================================================================
    # ABSTRACT METHODS - Must be implemented by concrete triggers
    # ========================================================================

    @abstractmethod
    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Process the HTTP request and return response data.

        Args:
            req: Azure Functions HTTP request object

        Returns:
            Dictionary to be serialized as JSON response
        """
        pass

    @abstractmethod
    def get_allowed_methods(self) -> List[str]:
        """
        Return list of allowed HTTP methods for this trigger.
        """
        pass

    # ========================================================================
    # CONCRETE INFRASTRUCTURE METHODS
    # ========================================================================

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Main entry point for HTTP request handling.

        Args:
            req: Azure Functions HTTP request object

        Returns:
            Azure Functions HTTP response with JSON content
        """
        request_id = self._generate_request_id()

        self.logger.info(
            f"[{self.trigger_name}] Request {request_id} started: {req.method} {req.url}"
        )

        try:
            if req.method not in self.get_allowed_methods():
                return self._create_error_response(
                    error="Method not allowed",
                    message=f"Method {req.method} not allowed. Allowed: {', '.join(self.get_allowed_methods())}",
                    status_code=405,
                    request_id=request_id
                )

            response_data = self.process_request(req)
            response = self._create_success_response(response_data, request_id)

            self.logger.info(f"[{self.trigger_name}] Request {request_id} completed successfully")
            return response

        except ValueError as e:
            self.logger.warning(f"[{self.trigger_name}] Client error: {e}")
            return self._create_error_response(
                error="Bad request",
                message=str(e),
                status_code=400,
                request_id=request_id
            )

        except FileNotFoundError as e:
            self.logger.info(f"[{self.trigger_name}] Not found: {e}")
            return self._create_error_response(
                error="Not found",
                message=str(e),
                status_code=404,
                request_id=request_id
            )

        except Exception as e:
            self.logger.error(f"[{self.trigger_name}] Internal error: {e}")
            self.logger.debug(f"Full traceback: {traceback.format_exc()}")
            return self._create_error_response(
                error="Internal server error",
                message=str(e),
                status_code=500,
                request_id=request_id,
                include_debug_info=True
            )

    # ========================================================================
    # UTILITY METHODS FOR SUBCLASSES
    # ========================================================================

    def extract_query_params(self, req: func.HttpRequest,
                             required_params: Optional[List[str]] = None,
                             optional_params: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Extract and validate query parameters.

        Args:
            req: HTTP request object
            required_params: List of required parameter names
            optional_params: List of optional parameter names

        Returns:
            Dictionary of parameter name -> value

        Raises:
            ValueError: If required parameters are missing
        """
        params = {}
        missing_params = []

        for param_name in required_params or []:
            value = req.params.get(param_name)
            if not value:
                missing_params.append(param_name)
            else:
                params[param_name] = value

        for param_name in optional_params or []:
            value = req.params.get(param_name)
            if value:
                params[param_name] = value

        if missing_params:
            raise ValueError(f"Missing required query parameters: {', '.join(missing_params)}")

        return params

    # ========================================================================
    # PRIVATE INFRASTRUCTURE METHODS
    # ========================================================================

    def _generate_request_id(self) -> str:
        """Generate unique request ID for tracing."""
        return str(uuid.uuid4())[:8]

    def _create_success_response(self, data: Dict[str, Any], request_id: str) -> func.HttpResponse:
        """Create standardized success response."""
        if self.envelope:
            data = {
                **data,
                "request_id": request_id,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        return func.HttpResponse(
            json.dumps(data, default=str),
            status_code=200,
            mimetype=self.mimetype,
            headers={"X-Request-ID": request_id}
        )

    def _create_error_response(self, error: str, message: str, status_code: int,
                               request_id: str, include_debug_info: bool = False) -> func.HttpResponse:
        """Create standardized error response."""
        response_data = {
            "error": error,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        if include_debug_info:
            response_data["debug"] = {
                "trigger_name": self.trigger_name,
                "python_version": __import__("sys").version.split()[0]
            }

        return func.HttpResponse(
            json.dumps(response_data),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


# ============================================================================
# SPECIALIZED BASE CLASSES FOR COMMON PATTERNS
# ============================================================================

class SystemMonitoringTrigger(BaseHttpTrigger):
    """Base class for system monitoring triggers (health, etc.)"""

    def get_system_timestamp(self) -> str:
        """Get standardized system timestamp."""
        return datetime.now(timezone.utc).isoformat()

    def check_component_health(
        self,
        component_name: str,
        check_function,
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Standard pattern for checking component health.

        Status determination (in priority order):
        1. If check_function raises exception -> "unhealthy"
        2. If result contains "_status" key -> use that value
        3. If result contains "error" key with truthy value -> "unhealthy"
        4. Otherwise -> "healthy"

        Returns:
            Health check result dictionary with component, description, status, details
        """
        try:
            result = check_function()

            if isinstance(result, dict):
                if "_status" in result:
                    status = result.pop("_status")
                elif result.get("error"):
                    status = "unhealthy"
                else:
                    status = "healthy"
            else:
                status = "healthy"

            return {
                "component": component_name,
                "description": description or f"{component_name} health check",
                "status": status,
                "details": result,
                "checked_at": self.get_system_timestamp()
            }
        except Exception as e:
            return {
                "component": component_name,
                "description": description or f"{component_name} health check",
                "status": "unhealthy",
                "error": str(e),
                "checked_at": self.get_system_timestamp()
            }
