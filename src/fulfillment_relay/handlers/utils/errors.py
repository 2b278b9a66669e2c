"""
Error handling and response utilities for the relay handlers.

Every handler catches at its top level, logs the failure with structured
context, and turns it into an API Gateway proxy response through
``create_api_response``. Service errors carry the status code and the JSON
body the caller receives.
"""

import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from fulfillment_relay.handlers.utils.observability import logger, metrics, tracer


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    CONFIGURATION = "CONFIGURATION"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str,
        category: ErrorCategory = ErrorCategory.INFRASTRUCTURE,
        body: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.body = body if body is not None else {"error": message}
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "status_code": self.status_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class ValidationError(BaseServiceError):
    """Raised when an inbound request is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, body: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            category=ErrorCategory.VALIDATION,
            body=body,
        )


class ConfigurationError(BaseServiceError):
    """Raised when a required environment variable is not set."""

    def __init__(self, message: str, body: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            category=ErrorCategory.CONFIGURATION,
            body=body,
        )


class ExternalServiceError(BaseServiceError):
    """Raised when a call to Printful, Sender or Solr fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            error_code="EXTERNAL_SERVICE_ERROR",
            category=ErrorCategory.EXTERNAL_SERVICE,
        )
        self.service_name = service_name
        self.upstream_status_code = status_code


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics and a structured error line."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value.title().replace('_', '')}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", error.to_dict())

    logger.error(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_category": error.category.value,
            "error_message": error.message,
        }
    )


def create_api_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Create an API Gateway proxy response. Non-string bodies are JSON encoded."""

    default_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }

    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": body if isinstance(body, str) else json.dumps(body),
    }


def error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Log a service error and render it as its API Gateway response."""
    log_error_metrics(error)
    return create_api_response(status_code=error.status_code, body=error.body)
