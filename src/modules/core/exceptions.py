"""Shared domain exceptions and the DRF exception handler.

Services raise the domain exceptions below; views never catch them.
``api_exception_handler`` (wired through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``)
translates them, together with pydantic validation errors and DRF's own
``APIException`` family, into a single error body::

    {
        "timestamp": "...",
        "status": 400,
        "error": "Validation Failed",
        "message": "...",
        "path": "/api/orders",
        "fieldErrors": [{"field": "items", "message": "..."}]
    }
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for business-level failures raised by the Service Layer."""


class ResourceNotFound(DomainError):
    """A referenced entity does not exist."""

    entity: str = "Resource"

    def __init__(self, id: Any, entity: Optional[str] = None) -> None:
        if entity is not None:
            self.entity = entity
        self.id = id
        super().__init__(f"{self.entity} not found with id: {id}")


class BusinessRuleViolation(DomainError):
    """A request is well-formed but breaks a business rule."""


# ---------------------------------------------------------------------------
# Error body
# ---------------------------------------------------------------------------


def build_error_body(
    request: Any,
    status_code: int,
    error: str,
    message: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """Assemble the standard error payload."""
    return {
        "timestamp": timezone.now().isoformat(),
        "status": status_code,
        "error": error,
        "message": message,
        "path": request.path if request is not None else "",
        "fieldErrors": field_errors or [],
    }


def _pydantic_field_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "request"
        errors.append({"field": field, "message": err["msg"]})
    return errors


def _drf_field_errors(detail: Any, prefix: str = "") -> List[Dict[str, str]]:
    """Flatten a DRF ``ValidationError.detail`` into field errors."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            errors.extend(_drf_field_errors(value, name))
        return errors
    if isinstance(detail, list):
        if all(not isinstance(item, (dict, list)) for item in detail):
            return [{"field": prefix or "request", "message": str(item)} for item in detail]
        errors = []
        for idx, item in enumerate(detail):
            errors.extend(_drf_field_errors(item, f"{prefix}.{idx}" if prefix else str(idx)))
        return errors
    return [{"field": prefix or "request", "message": str(detail)}]


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Map domain/validation/framework errors to the standard error body.

    Returns ``None`` for unknown exceptions so Django reports them as 500.
    """
    request = context.get("request")
    log = logger.bind(path=request.path if request is not None else "")

    if isinstance(exc, PydanticValidationError):
        field_errors = _pydantic_field_errors(exc)
        log.warning("api.validation_failed", field_errors=field_errors)
        body = build_error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Request validation failed.",
            field_errors,
        )
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ResourceNotFound):
        log.warning("api.not_found", entity=exc.entity, id=str(exc.id))
        body = build_error_body(request, status.HTTP_404_NOT_FOUND, "Not Found", str(exc))
        return Response(body, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, BusinessRuleViolation):
        log.warning("api.business_rule_violation", detail=str(exc))
        body = build_error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Business Rule Violation",
            str(exc),
        )
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    # DRF converts Http404 / PermissionDenied into APIException subclasses.
    response = exception_handler(exc, context)
    if response is None:
        return None

    field_errors: List[Dict[str, str]] = []
    if isinstance(exc, ValidationError):
        field_errors = _drf_field_errors(exc.detail)
        message = "Request validation failed."
        error = "Validation Failed"
    elif isinstance(exc, APIException):
        message = str(exc.detail)
        error = response.status_text
    else:
        message = str(exc)
        error = response.status_text

    log.warning("api.request_failed", status_code=response.status_code, detail=message)
    response.data = build_error_body(
        request, response.status_code, error, message, field_errors
    )
    return response
