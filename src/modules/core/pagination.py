"""Page-number pagination and sorting for the list endpoints.

List endpoints accept ``page`` (0-based), ``size`` and ``sort``
(``field`` or ``field,asc|desc``) query parameters.  ``size`` above
``MAX_PAGE_SIZE`` is clamped rather than rejected; a page past the end
yields empty ``content``.  Sort fields are public camelCase names resolved
through the view's ``sort_fields`` mapping.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.paginator import EmptyPage
from django.db import models
from rest_framework.exceptions import ValidationError
from rest_framework.filters import OrderingFilter
from rest_framework.pagination import PageNumberPagination
from rest_framework.request import Request
from rest_framework.response import Response

SORT_DIRECTIONS = ("asc", "desc")


def _bounded_int(raw: str, name: str, minimum: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: ["A valid integer is required."]}) from None
    if value < minimum:
        raise ValidationError(
            {name: [f"Ensure this value is greater than or equal to {minimum}."]}
        )
    return value


class StandardResultsSetPagination(PageNumberPagination):
    """0-based page numbers with a Spring-style page body."""

    page_query_param = "page"
    page_size_query_param = "size"
    max_page_size = settings.MAX_PAGE_SIZE

    def get_page_index(self, request: Request) -> int:
        raw = request.query_params.get(self.page_query_param)
        if raw in (None, ""):
            return 0
        return _bounded_int(raw, self.page_query_param, 0)

    def get_page_number(self, request: Request, paginator: Any) -> int:
        return self.get_page_index(request) + 1

    def get_page_size(self, request: Request) -> int:
        raw = request.query_params.get(self.page_size_query_param)
        if raw in (None, ""):
            return self.page_size
        return min(
            _bounded_int(raw, self.page_size_query_param, 1),
            self.max_page_size,
        )

    def paginate_queryset(
        self, queryset: models.QuerySet, request: Request, view: Any = None
    ) -> List[Any]:
        self.request = request
        self.page_size = self.get_page_size(request)
        self.page_index = self.get_page_index(request)
        self.paginator = self.django_paginator_class(queryset, self.page_size)
        try:
            self.page = self.paginator.page(self.page_index + 1)
        except EmptyPage:
            self.page = None
            return []
        return list(self.page)

    def get_total_pages(self) -> int:
        return self.paginator.num_pages if self.paginator.count else 0

    def get_paginated_response(self, data: List[Any]) -> Response:
        total_pages = self.get_total_pages()
        return Response(
            {
                "content": data,
                "page": self.page_index,
                "size": self.page_size,
                "totalElements": self.paginator.count,
                "totalPages": total_pages,
                "first": self.page_index == 0,
                "last": self.page_index >= total_pages - 1,
            }
        )

    def get_paginated_response_schema(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "type": "object",
            "required": ["content", "page", "size", "totalElements", "totalPages"],
            "properties": {
                "content": schema,
                "page": {"type": "integer", "example": 0},
                "size": {"type": "integer", "example": 20},
                "totalElements": {"type": "integer", "example": 42},
                "totalPages": {"type": "integer", "example": 3},
                "first": {"type": "boolean"},
                "last": {"type": "boolean"},
            },
        }


class SortOrderingFilter(OrderingFilter):
    """``OrderingFilter`` reading ``sort=field[,asc|desc]`` with camelCase names.

    The view declares ``sort_fields`` (public name -> model field),
    ``ordering_fields`` (the model fields) and a default ``ordering``.
    ``id`` is appended as a tie-breaker so pages are stable.
    """

    ordering_param = "sort"

    def get_ordering(
        self, request: Request, queryset: models.QuerySet, view: Any
    ) -> Optional[List[str]]:
        raw = request.query_params.get(self.ordering_param, "").strip()
        if not raw:
            return self.get_default_ordering(view)

        parts = [p.strip() for p in raw.split(",")]
        if len(parts) > 2 or not parts[0]:
            raise ValidationError(
                {self.ordering_param: ["Sort must be 'field' or 'field,asc|desc'."]}
            )
        direction = parts[1].lower() if len(parts) == 2 else "asc"
        if direction not in SORT_DIRECTIONS:
            raise ValidationError(
                {self.ordering_param: ["Sort direction must be 'asc' or 'desc'."]}
            )

        sort_fields = getattr(view, "sort_fields", {})
        column = sort_fields.get(parts[0])
        prefix = "-" if direction == "desc" else ""
        terms = self.remove_invalid_fields(
            queryset, [f"{prefix}{column}"] if column else [], view, request
        )
        if not terms:
            allowed = ", ".join(sorted(sort_fields))
            raise ValidationError(
                {self.ordering_param: [f"Cannot sort by '{parts[0]}'. Allowed: {allowed}."]}
            )
        if column != "id":
            terms.append(f"{prefix}id")
        return terms
