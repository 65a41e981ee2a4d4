"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Domain and validation exceptions propagate to
``modules.core.exceptions.api_exception_handler`` which renders the
standard error body; the view never swallows exceptions.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import SortOrderingFilter
from modules.customers.dtos import CustomerInputDTO, CustomerOutputDTO
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService


class CustomerSearchQuery(BaseModel):
    """Query parameters of ``GET /api/customers/search``.

    ``name`` is required but may be empty, which matches every customer.
    """

    name: str


class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_value_regex = r"\d+"
    filter_backends = [SortOrderingFilter]
    # Public (camelCase) sort keys -> model fields.
    sort_fields = {
        "id": "id",
        "name": "name",
        "email": "email",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }
    ordering_fields = list(sort_fields.values())
    ordering = ["name", "id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def get_queryset(self):
        return self._service.list_customers()

    def _paginated(self, queryset: Iterable[Customer]) -> Response:
        page = self.paginate_queryset(self.filter_queryset(queryset))
        return self.get_paginated_response(
            [
                CustomerOutputDTO.from_entity(c).model_dump(mode="json", by_alias=True)
                for c in page
            ]
        )

    # ------------------------------------------------------------------
    # List / Retrieve / Search
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/customers"""
        return self._paginated(self.get_queryset())

    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/customers/{pk}"""
        customer = self._service.get_customer(int(pk))
        return Response(customer.model_dump(mode="json", by_alias=True))

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        """GET /api/customers/search?name="""
        query = CustomerSearchQuery.model_validate(
            {"name": request.query_params.get("name")}
        )
        return self._paginated(self._service.search_customers(query.name))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/customers"""
        dto = CustomerInputDTO.model_validate(request.data)
        customer = self._service.create_customer(dto)
        return Response(
            customer.model_dump(mode="json", by_alias=True),
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str) -> Response:
        """PUT /api/customers/{pk}"""
        dto = CustomerInputDTO.model_validate(request.data)
        customer = self._service.update_customer(int(pk), dto)
        return Response(customer.model_dump(mode="json", by_alias=True))

    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/customers/{pk}"""
        self._service.delete_customer(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
