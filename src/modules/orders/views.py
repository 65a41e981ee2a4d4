"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain and validation exceptions propagate to
``modules.core.exceptions.api_exception_handler``; the view never
swallows exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import SortOrderingFilter
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, OrderOutputDTO, UpdateOrderStatusDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_value_regex = r"\d+"
    filter_backends = [SortOrderingFilter]
    # Public (camelCase) sort keys -> model fields.
    sort_fields = {
        "id": "id",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "totalAmount": "total_amount",
        "status": "status",
    }
    ordering_fields = list(sort_fields.values())
    ordering = ["created_at", "id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_orders()

    def _paginated(self, queryset) -> Response:
        page = self.paginate_queryset(self.filter_queryset(queryset))
        return self.get_paginated_response(
            [
                OrderOutputDTO.from_entity(o).model_dump(mode="json", by_alias=True)
                for o in page
            ]
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/orders"""
        dto = CreateOrderDTO.model_validate(request.data)
        order = self._service.create_order(dto)
        return Response(
            order.model_dump(mode="json", by_alias=True),
            status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/orders"""
        return self._paginated(self.get_queryset())

    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/orders/{pk}"""
        order = self._service.get_order(int(pk))
        return Response(order.model_dump(mode="json", by_alias=True))

    @action(detail=False, methods=["get"], url_path=r"customer/(?P<customer_id>\d+)")
    def by_customer(self, request: Request, customer_id: str) -> Response:
        """GET /api/orders/customer/{customer_id}"""
        return self._paginated(self._service.list_orders_by_customer(int(customer_id)))

    @action(detail=False, methods=["get"], url_path=r"status/(?P<status_value>[^/.]+)")
    def by_status(self, request: Request, status_value: str) -> Response:
        """GET /api/orders/status/{status}"""
        dto = UpdateOrderStatusDTO.model_validate({"status": status_value})
        return self._paginated(self._service.list_orders_by_status(dto.status))

    # ------------------------------------------------------------------
    # Status Update / Destroy
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str) -> Response:
        """PATCH /api/orders/{pk}/status?status="""
        dto = UpdateOrderStatusDTO.model_validate(
            {"status": request.query_params.get("status")}
        )
        order = self._service.update_status(int(pk), dto.status)
        return Response(order.model_dump(mode="json", by_alias=True))

    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/orders/{pk}"""
        self._service.delete_order(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
