from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from order.services import OrderLifecycle
from storefront.exceptions import OrderNotFound
from storefront.pagination import OrderPagination
from user.permissions import IsAdminRole
from .serializers import AdminOrderSerializer, OrderStatusSerializer


class AdminOrderList(APIView):
    permission_classes = [IsAdminRole]

    ALLOWED_ORDERING = {
        "created_at", "-created_at",
        "status", "-status",
        "total_amount", "-total_amount",
    }

    def get(self, request):
        """
        GET /api/v1/admin/orders/?page=1&limit=10&status=pending&ordering=-created_at
        """
        qs = OrderLifecycle().get_all_orders(status=request.query_params.get("status"))

        ordering = request.query_params.get("ordering")
        if ordering and ordering in self.ALLOWED_ORDERING:
            qs = qs.order_by(ordering, "-id")

        paginator = OrderPagination()
        page = paginator.paginate_queryset(qs, request)
        serializer = AdminOrderSerializer(page, many=True, context={"request": request})
        return paginator.get_paginated_response(serializer.data)


class AdminOrderDetail(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, pk):
        order = OrderLifecycle().get_all_orders().filter(pk=pk).first()
        if order is None:
            raise OrderNotFound(pk)
        serializer = AdminOrderSerializer(order, context={"request": request})
        return Response(serializer.data)


class AdminOrderStatus(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        """
        Patch only status.
        Body: { "status": "SHIPPED" }
        """
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderLifecycle().set_status(pk, serializer.validated_data["status"])
        return Response(
            {
                "message": "Order status updated successfully",
                "order": AdminOrderSerializer(order, context={"request": request}).data,
            },
            status=status.HTTP_200_OK,
        )
