# order/views.py
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from storefront.pagination import OrderPagination
from .serializers import CheckoutOrderSerializer, UserOrderSerializer
from .services import OrderLifecycle


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def place_order(request):
    """
    POST /api/v1/orders/  -> turn the caller's cart into a PENDING order
    """
    order = OrderLifecycle().place_order(request.user)
    return Response(
        {"message": "Order created successfully", "order": CheckoutOrderSerializer(order).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def user_orders(request):
    """
    GET /api/v1/orders/my-orders/?page=1&limit=10
    """
    orders = OrderLifecycle().get_user_orders(request.user)
    paginator = OrderPagination()
    page = paginator.paginate_queryset(orders, request)
    return paginator.get_paginated_response(UserOrderSerializer(page, many=True).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def order_detail(request, order_id):
    order = OrderLifecycle().get_order(request.user, order_id)
    return Response(UserOrderSerializer(order).data)


@api_view(["PATCH"])
@permission_classes([IsAuthenticated])
def cancel_order(request, order_id):
    """
    PATCH /api/v1/orders/<order_id>/cancel/  -> only while PENDING; restores stock
    """
    order = OrderLifecycle().cancel_order(request.user, order_id)
    return Response(
        {"message": "Order cancelled successfully", "order": {"id": order.id, "status": order.status}},
        status=status.HTTP_200_OK,
    )
