from datetime import timedelta

from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.models import CartItem
from order.models import Order
from storefront.pagination import UserPagination
from user.auth import authorize
from user.models import User
from user.permissions import IsAdminRole
from .serializers import AdminUserSerializer, RecentOrderSerializer, TopCustomerSerializer


def _users_with_counts():
    return User.objects.annotate(order_count=Count("orders", distinct=True))


def _check_admin_or_self(request, pk):
    if request.user.pk != pk and not authorize(request.user.role, [User.Role.ADMIN]):
        raise PermissionDenied("Access denied. You can only view your own profile.")


class UserListAPIView(APIView):
    """
    GET: list users with pagination, search and ordering.
    Query params:
      - page, limit
      - role (CUSTOMER or ADMIN, case-insensitive)
      - search (searches name, email)
      - ordering (e.g. 'name' or '-created_at')
    """
    permission_classes = [IsAdminRole]

    ALLOWED_ORDERING = {"created_at", "-created_at", "name", "-name", "email", "-email"}

    def get(self, request, format=None):
        qs = _users_with_counts()

        role = request.query_params.get("role")
        if role:
            qs = qs.filter(role=role.upper())

        search_q = request.query_params.get("search")
        if search_q:
            qs = qs.filter(Q(name__icontains=search_q) | Q(email__icontains=search_q))

        ordering = request.query_params.get("ordering")
        if ordering not in self.ALLOWED_ORDERING:
            ordering = "-created_at"
        qs = qs.order_by(ordering, "-id")

        paginator = UserPagination()
        page = paginator.paginate_queryset(qs, request)
        serializer = AdminUserSerializer(page, many=True, context={"request": request})
        return paginator.get_paginated_response(serializer.data)


class UserStatsAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, format=None):
        week_ago = timezone.now() - timedelta(days=7)
        top_customers = (
            _users_with_counts()
            .filter(order_count__gt=0)
            .order_by("-order_count", "id")[:5]
        )
        return Response({
            "total_users": User.objects.count(),
            "total_customers": User.objects.filter(role=User.Role.CUSTOMER).count(),
            "total_admins": User.objects.filter(role=User.Role.ADMIN).count(),
            "recent_users": User.objects.filter(created_at__gte=week_ago).count(),
            "top_customers": TopCustomerSerializer(top_customers, many=True).data,
        })


class UserDetailAPIView(APIView):
    """
    GET: a single user; admins may view anyone, customers only themselves.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk, format=None):
        _check_admin_or_self(request, pk)
        user = get_object_or_404(_users_with_counts(), pk=pk)
        return Response({"user": AdminUserSerializer(user, context={"request": request}).data})


class UserDetailsAPIView(APIView):
    """
    GET: user, five most recent orders and current cart size.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk, format=None):
        _check_admin_or_self(request, pk)
        user = get_object_or_404(_users_with_counts(), pk=pk)

        recent_orders = (
            Order.objects.filter(user=user)
            .annotate(item_count=Count("items"))
            .order_by("-created_at", "-id")[:5]
        )
        cart_items = CartItem.objects.filter(cart__user=user).count()

        return Response({
            "user": AdminUserSerializer(user, context={"request": request}).data,
            "statistics": {
                "total_orders": user.order_count,
                "cart_items": cart_items,
            },
            "recent_orders": RecentOrderSerializer(recent_orders, many=True).data,
        })
