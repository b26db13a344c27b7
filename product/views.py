import logging

from rest_framework import viewsets, permissions
from rest_framework.filters import OrderingFilter, SearchFilter
from django.db.models import ProtectedError
from django_filters.rest_framework import DjangoFilterBackend

from storefront.exceptions import ProductInUse
from storefront.pagination import ProductPagination
from user.permissions import IsAdminRole
from .models import Product
from .serializers import ProductSerializer

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Public catalog reads; create, update and delete are admin only.

    GET /api/v1/products/?page=1&limit=10&category=phones&search=pro&ordering=-price
    """
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = ProductPagination
    filter_backends = [DjangoFilterBackend, OrderingFilter, SearchFilter]

    filterset_fields = {
        "category": ["exact"],
    }
    ordering_fields = ["created_at", "price", "name", "stock"]
    search_fields = ["name", "description"]

    def get_authenticators(self):
        # anonymous catalog browsing must not fail on a stale cookie
        if self.request is not None and self.request.method in permissions.SAFE_METHODS:
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [IsAdminRole()]

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info("Product %s created by user %s", product.pk, self.request.user.pk)

    def perform_update(self, serializer):
        product = serializer.save()
        logger.info("Product %s updated by user %s", product.pk, self.request.user.pk)

    def perform_destroy(self, instance):
        product_id = instance.pk
        try:
            instance.delete()
        except ProtectedError:
            logger.warning("Product %s delete refused: referenced by orders", product_id)
            raise ProductInUse(product_id)
        logger.info("Product %s deleted by user %s", product_id, self.request.user.pk)
