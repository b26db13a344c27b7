"""
URL configuration for the storefront project.

Every API route lives under /api/v1/; the OpenAPI schema and its viewers
are served next to them.
"""
from django.contrib import admin
from django.urls import path, include
from django.utils import timezone
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    return Response({"status": "OK", "timestamp": timezone.now().isoformat()})


urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health, name="health"),
    path("api/v1/user/", include("user.urls")),
    path("api/v1/", include("product.urls")),
    path("api/v1/cart/", include("cart.urls")),
    path("api/v1/orders/", include("order.urls")),
    path("api/v1/admin/", include("admin_orders.urls")),
    path("api/v1/admin/", include("admin_user.urls")),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),#OpenAPI JSON/YAML
    path("api/v1/schema/swagger-ui/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),#interactive Swagger UI
    path("api/v1/schema/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),#clean docs via ReDoc
]
