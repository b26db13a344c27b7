from django.urls import path
from .views import CartAPIView, AddToCartAPIView, CartItemDetailAPIView, ClearCartAPIView

urlpatterns = [
    path("", CartAPIView.as_view(), name="cart"),
    path("add/", AddToCartAPIView.as_view(), name="cart-add"),
    path("item/<int:pk>/", CartItemDetailAPIView.as_view(), name="cart-item-detail"),
    path("clear/", ClearCartAPIView.as_view(), name="cart-clear"),
]
