from django.urls import path
from .views import (
    place_order,
    user_orders,
    order_detail,
    cancel_order,
)

urlpatterns = [
    path("", place_order, name="place_order"),
    path("my-orders/", user_orders, name="user_orders"),
    path("<int:order_id>/", order_detail, name="order_detail"),
    path("<int:order_id>/cancel/", cancel_order, name="cancel_order"),
]
