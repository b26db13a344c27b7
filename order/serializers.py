# order/serializers.py
from rest_framework import serializers
from product.serializers import ProductMiniSerializer
from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product = ProductMiniSerializer(read_only=True)
    line_total = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product", "quantity", "price", "line_total"]


class BaseOrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "total_amount",
            "status",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields  # all are read-only for output only


class CheckoutOrderSerializer(BaseOrderSerializer):
    pass


class UserOrderSerializer(BaseOrderSerializer):
    pass
