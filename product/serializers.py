from rest_framework import serializers
from .models import Product


class ProductMiniSerializer(serializers.ModelSerializer):
    # minimal product shape for cart and order line items
    class Meta:
        model = Product
        fields = ("id", "name", "price", "image_url", "category")


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = (
            "id", "name", "description", "price", "stock", "in_stock",
            "image_url", "category", "created_at", "updated_at",
        )
        read_only_fields = ("created_at", "updated_at")

    # ---------------- VALIDATION ----------------

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("Price must be greater than 0")
        return value

    def validate_stock(self, value):
        if value < 0:
            raise serializers.ValidationError("Stock cannot be negative")
        return value
