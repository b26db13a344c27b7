from rest_framework import serializers
from user.models import User


class AdminUserSerializer(serializers.ModelSerializer):
    order_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "name",
            "email",
            "phone_number",
            "role",
            "is_active",
            "created_at",
            "updated_at",
            "order_count",
        )
        read_only_fields = fields


class RecentOrderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    status = serializers.CharField()
    total_amount = serializers.IntegerField()
    item_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()


class TopCustomerSerializer(serializers.ModelSerializer):
    order_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = ("id", "name", "email", "order_count")
