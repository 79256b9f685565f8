from rest_framework import serializers

from apps.catalog.serializers import ProductSummarySerializer


class WishlistItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    product = ProductSummarySerializer()
    createdAt = serializers.CharField(source="created_at", allow_null=True)


class WishlistAddSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
