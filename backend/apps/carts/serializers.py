from rest_framework import serializers

from apps.catalog.serializers import ProductSummarySerializer


class CartItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    product = ProductSummarySerializer()
    quantity = serializers.IntegerField()
    lineTotal = serializers.CharField(source="line_total")


class CartSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    items = CartItemSerializer(many=True)
    itemCount = serializers.IntegerField(source="item_count")
    subtotal = serializers.CharField()
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)


# Request bodies below are documentation only; payloads are parsed by the cart commands.
class CartItemAddSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)


class CartItemUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(help_text="0 or less removes the line")


class CartClearResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    removed = serializers.IntegerField()
