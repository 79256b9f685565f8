from rest_framework import serializers

from apps.catalog.serializers import ProductSummarySerializer
from apps.users.serializers import AddressSerializer


class OrderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    product = ProductSummarySerializer()
    quantity = serializers.IntegerField()
    price = serializers.CharField()
    lineTotal = serializers.CharField(source="line_total")


class OrderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    status = serializers.CharField()
    address = AddressSerializer()
    paymentMethod = serializers.CharField(source="payment_method")
    subtotal = serializers.CharField()
    tax = serializers.CharField()
    deliveryFee = serializers.CharField(source="delivery_fee")
    totalAmount = serializers.CharField(source="total_amount")
    promoCode = serializers.CharField(source="promo_code", allow_null=True)
    promoDiscount = serializers.CharField(source="promo_discount", allow_null=True)
    items = OrderItemSerializer(many=True)
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)


class OrderQuoteSerializer(serializers.Serializer):
    subtotal = serializers.CharField()
    discount = serializers.CharField()
    tax = serializers.CharField()
    deliveryFee = serializers.CharField(source="delivery_fee")
    total = serializers.CharField()
    itemCount = serializers.IntegerField(source="item_count")
    promoCode = serializers.CharField(source="promo_code", allow_null=True)


class PlaceOrderRequestSerializer(serializers.Serializer):
    addressId = serializers.IntegerField()
    paymentMethod = serializers.CharField(max_length=50)
    promoCode = serializers.CharField(required=False, allow_blank=True)


class QuoteRequestSerializer(serializers.Serializer):
    promoCode = serializers.CharField(required=False, allow_blank=True)
