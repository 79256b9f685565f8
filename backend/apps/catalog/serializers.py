from rest_framework import serializers


class CategorySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField()
    slug = serializers.CharField()
    imageUrl = serializers.CharField(source="image_url", allow_blank=True)


class ProductImageSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    url = serializers.CharField()


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField()
    price = serializers.CharField()
    discount = serializers.CharField(allow_null=True)
    stock = serializers.IntegerField()
    featured = serializers.BooleanField()
    category = CategorySerializer(allow_null=True)
    images = ProductImageSerializer(many=True)
    createdAt = serializers.CharField(source="created_at", allow_null=True)


class ProductSummarySerializer(serializers.Serializer):
    """Compact product shape nested inside cart, wishlist and order lines."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    price = serializers.CharField()
    discount = serializers.CharField(allow_null=True)
    stock = serializers.IntegerField()
    images = ProductImageSerializer(many=True)


class CategoryDetailSerializer(CategorySerializer):
    products = ProductReadSerializer(many=True)
