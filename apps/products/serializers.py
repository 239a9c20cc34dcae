from rest_framework import serializers
from .models import Product, Rating


class RatingSerializer(serializers.ModelSerializer):
    """A single rating as shown on a product."""

    username = serializers.CharField(source='user.username', read_only=True)

    class Meta:
        model = Rating
        fields = ['user', 'username', 'score', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Full product with its ratings."""

    ratings = RatingSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'scan_code',
            'name',
            'description',
            'category',
            'ingredients',
            'image_url',
            'stock',
            'price',
            'average_rating',
            'ratings',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PurchasedProductSerializer(ProductSerializer):
    """Product annotated with the caller's own rating (0 if unrated)."""

    rating = serializers.FloatField(source='user_rating', read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ['rating']
        read_only_fields = fields


class ProductCreateSerializer(serializers.Serializer):
    """Admin product creation; price is generated from the category when omitted."""

    scan_code = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    category = serializers.CharField(required=False, allow_blank=True, default='')
    ingredients = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    stock = serializers.IntegerField(min_value=0, required=False, default=0)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        default=None
    )


class ProductUpdateSerializer(serializers.Serializer):
    """Partial overwrite of a product's editable fields."""

    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    ingredients = serializers.ListField(child=serializers.CharField(), required=False)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    stock = serializers.IntegerField(min_value=0, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)


RATING_ERRORS = {
    'invalid': 'Invalid rating value',
    'required': 'Invalid rating value',
    'null': 'Invalid rating value',
    'min_value': 'Invalid rating value',
    'max_value': 'Invalid rating value',
    'max_string_length': 'Invalid rating value',
}


class RatingInputSerializer(serializers.Serializer):
    score = serializers.FloatField(min_value=0, max_value=5, error_messages=RATING_ERRORS)
    comment = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_score(self, value):
        # FloatField coerces JSON true/false to 1.0/0.0
        if isinstance(self.initial_data.get('score'), bool):
            raise serializers.ValidationError(RATING_ERRORS['invalid'])
        return value


class ProductListQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=25)
    offset = serializers.IntegerField(min_value=0, required=False, default=0)
