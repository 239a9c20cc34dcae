from rest_framework import serializers

from apps.products.serializers import ProductSerializer
from .models import Invoice, InvoiceItem


class InvoiceItemSerializer(serializers.ModelSerializer):
    """Invoice line with an optional populated product."""

    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    product = serializers.SerializerMethodField()

    class Meta:
        model = InvoiceItem
        fields = ['scan_code', 'name', 'quantity', 'unit_price', 'line_total', 'product']
        read_only_fields = fields

    def get_product(self, item):
        """Populated only when the view passes ``products`` in the context."""
        product = self.context.get('products', {}).get(item.scan_code)
        if product is None:
            return None
        return ProductSerializer(product).data


class InvoiceSerializer(serializers.ModelSerializer):
    items = InvoiceItemSerializer(many=True, read_only=True)
    owner_username = serializers.CharField(source='owner.username', read_only=True, default=None)

    class Meta:
        model = Invoice
        fields = [
            'id',
            'external_order_id',
            'owner',
            'owner_username',
            'total_amount',
            'status',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class InvoiceCreateSerializer(serializers.Serializer):
    external_order_id = serializers.CharField(max_length=64)
    scan_codes = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False
    )


class InvoiceItemInputSerializer(serializers.Serializer):
    scan_code = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)


class InvoiceUpdateSerializer(serializers.Serializer):
    """Admin overwrite; total and items are not cross-checked."""

    status = serializers.CharField(max_length=32, required=False)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    items = InvoiceItemInputSerializer(many=True, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Request body is empty')
        return attrs
