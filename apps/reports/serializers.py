from rest_framework import serializers
from .models import Report


class TopProductSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    scan_code = serializers.CharField()
    purchase_count = serializers.IntegerField()


class ReportSerializer(serializers.ModelSerializer):
    most_purchased_products = TopProductSerializer(many=True, read_only=True)

    class Meta:
        model = Report
        fields = [
            'id',
            'sales',
            'revenue',
            'average_order_price',
            'most_purchased_products',
            'created_at',
        ]
        read_only_fields = fields


class ReportHistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=20)
