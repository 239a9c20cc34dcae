from rest_framework import serializers

from apps.invoices.serializers import InvoiceSerializer
from .models import PaymentState


class CreateOrderSerializer(serializers.Serializer):
    scan_codes = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
        error_messages={
            'empty': 'The "scan_codes" parameter is required.',
            'required': 'The "scan_codes" parameter is required.',
        }
    )


class ProcessorLinkSerializer(serializers.Serializer):
    href = serializers.CharField()
    rel = serializers.CharField()
    method = serializers.CharField(required=False)


class ProcessorOrderSerializer(serializers.Serializer):
    """Documentation shape of the processor's order descriptor, returned as is."""
    id = serializers.CharField()
    status = serializers.CharField()
    links = ProcessorLinkSerializer(many=True, required=False)


class CaptureResponseSerializer(ProcessorOrderSerializer):
    invoice = InvoiceSerializer()
    payment_state = serializers.ChoiceField(choices=PaymentState.choices)


