from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.services import ForbiddenError
from apps.invoices.permissions import IsInvoiceOwnerOrStaff
from apps.invoices.services import get_invoice
from apps.invoices.views import serialize_populated_invoice
from .serializers import CreateOrderSerializer, ProcessorOrderSerializer, CaptureResponseSerializer
from .services import initiate_order, capture_order, get_order_status


def _authorize_order(request, order_id):
    """Only the invoice owner or staff may act on an order."""
    invoice = get_invoice(external_order_id=order_id)
    if not IsInvoiceOwnerOrStaff().has_object_permission(request, None, invoice):
        raise ForbiddenError()


@extend_schema(
    request=CreateOrderSerializer,
    responses={200: ProcessorOrderSerializer},
    description="Price the scanned cart, create the PayPal order and record a PENDING invoice. "
                "The response carries the approval link the client must open.",
    tags=['paypal'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_paypal_order(request):
    serializer = CreateOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    order = initiate_order(user=request.user, **serializer.validated_data)
    return Response(order)


@extend_schema(
    responses={200: ProcessorOrderSerializer},
    description="Read the order straight from PayPal; no local state is touched.",
    tags=['paypal'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_status(request, order_id):
    _authorize_order(request, order_id)
    return Response(get_order_status(order_id=order_id))


@extend_schema(
    request=None,
    responses={200: CaptureResponseSerializer},
    description="Capture an approved order and return PayPal's payload with the updated invoice. "
                "Only the invoice owner, a moderator or an admin may capture.",
    tags=['paypal'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def capture_payment(request, order_id):
    _authorize_order(request, order_id)
    result = capture_order(order_id=order_id)
    return Response({
        **result.payload,
        'invoice': serialize_populated_invoice(result.invoice),
        'payment_state': result.state,
    })
