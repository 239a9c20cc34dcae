from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdmin, IsAdminOrModerator
from .permissions import IsInvoiceOwnerOrStaff
from .serializers import InvoiceSerializer, InvoiceCreateSerializer, InvoiceUpdateSerializer
from .services import (
    record_order,
    update_invoice,
    delete_invoice,
    list_invoices_for_owner,
    list_all_invoices,
    get_invoice,
    products_for_invoice,
)


def serialize_populated_invoice(invoice):
    """Invoice with each item's catalog product attached."""
    return InvoiceSerializer(invoice, context={'products': products_for_invoice(invoice)}).data


class InvoiceListView(APIView):
    """
    GET: the caller's own invoices.
    POST: back-office manual entry of an order (admin or moderator).
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsAdminOrModerator()]
        return [IsAuthenticated()]

    @extend_schema(responses={200: InvoiceSerializer(many=True)}, tags=['invoices'])
    def get(self, request):
        invoices = list_invoices_for_owner(user=request.user)
        return Response(InvoiceSerializer(invoices, many=True).data)

    @extend_schema(request=InvoiceCreateSerializer, responses={201: InvoiceSerializer}, tags=['invoices'])
    def post(self, request):
        serializer = InvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invoice = record_order(owner=request.user, **serializer.validated_data)
        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)


class InvoiceDetailView(APIView):
    """
    GET: one invoice with populated products (owner, admin or moderator).
    PUT: admin overwrite.
    DELETE: admin delete.
    """

    def get_permissions(self):
        if self.request.method in ('PUT', 'DELETE'):
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated(), IsInvoiceOwnerOrStaff()]

    @extend_schema(responses={200: InvoiceSerializer}, tags=['invoices'])
    def get(self, request, order_id):
        invoice = get_invoice(external_order_id=order_id)
        self.check_object_permissions(request, invoice)
        return Response(serialize_populated_invoice(invoice))

    @extend_schema(request=InvoiceUpdateSerializer, responses={200: InvoiceSerializer}, tags=['invoices'])
    def put(self, request, order_id):
        serializer = InvoiceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invoice = update_invoice(external_order_id=order_id, data=serializer.validated_data)
        return Response(InvoiceSerializer(get_invoice(external_order_id=invoice.external_order_id)).data)

    @extend_schema(tags=['invoices'])
    def delete(self, request, order_id):
        delete_invoice(external_order_id=order_id)
        return Response({'message': 'Invoice deleted successfully'})


@extend_schema(
    responses={200: InvoiceSerializer(many=True)},
    description="Every invoice in the ledger.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def all_invoices(request):
    return Response(InvoiceSerializer(list_all_invoices(), many=True).data)
