"""Read-only invoice projections."""

from django.db.models import QuerySet

from apps.products.models import Product
from ..models import Invoice
from .exceptions import InvoiceNotFoundError


def list_invoices_for_owner(*, user) -> QuerySet[Invoice]:
    return Invoice.objects.filter(owner=user).prefetch_related('items')


def list_all_invoices() -> QuerySet[Invoice]:
    return Invoice.objects.select_related('owner').prefetch_related('items')


def get_invoice(*, external_order_id: str) -> Invoice:
    """
    Fetch one invoice.

    Raises:
        InvoiceNotFoundError: If no invoice carries the order id
    """
    try:
        return (
            Invoice.objects
            .select_related('owner')
            .prefetch_related('items')
            .get(external_order_id=external_order_id)
        )
    except Invoice.DoesNotExist:
        raise InvoiceNotFoundError()


def products_for_invoice(invoice: Invoice) -> dict:
    """Map each item's scan code to its catalog product, missing codes omitted."""
    scan_codes = [item.scan_code for item in invoice.items.all()]
    return Product.objects.prefetch_related('ratings__user').in_bulk(scan_codes, field_name='scan_code')
