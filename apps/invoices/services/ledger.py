"""
Invoice ledger writes.

Totals and items are fixed when an order is recorded; afterwards only the
capture result changes the status. ``update_invoice`` is the admin escape
hatch that can overwrite anything.
"""
import logging
from collections import Counter
from decimal import Decimal
from typing import Any, Dict, Iterable

from django.db import transaction

from apps.products.models import Product
from apps.products.services import ProductNotFoundError
from ..models import Invoice, InvoiceItem, InvoiceStatus
from .exceptions import DuplicateInvoiceError, InvoiceNotFoundError

logger = logging.getLogger(__name__)


def build_line_items(scan_codes: Iterable[str]) -> list:
    """
    Price a cart against the catalog.

    Repeated codes stack into one line whose quantity is the number of
    occurrences, in first-scan order.

    Returns:
        List of unsaved InvoiceItem instances

    Raises:
        ProductNotFoundError: If a code is not in the catalog
    """
    counts = Counter(scan_codes)
    products = Product.objects.in_bulk(list(counts), field_name='scan_code')

    items = []
    for scan_code, quantity in counts.items():
        product = products.get(scan_code)
        if product is None:
            raise ProductNotFoundError(f"Product not found: {scan_code}")
        items.append(InvoiceItem(
            scan_code=scan_code,
            name=product.name,
            quantity=quantity,
            unit_price=product.price,
        ))
    return items


def cart_total(items) -> Decimal:
    return sum((item.line_total for item in items), Decimal('0.00'))


@transaction.atomic
def record_order(*, owner, scan_codes: list, external_order_id: str) -> Invoice:
    """
    Record a new PENDING invoice for a processor order.

    Args:
        owner: User paying for the cart
        scan_codes: Scanned codes, repeats allowed
        external_order_id: Processor order id, unique ledger key

    Returns:
        Created Invoice with its items

    Raises:
        ProductNotFoundError: If a code is not in the catalog
        DuplicateInvoiceError: If the order id is already recorded
    """
    if Invoice.objects.filter(external_order_id=external_order_id).exists():
        raise DuplicateInvoiceError()

    items = build_line_items(scan_codes)
    invoice = Invoice.objects.create(
        external_order_id=external_order_id,
        owner=owner,
        total_amount=cart_total(items),
        status=InvoiceStatus.PENDING,
    )
    for item in items:
        item.invoice = invoice
    InvoiceItem.objects.bulk_create(items)

    logger.info("Recorded invoice %s for %s (total %s)", external_order_id, owner, invoice.total_amount)
    return invoice


@transaction.atomic
def apply_capture_result(*, external_order_id: str, new_status: str) -> Invoice:
    """
    Overwrite the status of an invoice with the processor's capture status.

    Raises:
        InvoiceNotFoundError: If no invoice carries the order id
    """
    try:
        invoice = (
            Invoice.objects
            .select_for_update()
            .get(external_order_id=external_order_id)
        )
    except Invoice.DoesNotExist:
        raise InvoiceNotFoundError()

    invoice.status = new_status
    invoice.save(update_fields=['status', 'updated_at'])
    return invoice


@transaction.atomic
def update_invoice(*, external_order_id: str, data: Dict[str, Any]) -> Invoice:
    """
    Admin overwrite of status, total and/or items.

    No consistency is enforced between the total and the items; a mismatch
    is only logged.

    Raises:
        InvoiceNotFoundError: If no invoice carries the order id
    """
    try:
        invoice = Invoice.objects.select_for_update().get(external_order_id=external_order_id)
    except Invoice.DoesNotExist:
        raise InvoiceNotFoundError()

    if 'status' in data:
        invoice.status = data['status']
    if 'total_amount' in data:
        invoice.total_amount = data['total_amount']
    invoice.save()

    if 'items' in data:
        invoice.items.all().delete()
        InvoiceItem.objects.bulk_create([
            InvoiceItem(invoice=invoice, **item) for item in data['items']
        ])

    items_total = invoice.items_total()
    if items_total != invoice.total_amount:
        logger.warning(
            "Invoice %s edited with total %s but items sum to %s",
            external_order_id, invoice.total_amount, items_total
        )
    return invoice


def delete_invoice(*, external_order_id: str) -> None:
    deleted, _ = Invoice.objects.filter(external_order_id=external_order_id).delete()
    if not deleted:
        raise InvoiceNotFoundError()
    logger.info("Deleted invoice %s", external_order_id)
