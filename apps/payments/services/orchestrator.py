"""
Payment orchestration: cart -> processor order -> ledger -> capture.

State per purchase attempt (``PaymentState``)::

    INITIATED -> AUTHORIZED -> CAPTURED | DENIED | ABANDONED

A capture confirmed by the processor is first stored as a PendingCapture and
only then applied to the ledger, so a failed ledger write is retried by
``reconcile_pending_captures`` instead of being lost.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.invoices.models import Invoice
from apps.invoices.services import (
    InvoiceNotFoundError,
    apply_capture_result,
    build_line_items,
    cart_total,
    record_order,
)
from apps.products.services import get_or_refresh_product
from ..models import PaymentState, PendingCapture
from .exceptions import CaptureNotRecordedError, EmptyCartError
from .gateway import PayPalClient

logger = logging.getLogger(__name__)

PROCESSOR_STATES = {
    'COMPLETED': PaymentState.CAPTURED,
    'DECLINED': PaymentState.DENIED,
    'DENIED': PaymentState.DENIED,
    'FAILED': PaymentState.DENIED,
    'VOIDED': PaymentState.ABANDONED,
    'CREATED': PaymentState.AUTHORIZED,
    'SAVED': PaymentState.AUTHORIZED,
    'APPROVED': PaymentState.AUTHORIZED,
    'PAYER_ACTION_REQUIRED': PaymentState.AUTHORIZED,
    'PENDING': PaymentState.AUTHORIZED,
}


def classify_status(status: Optional[str]) -> str:
    """Map a processor (or ledger) status onto the purchase state machine."""
    if not status:
        return PaymentState.INITIATED
    return PROCESSOR_STATES.get(status.upper(), PaymentState.AUTHORIZED)


def generate_reference_id(user, now=None) -> str:
    """``{userId}-{epochMillis}``, tracked on the processor side."""
    now = now or timezone.now()
    return f"{user.id}-{int(now.timestamp() * 1000)}"


@dataclass
class CaptureResult:
    payload: Dict[str, Any]
    invoice: Invoice
    state: str


def initiate_order(*, user, scan_codes: list, client=None, catalog_client=None) -> Dict[str, Any]:
    """
    Start a purchase for a scanned cart.

    Args:
        user: Buyer
        scan_codes: Scanned codes, repeats allowed
        client: PayPal client, built from settings when None
        catalog_client: Catalog source client for resolving unknown codes

    Returns:
        The processor order descriptor, including the approval link

    Raises:
        EmptyCartError: If scan_codes is empty
        ProductNotFoundError: If a code cannot be resolved
        PaymentProcessorError: If the processor call fails
    """
    if not scan_codes:
        raise EmptyCartError()

    for scan_code in dict.fromkeys(scan_codes):
        get_or_refresh_product(scan_code=scan_code, client=catalog_client)

    total = cart_total(build_line_items(scan_codes))

    client = client or PayPalClient.from_settings()
    access_token = client.get_access_token()
    order = client.create_order(
        access_token,
        total=total,
        reference_id=generate_reference_id(user),
    )
    logger.info("Created processor order %s for user %s (total %s)", order['id'], user.id, total)

    record_order(owner=user, scan_codes=scan_codes, external_order_id=order['id'])
    return order


def apply_pending_capture(capture: PendingCapture) -> Invoice:
    """
    Write a confirmed capture's status to the ledger.

    Raises:
        CaptureNotRecordedError: If the ledger write fails; the capture stays
            pending with the error recorded
    """
    try:
        with transaction.atomic():
            invoice = apply_capture_result(
                external_order_id=capture.order_id,
                new_status=capture.status,
            )
            capture.mark_applied()
    except (InvoiceNotFoundError, DatabaseError) as e:
        logger.error("Capture %s confirmed but ledger write failed: %s", capture.order_id, e)
        capture.refresh_from_db()
        capture.mark_failed(e)
        raise CaptureNotRecordedError()
    return invoice


def capture_order(*, order_id: str, client=None) -> CaptureResult:
    """
    Capture an approved order and record the result.

    Raises:
        PaymentProcessorError: If the processor call fails
        CaptureNotRecordedError: If the processor captured but the ledger
            write failed
    """
    client = client or PayPalClient.from_settings()
    access_token = client.get_access_token()
    payload = client.capture_order(access_token, order_id)
    status = payload['status']
    logger.info("Processor capture for %s returned %s", order_id, status)

    with transaction.atomic():
        capture, _ = PendingCapture.objects.update_or_create(
            order_id=order_id,
            defaults={'status': status, 'payload': payload, 'applied_at': None},
        )

    invoice = apply_pending_capture(capture)
    return CaptureResult(payload=payload, invoice=invoice, state=classify_status(status))


def get_order_status(*, order_id: str, client=None) -> Dict[str, Any]:
    """Read-only passthrough to the processor."""
    client = client or PayPalClient.from_settings()
    access_token = client.get_access_token()
    return client.get_order(access_token, order_id)
