"""Services for the payment orchestrator."""

from .exceptions import EmptyCartError, PaymentProcessorError, CaptureNotRecordedError
from .gateway import PayPalClient
from .orchestrator import (
    CaptureResult,
    classify_status,
    generate_reference_id,
    initiate_order,
    capture_order,
    apply_pending_capture,
    get_order_status,
)
from .reconciliation import ReconciliationResult, reconcile_pending_captures

__all__ = [
    # Exceptions
    'EmptyCartError',
    'PaymentProcessorError',
    'CaptureNotRecordedError',
    # Gateway
    'PayPalClient',
    # Orchestration
    'CaptureResult',
    'classify_status',
    'generate_reference_id',
    'initiate_order',
    'capture_order',
    'apply_pending_capture',
    'get_order_status',
    # Reconciliation
    'ReconciliationResult',
    'reconcile_pending_captures',
]
