"""Services for the invoice ledger."""

from .exceptions import InvoiceNotFoundError, DuplicateInvoiceError
from .ledger import (
    build_line_items,
    cart_total,
    record_order,
    apply_capture_result,
    update_invoice,
    delete_invoice,
)
from .queries import (
    list_invoices_for_owner,
    list_all_invoices,
    get_invoice,
    products_for_invoice,
)

__all__ = [
    # Exceptions
    'InvoiceNotFoundError',
    'DuplicateInvoiceError',
    # Ledger writes
    'build_line_items',
    'cart_total',
    'record_order',
    'apply_capture_result',
    'update_invoice',
    'delete_invoice',
    # Queries
    'list_invoices_for_owner',
    'list_all_invoices',
    'get_invoice',
    'products_for_invoice',
]
