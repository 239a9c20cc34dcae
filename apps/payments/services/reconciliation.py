"""Retry ledger writes for captures the processor already confirmed."""

import logging
from dataclasses import dataclass, field

from ..models import PendingCapture
from .exceptions import CaptureNotRecordedError
from .orchestrator import apply_pending_capture

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    applied: list = field(default_factory=list)
    failed: list = field(default_factory=list)
    skipped: list = field(default_factory=list)


def reconcile_pending_captures(*, dry_run: bool = False, limit: int = None) -> ReconciliationResult:
    """
    Apply every capture that has not reached the ledger yet.

    Args:
        dry_run: List pending captures without writing
        limit: Process at most this many, oldest first

    Returns:
        ReconciliationResult with order ids per outcome
    """
    result = ReconciliationResult()
    pending = PendingCapture.objects.filter(applied_at__isnull=True).order_by('created_at')
    if limit is not None:
        pending = pending[:limit]

    for capture in pending:
        if dry_run:
            result.skipped.append(capture.order_id)
            continue
        try:
            apply_pending_capture(capture)
        except CaptureNotRecordedError:
            result.failed.append(capture.order_id)
        else:
            result.applied.append(capture.order_id)

    logger.info(
        "Reconciliation: %d applied, %d failed, %d skipped",
        len(result.applied), len(result.failed), len(result.skipped)
    )
    return result
