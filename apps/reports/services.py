"""
Report Services Module
======================

Sales reporting over the invoice ledger.

Classes:
    SalesQueries: Static aggregate queries over invoices and invoice items.

Functions:
    generate_report: Run every query and persist a new Report snapshot.
    list_reports: Most recent snapshots.

Example:
    Generating a snapshot::

        from apps.reports.services import generate_report

        report = generate_report()
        print(f"{report.sales} sales, {report.revenue} EUR")
        for entry in report.most_purchased_products:
            print(f"{entry['name']}: {entry['purchase_count']}")

Note:
    Every call rescans the whole ledger; nothing is maintained incrementally.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Avg, Count, Sum
from django.db.models.functions import Coalesce
from django.db.models import DecimalField, Value

from apps.invoices.models import Invoice, InvoiceItem
from apps.products.models import Product
from .models import Report

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 5
CENT = Decimal('0.01')
ZERO = Decimal('0.00')


class SalesQueries:
    """
    Aggregate queries behind the sales report.

    All methods return plain dictionaries or lists, suitable for storing in
    a JSON field or returning from an API.
    """

    @staticmethod
    def sales_summary():
        """
        Count invoices and total their amounts.

        Returns:
            dict: ``sales`` (int), ``revenue`` and ``average_order_price``
            (Decimal, 2 places); zeros on an empty ledger.
        """
        money = DecimalField(max_digits=14, decimal_places=2)
        totals = Invoice.objects.aggregate(
            sales=Count('id'),
            revenue=Coalesce(Sum('total_amount'), Value(ZERO), output_field=money),
            average=Coalesce(Avg('total_amount'), Value(ZERO), output_field=money),
        )
        return {
            'sales': totals['sales'],
            'revenue': Decimal(totals['revenue']).quantize(CENT, rounding=ROUND_HALF_UP),
            'average_order_price': Decimal(totals['average']).quantize(CENT, rounding=ROUND_HALF_UP),
        }

    @staticmethod
    def most_purchased_products(limit=TOP_PRODUCTS_LIMIT):
        """
        Top sellers by total quantity across all invoice lines.

        Args:
            limit (int): Number of entries to return.

        Returns:
            list[dict]: ``product_id``, ``name``, ``scan_code`` and
            ``purchase_count``, best seller first. ``product_id`` is None
            when the product has since left the catalog.
        """
        top = list(
            InvoiceItem.objects
            .values('scan_code')
            .annotate(purchase_count=Sum('quantity'))
            .order_by('-purchase_count', 'scan_code')[:limit]
        )
        products = Product.objects.in_bulk([row['scan_code'] for row in top], field_name='scan_code')

        entries = []
        for row in top:
            product = products.get(row['scan_code'])
            entries.append({
                'product_id': product.id if product else None,
                'name': product.name if product else '',
                'scan_code': row['scan_code'],
                'purchase_count': row['purchase_count'],
            })
        return entries


def generate_report() -> Report:
    """Rescan the ledger and persist a new snapshot."""
    summary = SalesQueries.sales_summary()
    report = Report.objects.create(
        most_purchased_products=SalesQueries.most_purchased_products(),
        **summary
    )
    logger.info("Generated report %s: %d sales, revenue %s", report.id, report.sales, report.revenue)
    return report


def list_reports(*, limit: int = 20):
    return Report.objects.all()[:limit]
