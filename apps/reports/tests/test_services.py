import pytest
from decimal import Decimal

from apps.invoices.services import record_order
from apps.products.models import Product
from apps.reports.models import Report
from apps.reports.services import SalesQueries, generate_report, list_reports


@pytest.mark.django_db
class TestSalesQueries:

    def test_empty_ledger(self):
        report = generate_report()

        assert report.sales == 0
        assert report.revenue == Decimal('0.00')
        assert report.average_order_price == Decimal('0.00')
        assert report.most_purchased_products == []

    def test_summary(self, product, other_product, user, other_user):
        record_order(owner=user, scan_codes=[product.scan_code] * 2, external_order_id='O-1')
        record_order(owner=other_user, scan_codes=[other_product.scan_code], external_order_id='O-2')

        summary = SalesQueries.sales_summary()

        assert summary['sales'] == 2
        assert summary['revenue'] == Decimal('6.20')
        assert summary['average_order_price'] == Decimal('3.10')

    def test_top_products_ranked_by_quantity(self, product, other_product, user):
        record_order(owner=user, scan_codes=[other_product.scan_code], external_order_id='O-1')
        record_order(owner=user, scan_codes=[product.scan_code, product.scan_code], external_order_id='O-2')
        record_order(owner=user, scan_codes=[product.scan_code, other_product.scan_code], external_order_id='O-3')

        top = SalesQueries.most_purchased_products()

        assert top == [
            {'product_id': product.id, 'name': 'Nutella', 'scan_code': product.scan_code, 'purchase_count': 3},
            {'product_id': other_product.id, 'name': 'Coca-Cola', 'scan_code': other_product.scan_code,
             'purchase_count': 2},
        ]

    def test_top_products_capped_at_five(self, user):
        codes = []
        for index in range(7):
            Product.objects.create(scan_code=f'10{index}', name=f'Item {index}', price=Decimal('1.00'))
            codes.extend([f'10{index}'] * (index + 1))
        record_order(owner=user, scan_codes=codes, external_order_id='O-1')

        top = SalesQueries.most_purchased_products()

        assert [entry['scan_code'] for entry in top] == ['106', '105', '104', '103', '102']

    def test_top_product_removed_from_catalog(self, product, user):
        record_order(owner=user, scan_codes=[product.scan_code], external_order_id='O-1')
        product.delete()

        top = SalesQueries.most_purchased_products()

        assert top[0]['product_id'] is None
        assert top[0]['purchase_count'] == 1


@pytest.mark.django_db
class TestReportHistory:

    def test_each_generation_is_a_new_snapshot(self, product, user):
        first = generate_report()
        record_order(owner=user, scan_codes=[product.scan_code], external_order_id='O-1')
        second = generate_report()

        assert Report.objects.count() == 2
        assert list(list_reports()) == [second, first]
        assert second.sales == 1

    def test_limit(self):
        for _ in range(3):
            generate_report()

        assert len(list_reports(limit=2)) == 2
