"""
Management command to provision a fresh deployment.

Usage:
    python manage.py bootstrap
    python manage.py bootstrap --seed-catalog
    python manage.py bootstrap --seed-catalog --demo-invoices

This creates:
- The bootstrap admin, unless an admin account already exists
- Catalog entries for the configured demo scan codes (--seed-catalog)
- One completed invoice per demo scan code for the admin (--demo-invoices)
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import ensure_bootstrap_admin
from apps.core.exceptions import UpstreamError
from apps.invoices.models import InvoiceStatus
from apps.invoices.services import DuplicateInvoiceError, record_order, apply_capture_result
from apps.products.services import get_or_refresh_product
from apps.products.services.exceptions import ProductNotFoundError


class Command(BaseCommand):
    help = 'Create the bootstrap admin and optionally seed the catalog'

    def add_arguments(self, parser):
        parser.add_argument(
            '--seed-catalog',
            action='store_true',
            help='Fetch the demo scan codes from the catalog source',
        )
        parser.add_argument(
            '--demo-invoices',
            action='store_true',
            help='Record a completed demo invoice for each seeded product',
        )

    def handle(self, *args, **options):
        if options['demo_invoices'] and not options['seed_catalog']:
            raise CommandError('--demo-invoices requires --seed-catalog')

        admin, created = ensure_bootstrap_admin()
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created bootstrap admin {admin.email}'))
        else:
            self.stdout.write(f'Admin account already present: {admin.email}')

        if not options['seed_catalog']:
            return

        seeded = []
        for scan_code in settings.CATALOG_SOURCE['DEFAULT_SCAN_CODES']:
            try:
                product = get_or_refresh_product(scan_code=scan_code)
            except (ProductNotFoundError, UpstreamError) as e:
                self.stdout.write(self.style.WARNING(f'  skipped {scan_code}: {e.detail}'))
                continue
            seeded.append(product)
            self.stdout.write(f'  {product.scan_code} {product.name} ({product.price} EUR)')

        self.stdout.write(self.style.SUCCESS(f'\nSeeded {len(seeded)} product(s).'))

        if not options['demo_invoices']:
            return

        recorded = 0
        for product in seeded:
            order_id = f'DEMO-{product.scan_code}'
            try:
                record_order(owner=admin, scan_codes=[product.scan_code], external_order_id=order_id)
            except DuplicateInvoiceError:
                continue
            apply_capture_result(external_order_id=order_id, new_status=InvoiceStatus.COMPLETED)
            recorded += 1

        self.stdout.write(self.style.SUCCESS(f'Recorded {recorded} demo invoice(s).'))
