"""
Management command to apply captures PayPal confirmed but the ledger missed.

Usage:
    python manage.py reconcile_captures
    python manage.py reconcile_captures --dry-run
"""

from django.core.management.base import BaseCommand

from apps.payments.services import reconcile_pending_captures


class Command(BaseCommand):
    help = 'Write confirmed PayPal captures that are not yet reflected on their invoices'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List pending captures without making changes',
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Process at most this many captures, oldest first',
        )

    def handle(self, *args, **options):
        result = reconcile_pending_captures(dry_run=options['dry_run'], limit=options['limit'])

        if not (result.applied or result.failed or result.skipped):
            self.stdout.write(self.style.SUCCESS('No pending captures. Ledger is in sync.'))
            return

        if options['dry_run']:
            self.stdout.write(f'\nFound {len(result.skipped)} pending capture(s):\n')
            for order_id in result.skipped:
                self.stdout.write(f'  - {order_id}')
            self.stdout.write(self.style.WARNING('\n--dry-run mode: No changes made.'))
            return

        for order_id in result.applied:
            self.stdout.write(f'  applied {order_id}')
        for order_id in result.failed:
            self.stdout.write(self.style.ERROR(f'  failed  {order_id}'))

        self.stdout.write(
            self.style.SUCCESS(f'\nApplied {len(result.applied)} capture(s), {len(result.failed)} still pending.')
        )
