from django.contrib import admin, messages
from django.utils.html import format_html
from .models import PendingCapture
from .services import apply_pending_capture, CaptureNotRecordedError


@admin.register(PendingCapture)
class PendingCaptureAdmin(admin.ModelAdmin):
    """Captures confirmed by PayPal, with a retry for those not yet in the ledger."""

    list_display = ['order_id', 'status', 'applied_badge', 'attempts', 'created_at']
    list_filter = ['status', ('applied_at', admin.EmptyFieldListFilter)]
    search_fields = ['order_id']
    readonly_fields = ['order_id', 'status', 'payload', 'attempts', 'last_error', 'applied_at', 'created_at', 'updated_at']
    actions = ['retry_captures']

    def applied_badge(self, obj):
        if obj.is_applied:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Applied</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Pending</span>'
        )
    applied_badge.short_description = 'Ledger'
    applied_badge.admin_order_field = 'applied_at'

    @admin.action(description='Retry ledger write for selected captures')
    def retry_captures(self, request, queryset):
        applied = failed = 0
        for capture in queryset.filter(applied_at__isnull=True):
            try:
                apply_pending_capture(capture)
            except CaptureNotRecordedError:
                failed += 1
            else:
                applied += 1

        level = messages.WARNING if failed else messages.SUCCESS
        self.message_user(request, f'Applied {applied} capture(s), {failed} still pending.', level=level)
