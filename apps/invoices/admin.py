from django.contrib import admin
from django.utils.html import format_html
from .models import Invoice, InvoiceItem, InvoiceStatus


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    fields = ['scan_code', 'name', 'quantity', 'unit_price']


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = [
        'external_order_id',
        'owner',
        'total_amount',
        'status_badge',
        'created_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['external_order_id', 'owner__email', 'items__scan_code']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
    date_hierarchy = 'created_at'
    inlines = [InvoiceItemInline]

    def status_badge(self, obj):
        """Display status with color coding."""
        colors = {
            InvoiceStatus.PENDING: '#E5C49A',
            InvoiceStatus.COMPLETED: '#6B8E5E',
        }
        return format_html(
            '<span style="background: {}; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#B85C5C'),
            obj.status,
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
