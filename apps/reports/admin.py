from django.contrib import admin
from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    """Snapshots are read-only; generate new ones through the API."""

    list_display = ['created_at', 'sales', 'revenue', 'average_order_price']
    readonly_fields = ['sales', 'revenue', 'average_order_price', 'most_purchased_products', 'created_at']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
