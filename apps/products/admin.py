from django.contrib import admin
from django.utils.html import format_html
from .models import Product, Rating


class RatingInline(admin.TabularInline):
    model = Rating
    extra = 0
    fields = ['user', 'score', 'comment', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['user']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = [
        'scan_code',
        'name',
        'price',
        'stock',
        'rating_badge',
        'updated_at',
    ]
    search_fields = ['scan_code', 'name', 'category']
    readonly_fields = ['average_rating', 'created_at', 'updated_at']
    ordering = ['name']
    inlines = [RatingInline]

    def rating_badge(self, obj):
        """Display average rating as colored badge."""
        color = '#6B8E5E' if obj.average_rating >= 3 else '#B85C5C'
        if not obj.ratings.exists():
            color = '#ccc'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            f'{obj.average_rating:.1f}',
        )
    rating_badge.short_description = 'Rating'
    rating_badge.admin_order_field = 'average_rating'


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['product', 'user', 'score', 'created_at']
    list_filter = ['score', 'created_at']
    search_fields = ['product__scan_code', 'product__name', 'user__email']
    raw_id_fields = ['product', 'user']
