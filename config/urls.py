"""
URL configuration for the Scan & Pay backend.

Every REST endpoint lives under /api/; the Django admin back-office
stays at /admin/.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check
from apps.accounts.views import csrf_token

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin back-office
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/csrf-token/', csrf_token, name='csrf-token'),
    path('api/users/', include('apps.accounts.urls_users')),
    path('api/admin/', include('apps.accounts.urls_admin')),

    # API endpoints
    path('api/products/', include('apps.products.urls')),
    path('api/invoices/', include('apps.invoices.urls')),
    path('api/paypal/', include('apps.payments.urls')),
    path('api/reports/', include('apps.reports.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
