from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'products'

router = DefaultRouter()
router.register(r'', views.ProductViewSet, basename='product')

urlpatterns = [
    # GET    /api/products/                     - List (?limit&offset) or search (?query=)
    # POST   /api/products/                     - Create product (admin/moderator)
    # GET    /api/products/bought/              - Products on the caller's invoices
    # GET    /api/products/{scan_code}/         - Resolve scan code
    # PUT    /api/products/{scan_code}/         - Update product (admin/moderator)
    # DELETE /api/products/{scan_code}/         - Delete product (admin/moderator)
    # PUT    /api/products/{scan_code}/rating/  - Rate product
    path('', include(router.urls)),
]
