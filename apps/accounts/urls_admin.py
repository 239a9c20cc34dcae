from django.urls import path

from apps.invoices.views import all_invoices
from . import views

app_name = 'admin-api'

urlpatterns = [
    path('users/', views.admin_users, name='users'),
    path('users/<uuid:user_id>/', views.admin_user_detail, name='user-detail'),
    path('invoices/', all_invoices, name='invoices'),
]
