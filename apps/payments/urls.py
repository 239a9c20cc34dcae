from django.urls import path
from . import views

app_name = 'paypal'

urlpatterns = [
    path('create-paypal-order/', views.create_paypal_order, name='create-order'),
    path('get-order-status/<str:order_id>/', views.order_status, name='order-status'),
    path('capture-payment/<str:order_id>/', views.capture_payment, name='capture-payment'),
]
