from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('', views.report, name='generate'),
    path('history/', views.report_history, name='history'),
]
