from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('profile/', views.profile, name='profile'),
    path('<uuid:user_id>/', views.user_detail, name='user-detail'),
]
