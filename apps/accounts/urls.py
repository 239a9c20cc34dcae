from django.urls import path
from . import views

app_name = 'auth'

urlpatterns = [
    path('register/', views.register, name='register'),
    # POST: credentials login, GET: token re-auth
    path('login/', views.LoginView.as_view(), name='login'),
]
