# modularsite/app/core/urls.py
from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('', views.home, name='home'),
    path('manage/', views.manage_dashboard, name='manage_dashboard'),
]
