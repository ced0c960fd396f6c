# modularsite/app/inventory/urls.py
from django.urls import path
from . import views

app_name = 'inventory'

urlpatterns = [
    path('', views.inventory_list, name='inventory_list'),
    path('api/manage-inventory/', views.api_manage_inventory, name='api_manage_inventory'),
    path('export/', views.export_inventory_csv, name='export_inventory_csv'),
    path('<slug:slug>/', views.item_detail, name='item_detail'),
]
