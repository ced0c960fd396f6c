# modularsite/app/locations/urls.py
from django.urls import path
from . import views

app_name = 'locations'

urlpatterns = [
    path('', views.location_list, name='location_list'),
    path('<str:state>/', views.state_detail, name='state_detail'),
    path('<str:state>/<slug:slug>/', views.location_detail, name='location_detail'),
]
