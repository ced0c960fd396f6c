# modularsite/app/seo/urls.py
from django.urls import path
from . import views

app_name = 'seo'

urlpatterns = [
    path('manage/create/', views.manage_seo_create, name='manage_seo_create'),
    path('manage/edit/<int:meta_id>/', views.manage_seo_edit, name='manage_seo_edit'),
    path('manage/delete/<int:meta_id>/', views.manage_seo_delete, name='manage_seo_delete'),
    path('manage/robots/', views.manage_robots, name='manage_robots'),
    path('manage/redirects/<int:redirect_id>/delete/', views.manage_redirect_delete, name='manage_redirect_delete'),

    # API endpoints
    path('api/pages/', views.api_manage_seo, name='api_manage_seo'),
    path('api/validate/', views.api_validate_seo, name='api_validate_seo'),
    path('api/robots/preview/', views.api_robots_preview, name='api_robots_preview'),
    path('api/redirects/', views.api_save_redirect, name='api_create_redirect'),
    path('api/redirects/<int:redirect_id>/', views.api_save_redirect, name='api_update_redirect'),
]
