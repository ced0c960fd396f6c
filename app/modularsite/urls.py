# modularsite/app/modularsite/urls.py
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import path, include

from seo import views as seo_views
from seo.sitemaps import sitemaps

urlpatterns = [
    # Admin URL should be specific and is often placed first
    path('admin/', admin.site.urls),

    path('robots.txt', seo_views.robots_txt, name='robots_txt'),
    path('sitemap.xml', sitemap, {'sitemaps': sitemaps}, name='sitemap'),

    path('', include('core.urls', namespace='core')),
    path('inventory/', include('inventory.urls', namespace='inventory')),
    path('locations/', include('locations.urls', namespace='locations')),
    path('seo/', include('seo.urls', namespace='seo')),
    path('tinymce/', include('tinymce.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
