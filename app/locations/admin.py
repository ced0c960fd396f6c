# modularsite/app/locations/admin.py
from django.contrib import admin

from .models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ('city', 'state', 'slug', 'phone', 'is_active', 'updated_at')
    list_filter = ('state', 'is_active')
    search_fields = ('city', 'state', 'postal_code')
    prepopulated_fields = {'slug': ('city',)}

    fieldsets = (
        (None, {
            'fields': ('city', 'state', 'slug', 'headline', 'description', 'is_active')
        }),
        ('Contact Info', {
            'description': "Blank values fall back to the Site Configuration.",
            'fields': ('phone', 'email', 'address', 'postal_code', 'hours')
        }),
        ('Map', {
            'classes': ('collapse',),
            'fields': ('latitude', 'longitude')
        }),
    )
