# modularsite/app/inventory/admin.py
from django.contrib import admin

from import_export.admin import ImportExportMixin

from .models import InventoryItem
from .resources import InventoryItemResource


@admin.register(InventoryItem)
class InventoryItemAdmin(ImportExportMixin, admin.ModelAdmin):
    resource_class = InventoryItemResource
    list_display = ('title', 'building_type', 'condition', 'status', 'size_label', 'monthly_rate', 'location', 'is_featured', 'is_active')
    list_filter = ('building_type', 'condition', 'status', 'is_featured', 'is_active', 'location__state')
    search_fields = ('title', 'slug', 'description')
    list_editable = ('status', 'is_featured', 'is_active')
    prepopulated_fields = {'slug': ('title',)}
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'slug', 'building_type', 'condition', 'status', 'location')
        }),
        ('Size & Pricing', {
            'fields': ('width_ft', 'length_ft', 'monthly_rate', 'sale_price')
        }),
        ('Listing', {
            'fields': ('description', 'image_url', 'features', 'is_featured', 'is_active', 'created_at', 'updated_at')
        }),
    )
