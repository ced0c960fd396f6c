# modularsite/app/seo/admin.py
from django.contrib import admin

from import_export.admin import ImportExportMixin

from .models import PageMetadata, Redirect, SEOSettings
from .resources import PageMetadataResource, RedirectResource


@admin.register(PageMetadata)
class PageMetadataAdmin(ImportExportMixin, admin.ModelAdmin):
    resource_class = PageMetadataResource
    list_display = ('page_path', 'page_name', 'page_type', 'optimization_score', 'is_valid_display', 'is_active', 'updated_at')
    list_filter = ('page_type', 'is_active', 'robots_index', 'structured_data_type')
    search_fields = ('page_path', 'page_name', 'seo_title', 'focus_keyword')
    readonly_fields = ('optimization_score', 'last_analyzed', 'validation_summary', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('page_name', 'page_path', 'page_type', 'is_active')
        }),
        ('Search Engine', {
            'fields': ('seo_title', 'seo_description', 'focus_keyword', 'seo_keywords', 'canonical_url',
                       'robots_index', 'robots_follow', 'robots_nosnippet')
        }),
        ('Open Graph', {
            'classes': ('collapse',),
            'fields': ('og_title', 'og_description', 'og_image', 'og_image_alt')
        }),
        ('Twitter Card', {
            'classes': ('collapse',),
            'fields': ('twitter_title', 'twitter_description', 'twitter_image', 'twitter_image_alt')
        }),
        ('Structured Data', {
            'fields': ('structured_data_type', 'custom_json_ld')
        }),
        ('Analysis', {
            'fields': ('optimization_score', 'last_analyzed', 'validation_summary', 'created_at', 'updated_at')
        }),
    )

    @admin.display(boolean=True, description='Valid')
    def is_valid_display(self, obj):
        return obj.validate().is_valid

    @admin.display(description='Findings')
    def validation_summary(self, obj):
        if not obj.pk:
            return '-'
        report = obj.validate()
        lines = [f"[{f.severity}] {f.field}: {f.message}" for f in report.issues + report.warnings + report.suggestions]
        return '\n'.join(lines) or 'No findings.'


@admin.register(Redirect)
class RedirectAdmin(ImportExportMixin, admin.ModelAdmin):
    resource_class = RedirectResource
    list_display = ('source_path', 'destination_path', 'redirect_type', 'is_active', 'hit_count')
    list_filter = ('redirect_type', 'is_active')
    search_fields = ('source_path', 'destination_path')
    readonly_fields = ('hit_count', 'created_at', 'updated_at')


@admin.register(SEOSettings)
class SEOSettingsAdmin(admin.ModelAdmin):
    fieldsets = (
        ('Defaults', {
            'fields': ('title_suffix', 'default_description', 'default_og_image', 'default_twitter_image', 'twitter_username')
        }),
        ('Robots.txt', {
            'fields': ('robots_txt',)
        }),
    )

    # Restrict permissions to act like a Singleton
    def has_add_permission(self, request):
        return not SEOSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
