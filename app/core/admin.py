# modularsite/app/core/admin.py
from django import forms
from django.contrib import admin

from .models import SiteSetting


class SiteSettingForm(forms.ModelForm):
    class Meta:
        model = SiteSetting
        fields = '__all__'
        widgets = {
            'site_description': forms.Textarea(attrs={'rows': 3}),
            'location_description_template': forms.Textarea(attrs={'rows': 4}),
        }


@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    form = SiteSettingForm
    fieldsets = (
        ('Company', {
            'fields': ('site_name', 'site_description', 'site_url', 'logo_url')
        }),
        ('Contact Info', {
            'fields': ('contact_phone', 'contact_email', 'contact_address', 'contact_city',
                       'contact_state', 'contact_postal_code', 'default_hours')
        }),
        ('Regional Templates', {
            'fields': ('location_description_template',)
        }),
        ('Social Media', {
            'fields': ('facebook_url', 'linkedin_url', 'twitter_url')
        }),
    )

    # Restrict permissions to act like a Singleton
    def has_add_permission(self, request):
        return not SiteSetting.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
