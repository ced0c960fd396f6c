# modularsite/app/core/models.py
from django.conf import settings
from django.db import models
from phonenumber_field.modelfields import PhoneNumberField


DEFAULT_LOCATION_TEMPLATE = (
    "Modular buildings for rent, sale and lease in {city}, {state}. Portable classrooms, "
    "office complexes and site trailers delivered and installed by our local team."
)


class SiteSetting(models.Model):
    site_name = models.CharField(
        max_length=100,
        default="Modular Building Rentals",
        help_text="Company name used in titles, Open Graph tags and structured data."
    )
    site_description = models.TextField(
        default="Professional modular buildings for rent, sale, and lease. From portable classrooms "
                "to office complexes, we provide flexible space solutions for every industry.",
        help_text="Short company description used as the fallback meta description."
    )
    site_url = models.URLField(
        blank=True,
        help_text="Public base URL, e.g., https://example.com. Leave blank to use the SITE_URL setting."
    )
    logo_url = models.URLField(blank=True)

    # Contact Info
    contact_phone = PhoneNumberField(blank=True)
    contact_email = models.EmailField(blank=True)
    contact_address = models.CharField(max_length=255, blank=True)
    contact_city = models.CharField(max_length=100, blank=True)
    contact_state = models.CharField(max_length=2, blank=True)
    contact_postal_code = models.CharField(max_length=10, blank=True)
    default_hours = models.CharField(
        max_length=100,
        default="Mo-Fr 08:00-17:00",
        help_text="Business hours shown on location pages that don't set their own."
    )

    # Regional templates
    location_description_template = models.TextField(
        default=DEFAULT_LOCATION_TEMPLATE,
        help_text="Used for location pages without a description. Placeholders: {city}, {state}."
    )

    # Social Media
    facebook_url = models.URLField(blank=True, verbose_name="Facebook URL")
    linkedin_url = models.URLField(blank=True, verbose_name="LinkedIn URL")
    twitter_url = models.URLField(blank=True, verbose_name="Twitter/X URL")

    class Meta:
        verbose_name = "Site Configuration"
        verbose_name_plural = "Site Configuration"

    def __str__(self):
        return "Site Configuration"

    @classmethod
    def load(cls):
        obj = cls.objects.first()
        if obj is None:
            obj = cls.objects.create()
        return obj

    @property
    def base_url(self):
        return (self.site_url or settings.SITE_URL).rstrip('/')

    @property
    def social_links(self):
        return [url for url in (self.facebook_url, self.linkedin_url, self.twitter_url) if url]

    def render_location_description(self, city, state):
        # str.replace so stray braces in admin-edited text can't raise
        return self.location_description_template.replace('{city}', city).replace('{state}', state)

    def organization_data(self):
        """Organization dict consumed by the structured data builders."""
        return {
            'name': self.site_name,
            'url': self.base_url,
            'description': self.site_description,
            'logo': self.logo_url,
            'telephone': str(self.contact_phone) if self.contact_phone else '',
            'email': self.contact_email,
            'address': self.contact_address,
            'city': self.contact_city,
            'state': self.contact_state,
            'postal_code': self.contact_postal_code,
            'social_links': self.social_links,
        }

    def save(self, *args, **kwargs):
        # Ensure only one instance exists (Singleton pattern)
        if not self.pk:
            existing = SiteSetting.objects.first()
            if existing:
                self.pk = existing.pk
        super().save(*args, **kwargs)
