# modularsite/app/locations/models.py
from django.db import models
from django.urls import reverse
from django.utils.text import slugify
from phonenumber_field.modelfields import PhoneNumberField
from tinymce.models import HTMLField


class Location(models.Model):
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2, help_text="Two-letter state code, e.g., 'CA'.")
    slug = models.SlugField(max_length=120, blank=True, help_text="Leave blank to auto-generate from the city name.")
    headline = models.CharField(max_length=200, blank=True)
    description = HTMLField(blank=True, help_text="Leave blank to use the regional description template.")

    phone = PhoneNumberField(blank=True)
    email = models.EmailField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    postal_code = models.CharField(max_length=10, blank=True)
    hours = models.CharField(max_length=100, blank=True, help_text="Leave blank to use the default business hours.")
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['state', 'city']
        unique_together = ('state', 'slug')

    def __str__(self):
        return f"{self.city}, {self.state}"

    def get_absolute_url(self):
        return reverse('locations:location_detail', kwargs={'state': self.state.lower(), 'slug': self.slug})

    def save(self, *args, **kwargs):
        self.state = self.state.upper()
        if not self.slug:
            self.slug = slugify(self.city)
            original_slug = self.slug
            counter = 1
            while Location.objects.filter(state=self.state, slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f'{original_slug}-{counter}'
                counter += 1
        super().save(*args, **kwargs)

    def display_description(self, site_settings):
        if self.description:
            return self.description
        return site_settings.render_location_description(self.city, self.state)

    def display_phone(self, site_settings):
        return self.phone or site_settings.contact_phone

    def display_hours(self, site_settings):
        return self.hours or site_settings.default_hours

    def structured_data(self, site_settings):
        """Page data for the LocalBusiness builder."""
        phone = self.display_phone(site_settings)
        return {
            'name': f"{site_settings.site_name} - {self}",
            'url': f"{site_settings.base_url}{self.get_absolute_url()}",
            'telephone': str(phone) if phone else '',
            'email': self.email or site_settings.contact_email,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'postal_code': self.postal_code,
            'latitude': str(self.latitude) if self.latitude is not None else None,
            'longitude': str(self.longitude) if self.longitude is not None else None,
            'opening_hours': self.display_hours(site_settings),
        }
