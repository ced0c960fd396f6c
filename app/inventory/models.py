# modularsite/app/inventory/models.py
from django.db import models
from django.urls import reverse
from django.utils.text import slugify


class InventoryItem(models.Model):
    class BuildingType(models.TextChoices):
        OFFICE = 'OFFICE', 'Office Building'
        CLASSROOM = 'CLASSROOM', 'Portable Classroom'
        HEALTHCARE = 'HEALTHCARE', 'Healthcare Facility'
        RESTROOM = 'RESTROOM', 'Restroom Facility'
        SECURITY = 'SECURITY', 'Security Building'
        STORAGE = 'STORAGE', 'Storage Container'

    class Condition(models.TextChoices):
        NEW = 'NEW', 'New'
        REFURBISHED = 'REFURBISHED', 'Refurbished'
        USED = 'USED', 'Used'

    class Status(models.TextChoices):
        AVAILABLE = 'AVAILABLE', 'Available'
        RESERVED = 'RESERVED', 'Reserved'
        RENTED = 'RENTED', 'Rented'

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True, help_text="Leave blank to auto-generate from title.")
    building_type = models.CharField(max_length=20, choices=BuildingType.choices, default=BuildingType.OFFICE)
    condition = models.CharField(max_length=20, choices=Condition.choices, default=Condition.USED)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)

    width_ft = models.PositiveIntegerField(help_text="Width in feet.")
    length_ft = models.PositiveIntegerField(help_text="Length in feet.")
    monthly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    sale_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    location = models.ForeignKey(
        'locations.Location',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inventory_items'
    )
    description = models.TextField(blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    features = models.JSONField(default=list, blank=True, help_text="List of feature strings, e.g., [\"HVAC\", \"ADA ramp\"].")

    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def square_feet(self):
        return self.width_ft * self.length_ft

    @property
    def size_label(self):
        return f"{self.width_ft}' x {self.length_ft}'"

    def get_absolute_url(self):
        return reverse('inventory:item_detail', kwargs={'slug': self.slug})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(f"{self.title}-{self.width_ft}x{self.length_ft}")
            original_slug = self.slug
            counter = 1
            while InventoryItem.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f'{original_slug}-{counter}'
                counter += 1
        super().save(*args, **kwargs)

    def structured_data(self, site_settings):
        """Page data for the Product builder."""
        availability = (
            'https://schema.org/InStock' if self.status == self.Status.AVAILABLE
            else 'https://schema.org/OutOfStock'
        )
        return {
            'name': self.title,
            'description': self.description,
            'image_url': self.image_url,
            'category': self.get_building_type_display(),
            'price': self.monthly_rate if self.monthly_rate is not None else self.sale_price,
            'availability': availability,
            'url': f"{site_settings.base_url}{self.get_absolute_url()}",
            'features': self.features if isinstance(self.features, list) else [],
        }
