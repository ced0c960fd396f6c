# modularsite/app/seo/models.py
from django.db import models
from django.utils import timezone

from .metadata import SEOData, PAGE_TYPES
from .structured_data import STRUCTURED_DATA_TYPES
from .validation import evaluate


class PageMetadata(models.Model):
    PAGE_TYPE_CHOICES = [(t, t.replace('_', ' ').title()) for t in PAGE_TYPES]
    STRUCTURED_DATA_CHOICES = [(t, t) for t in STRUCTURED_DATA_TYPES]

    page_name = models.CharField(max_length=150, help_text="A readable name for this page, e.g., 'Home Page', 'Location: Fresno, CA'.")
    page_path = models.CharField(max_length=255, unique=True, help_text="The exact path, e.g., '/', '/inventory/', '/locations/ca/fresno/'.")
    page_type = models.CharField(max_length=20, choices=PAGE_TYPE_CHOICES, default='homepage')

    seo_title = models.CharField(max_length=255, blank=True, help_text="The title tag for the page (30-60 chars).")
    seo_description = models.TextField(blank=True, help_text="The meta description for the page (120-160 chars).")
    focus_keyword = models.CharField(max_length=100, blank=True)
    seo_keywords = models.JSONField(default=list, blank=True, help_text="Secondary keywords, 3-10 recommended.")
    canonical_url = models.CharField(max_length=500, blank=True, help_text="Absolute URL, e.g., https://example.com/page/.")

    robots_index = models.BooleanField(default=True)
    robots_follow = models.BooleanField(default=True)
    robots_nosnippet = models.BooleanField(default=False)

    # Open Graph (falls back to the SEO fields)
    og_title = models.CharField(max_length=255, blank=True)
    og_description = models.TextField(blank=True)
    og_image = models.CharField(max_length=500, blank=True)
    og_image_alt = models.CharField(max_length=255, blank=True)

    # Twitter card (falls back to Open Graph, then SEO fields)
    twitter_title = models.CharField(max_length=255, blank=True)
    twitter_description = models.TextField(blank=True)
    twitter_image = models.CharField(max_length=500, blank=True)
    twitter_image_alt = models.CharField(max_length=255, blank=True)

    structured_data_type = models.CharField(max_length=30, choices=STRUCTURED_DATA_CHOICES, default='WebPage')
    custom_json_ld = models.TextField(blank=True, help_text="Optional raw JSON-LD. Overrides the generated structured data.")

    is_active = models.BooleanField(default=True)
    optimization_score = models.PositiveSmallIntegerField(default=0, editable=False)
    last_analyzed = models.DateTimeField(null=True, blank=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['page_path']
        verbose_name = "Page SEO"
        verbose_name_plural = "Page SEO"

    def __str__(self):
        return f"{self.page_name} ({self.page_path})"

    def to_seo_data(self):
        return SEOData.coerce(self)

    def validate(self):
        return evaluate(self.to_seo_data())

    def save(self, *args, **kwargs):
        self.optimization_score = self.validate().score
        self.last_analyzed = timezone.now()
        super().save(*args, **kwargs)


class Redirect(models.Model):
    class RedirectType(models.IntegerChoices):
        PERMANENT = 301, '301 Permanent'
        TEMPORARY = 302, '302 Temporary'

    source_path = models.CharField(max_length=255, unique=True, help_text="Old path, e.g., '/old-page/'.")
    destination_path = models.CharField(max_length=500, help_text="New path or absolute URL.")
    redirect_type = models.PositiveSmallIntegerField(choices=RedirectType.choices, default=RedirectType.PERMANENT)
    is_active = models.BooleanField(default=True)
    hit_count = models.PositiveIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['source_path']

    def __str__(self):
        return f"{self.source_path} -> {self.destination_path} ({self.redirect_type})"

    @property
    def is_permanent(self):
        return self.redirect_type == self.RedirectType.PERMANENT


class SEOSettings(models.Model):
    title_suffix = models.CharField(max_length=100, blank=True, help_text="Appended to page titles, e.g., ' | Modular Buildings'.")
    default_description = models.TextField(blank=True, help_text="Meta description for pages without their own.")
    default_og_image = models.CharField(max_length=500, blank=True)
    default_twitter_image = models.CharField(max_length=500, blank=True)
    twitter_username = models.CharField(max_length=50, blank=True, help_text="Site @username for Twitter cards.")
    robots_txt = models.TextField(blank=True, help_text="Leave blank to serve the generated default robots.txt.")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "SEO Settings"
        verbose_name_plural = "SEO Settings"

    def __str__(self):
        return "SEO Settings"

    @classmethod
    def load(cls):
        obj = cls.objects.first()
        if obj is None:
            obj = cls.objects.create()
        return obj

    def save(self, *args, **kwargs):
        # Singleton: a second row updates the existing one instead
        if not self.pk:
            existing = SEOSettings.objects.first()
            if existing:
                self.pk = existing.pk
        super().save(*args, **kwargs)
