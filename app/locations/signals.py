# modularsite/app/locations/signals.py
from django.db.models.signals import pre_save, post_save, post_delete
from django.dispatch import receiver
from django.utils.html import strip_tags
from django.utils.text import Truncator

from core.models import SiteSetting
from .models import Location
from seo.utils import sync_page_metadata, remove_page_metadata


@receiver(pre_save, sender=Location)
def remember_old_location_path(sender, instance, **kwargs):
    instance._old_path = None
    if instance.pk:
        previous = Location.objects.filter(pk=instance.pk).only('state', 'slug').first()
        if previous and previous.slug:
            instance._old_path = previous.get_absolute_url()


@receiver(post_save, sender=Location)
def create_or_update_seo_for_location(sender, instance, created, **kwargs):
    """
    Keep one PageMetadata row per location page.
    """
    sync_page_metadata(
        page_path=instance.get_absolute_url(),
        page_name=f"Location: {instance}",
        page_type='location',
        old_path=getattr(instance, '_old_path', None),
        is_active=instance.is_active,
        defaults={
            'seo_title': f"Modular Buildings in {instance.city}, {instance.state}",
            'seo_description': Truncator(strip_tags(instance.display_description(SiteSetting.load()))).chars(160),
            'focus_keyword': f"modular buildings {instance.city}",
            'structured_data_type': 'LocalBusiness',
        },
    )


@receiver(post_delete, sender=Location)
def delete_seo_for_location(sender, instance, **kwargs):
    remove_page_metadata(instance.get_absolute_url())
