# modularsite/app/inventory/signals.py
from django.db.models.signals import pre_save, post_save, post_delete
from django.dispatch import receiver
from django.utils.html import strip_tags
from django.utils.text import Truncator

from .models import InventoryItem
from seo.utils import sync_page_metadata, remove_page_metadata


@receiver(pre_save, sender=InventoryItem)
def remember_old_inventory_path(sender, instance, **kwargs):
    instance._old_path = None
    if instance.pk:
        previous = InventoryItem.objects.filter(pk=instance.pk).only('slug').first()
        if previous and previous.slug:
            instance._old_path = previous.get_absolute_url()


@receiver(post_save, sender=InventoryItem)
def create_or_update_seo_for_inventory_item(sender, instance, created, **kwargs):
    """
    Automatically create or update a PageMetadata object
    when an InventoryItem is created or updated.
    """
    if not instance.slug:
        return

    sync_page_metadata(
        page_path=instance.get_absolute_url(),
        page_name=f"Inventory: {instance.title}",
        page_type='inventory',
        old_path=getattr(instance, '_old_path', None),
        is_active=instance.is_active,
        defaults={
            'seo_title': Truncator(f"{instance.title} - {instance.size_label} {instance.get_building_type_display()}").chars(60),
            'seo_description': Truncator(strip_tags(instance.description)).chars(160),
            'og_image': instance.image_url,
            'structured_data_type': 'Product',
        },
    )


@receiver(post_delete, sender=InventoryItem)
def delete_seo_for_inventory_item(sender, instance, **kwargs):
    if instance.slug:
        remove_page_metadata(instance.get_absolute_url())
