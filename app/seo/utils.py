# modularsite/app/seo/utils.py
import logging

from django.db import transaction

from .models import PageMetadata, Redirect

logger = logging.getLogger(__name__)


@transaction.atomic
def sync_page_metadata(page_path, page_name, page_type, defaults=None, old_path=None, is_active=True):
    """
    Keeps a PageMetadata row in step with a content object.

    New pages get a row seeded from `defaults`. Existing rows only have their
    name, type and active flag refreshed so SEO fields edited in the admin are
    never overwritten. When the object's URL changed, the row moves to the new
    path and a permanent redirect is left behind.
    """
    if old_path and old_path != page_path:
        moved = PageMetadata.objects.filter(page_path=old_path).first()
        if moved and not PageMetadata.objects.filter(page_path=page_path).exists():
            moved.page_path = page_path
            moved.save()
            logger.info(f"Moved SEO metadata from {old_path} to {page_path}")
        Redirect.objects.update_or_create(
            source_path=old_path,
            defaults={'destination_path': page_path, 'redirect_type': Redirect.RedirectType.PERMANENT, 'is_active': True},
        )
        # A redirect away from the new path would loop
        Redirect.objects.filter(source_path=page_path).delete()

    metadata, created = PageMetadata.objects.get_or_create(
        page_path=page_path,
        defaults=dict(defaults or {}, page_name=page_name, page_type=page_type, is_active=is_active),
    )
    if not created:
        metadata.page_name = page_name
        metadata.page_type = page_type
        metadata.is_active = is_active
        metadata.save()
    return metadata


def remove_page_metadata(page_path):
    deleted, _ = PageMetadata.objects.filter(page_path=page_path).delete()
    if deleted:
        logger.info(f"Removed SEO metadata for {page_path}")
    return deleted
