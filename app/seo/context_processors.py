# modularsite/app/seo/context_processors.py
from core.models import SiteSetting
from .models import PageMetadata, SEOSettings


def seo_tags(request):
    """
    Context processor to load SEO tags for the current page.
    Pages without an active PageMetadata row fall back to the site defaults.
    """
    metadata = PageMetadata.objects.filter(page_path=request.path, is_active=True).first()
    seo_settings = SEOSettings.load()

    if metadata:
        return {
            'seo_metadata': metadata,
            'seo_settings': seo_settings,
            'meta_title': metadata.seo_title,
            'meta_description': metadata.seo_description,
        }

    site_settings = SiteSetting.load()
    return {
        'seo_metadata': None,
        'seo_settings': seo_settings,
        'meta_title': site_settings.site_name,
        'meta_description': seo_settings.default_description or site_settings.site_description,
    }
