# modularsite/app/seo/sitemaps.py
from django.contrib.sitemaps import Sitemap

from .models import PageMetadata

PRIORITY_BY_PAGE_TYPE = {
    'homepage': 1.0,
    'solution': 0.9,
    'inventory': 0.8,
    'location': 0.8,
    'industry': 0.7,
    'quote': 0.7,
    'contact': 0.6,
    'company': 0.5,
    'resource': 0.5,
    'faq': 0.5,
    'news': 0.4,
    'testimonial': 0.3,
}

CHANGEFREQ_BY_PAGE_TYPE = {
    'homepage': 'daily',
    'inventory': 'daily',
    'news': 'weekly',
}


class PageMetadataSitemap(Sitemap):
    """Every active page that allows indexing."""

    def items(self):
        return PageMetadata.objects.filter(is_active=True, robots_index=True).order_by('page_path')

    def location(self, item):
        return item.page_path

    def lastmod(self, item):
        return item.updated_at

    def priority(self, item):
        return PRIORITY_BY_PAGE_TYPE.get(item.page_type, 0.5)

    def changefreq(self, item):
        return CHANGEFREQ_BY_PAGE_TYPE.get(item.page_type, 'monthly')


sitemaps = {
    'pages': PageMetadataSitemap,
}
