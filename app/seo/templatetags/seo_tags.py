# modularsite/app/seo/templatetags/seo_tags.py
import json

from django import template
from django.core.serializers.json import DjangoJSONEncoder
from django.utils.safestring import mark_safe

from core.models import SiteSetting
from seo.metadata import build_meta, first_filled
from seo.models import SEOSettings
from seo.structured_data import generate_structured_data, combine_structured_data, breadcrumbs_for_path

register = template.Library()

JSON_SCRIPT_ESCAPES = {
    ord('>'): '\\u003E',
    ord('<'): '\\u003C',
    ord('&'): '\\u0026',
}


@register.filter(name='json_ld')
def json_ld(value):
    """
    Serialises a JSON-LD block for use inside <script type="application/ld+json">.
    Usage: {{ block|json_ld }}
    """
    dumped = json.dumps(value, cls=DjangoJSONEncoder, ensure_ascii=False)
    return mark_safe(dumped.translate(JSON_SCRIPT_ESCAPES))


def _page_structured_data(context, metadata, meta, organization):
    path = context['request'].path
    page_data = {'title': meta['title'], 'description': meta['description'], 'url': meta['canonical'], 'path': path}

    if metadata and metadata.custom_json_ld:
        custom = generate_structured_data(metadata.structured_data_type, page_data, metadata.custom_json_ld, organization)
        if custom:
            return custom

    # Views that know more about the page (inventory, locations) pass their own blocks
    blocks = context.get('structured_data')
    if not blocks:
        schema_type = metadata.structured_data_type if metadata else 'WebPage'
        blocks = generate_structured_data(schema_type, page_data, organization=organization)

    if path == '/':
        extra = generate_structured_data('WebSite', {}, organization=organization)
    else:
        extra = generate_structured_data('BreadcrumbList', {'breadcrumbs': breadcrumbs_for_path(path)}, organization=organization)
    return combine_structured_data(blocks, extra)


@register.inclusion_tag('seo/head.html', takes_context=True)
def seo_head(context):
    request = context['request']
    site_settings = context.get('site_settings') or SiteSetting.load()
    seo_settings = context.get('seo_settings') or SEOSettings.load()
    metadata = context.get('seo_metadata')

    fallback_title = first_filled(context.get('page_title'), site_settings.site_name)
    fallback_description = first_filled(
        context.get('page_description'), seo_settings.default_description, site_settings.site_description
    )
    current_url = f"{site_settings.base_url}{request.path}"

    meta = build_meta(metadata, fallback_title, fallback_description, current_url, site_settings.site_name)
    if seo_settings.title_suffix and not meta['title'].endswith(seo_settings.title_suffix):
        meta['title'] = f"{meta['title']}{seo_settings.title_suffix}"
    meta['og']['image'] = first_filled(meta['og']['image'], context.get('page_image'), seo_settings.default_og_image)
    meta['twitter']['image'] = first_filled(
        meta['twitter']['image'], meta['og']['image'], seo_settings.default_twitter_image
    )

    return {
        'meta': meta,
        'twitter_site': seo_settings.twitter_username,
        'structured_data': _page_structured_data(context, metadata, meta, site_settings.organization_data()),
    }
