# modularsite/app/seo/structured_data.py
"""
schema.org JSON-LD builders for the public pages.

Each builder takes a plain dict of page data plus the organization dict from
SiteSetting.organization_data(), so nothing here touches the database.
"""
import json
import logging
import re

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = 'https://schema.org'

STRUCTURED_DATA_TYPES = (
    'WebPage', 'Product', 'Service', 'Organization', 'LocalBusiness',
    'AboutPage', 'ContactPage', 'CollectionPage', 'FAQPage', 'Article',
    'WebSite', 'BreadcrumbList',
)


def _absolute(site_url, path):
    return f"{site_url.rstrip('/')}{path or ''}"


def _postal_address(data):
    return {
        '@type': 'PostalAddress',
        'streetAddress': data.get('address'),
        'addressLocality': data.get('city'),
        'addressRegion': data.get('state'),
        'postalCode': data.get('postal_code'),
        'addressCountry': data.get('country') or 'US',
    }


def _organization_ref(organization):
    return {'@type': 'Organization', 'name': organization.get('name'), 'url': organization.get('url')}


def _web_page(data, organization, schema_type='WebPage'):
    site_url = organization.get('url', '')
    schema = {
        '@context': SCHEMA_CONTEXT,
        '@type': schema_type,
        'name': data.get('title') or data.get('name'),
        'description': data.get('description'),
        'url': data.get('url') or _absolute(site_url, data.get('path')),
        'inLanguage': 'en-US',
    }
    if data.get('date_modified'):
        schema['dateModified'] = data['date_modified']
    if schema_type in ('AboutPage', 'ContactPage'):
        schema['about'] = _organization_ref(organization)
    return schema


def _product(data, organization):
    schema = {
        '@context': SCHEMA_CONTEXT,
        '@type': 'Product',
        'name': data.get('name') or data.get('title'),
        'description': data.get('description'),
        'manufacturer': _organization_ref(organization),
    }
    if data.get('image_url'):
        schema['image'] = data['image_url']
    if data.get('category'):
        schema['category'] = data['category']
    if data.get('price') not in (None, ''):
        schema['offers'] = {
            '@type': 'Offer',
            'price': re.sub(r'[^0-9.]', '', str(data['price'])),
            'priceCurrency': 'USD',
            'availability': data.get('availability') or 'https://schema.org/InStock',
            'url': data.get('url') or _absolute(organization.get('url', ''), data.get('path')),
        }
    if isinstance(data.get('features'), list):
        schema['additionalProperty'] = [
            {'@type': 'PropertyValue', 'name': 'Feature', 'value': feature}
            for feature in data['features']
        ]
    return schema


def _service(data, organization):
    schema = {
        '@context': SCHEMA_CONTEXT,
        '@type': 'Service',
        'name': data.get('name') or data.get('title'),
        'description': data.get('description'),
        'provider': _organization_ref(organization),
        'serviceType': data.get('service_type') or 'Modular Building Solutions',
    }
    if data.get('area_served'):
        schema['areaServed'] = data['area_served']
    return schema


def _organization(data, organization, schema_type='Organization'):
    merged = dict(organization)
    merged.update({k: v for k, v in data.items() if v})
    schema = {
        '@context': SCHEMA_CONTEXT,
        '@type': schema_type,
        'name': merged.get('name'),
        'url': merged.get('url'),
        'description': merged.get('description'),
    }
    for key, target in (('logo', 'logo'), ('telephone', 'telephone'), ('email', 'email'),
                        ('price_range', 'priceRange')):
        if merged.get(key):
            schema[target] = merged[key]
    if merged.get('address'):
        schema['address'] = _postal_address(merged)
    if schema_type == 'LocalBusiness':
        if merged.get('latitude') and merged.get('longitude'):
            schema['geo'] = {
                '@type': 'GeoCoordinates',
                'latitude': merged['latitude'],
                'longitude': merged['longitude'],
            }
        hours = merged.get('opening_hours')
        if hours:
            schema['openingHours'] = hours if isinstance(hours, list) else [hours]
    if isinstance(merged.get('social_links'), list) and merged['social_links']:
        schema['sameAs'] = merged['social_links']
    return schema


def _collection_page(data, organization):
    schema = _web_page(data, organization, 'CollectionPage')
    items = data.get('items')
    if isinstance(items, list):
        site_url = organization.get('url', '')
        schema['mainEntity'] = {
            '@type': 'ItemList',
            'numberOfItems': len(items),
            'itemListElement': [
                {
                    '@type': 'ListItem',
                    'position': index,
                    'name': item.get('name') or item.get('title'),
                    'url': item.get('url') or _absolute(site_url, item.get('path')),
                }
                for index, item in enumerate(items, start=1)
            ],
        }
    return schema


def _faq_page(data, organization):
    faqs = data.get('faqs')
    if not isinstance(faqs, list):
        return None
    schema = _web_page(data, organization, 'FAQPage')
    schema['name'] = data.get('title') or 'Frequently Asked Questions'
    schema['mainEntity'] = [
        {
            '@type': 'Question',
            'name': faq.get('question'),
            'acceptedAnswer': {'@type': 'Answer', 'text': faq.get('answer')},
        }
        for faq in faqs
    ]
    return schema


def _article(data, organization):
    schema = {
        '@context': SCHEMA_CONTEXT,
        '@type': 'Article',
        'headline': data.get('title') or data.get('name'),
        'description': data.get('description'),
        'url': data.get('url') or _absolute(organization.get('url', ''), data.get('path')),
        'datePublished': data.get('date_published'),
        'dateModified': data.get('date_modified'),
        'author': _organization_ref(organization),
        'publisher': _organization_ref(organization),
        'inLanguage': 'en-US',
    }
    if data.get('image_url'):
        schema['image'] = data['image_url']
    return schema


def _web_site(data, organization):
    site_url = data.get('url') or organization.get('url', '')
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'WebSite',
        'name': data.get('name') or organization.get('name'),
        'description': data.get('description') or organization.get('description'),
        'url': site_url,
        'inLanguage': 'en-US',
        'potentialAction': {
            '@type': 'SearchAction',
            'target': {
                '@type': 'EntryPoint',
                'urlTemplate': _absolute(site_url, '/inventory/?q={search_term_string}'),
            },
            'query-input': 'required name=search_term_string',
        },
    }


def _breadcrumb_list(data, organization):
    breadcrumbs = data.get('breadcrumbs')
    if not isinstance(breadcrumbs, list):
        return None
    site_url = organization.get('url', '')
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'BreadcrumbList',
        'itemListElement': [
            {
                '@type': 'ListItem',
                'position': index,
                'name': crumb['name'],
                'item': _absolute(site_url, crumb['url']),
            }
            for index, crumb in enumerate(breadcrumbs, start=1)
        ],
    }


BUILDERS = {
    'WebPage': _web_page,
    'AboutPage': lambda d, o: _web_page(d, o, 'AboutPage'),
    'ContactPage': lambda d, o: _web_page(d, o, 'ContactPage'),
    'CollectionPage': _collection_page,
    'Product': _product,
    'Service': _service,
    'Organization': _organization,
    'LocalBusiness': lambda d, o: _organization(d, o, 'LocalBusiness'),
    'FAQPage': _faq_page,
    'Article': _article,
    'WebSite': _web_site,
    'BreadcrumbList': _breadcrumb_list,
}


def parse_override(override):
    """Parses custom JSON-LD into a list of blocks, or None if unusable."""
    if not override or not override.strip():
        return None
    try:
        parsed = json.loads(override)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Ignoring invalid custom JSON-LD: {e}")
        return None
    return parsed if isinstance(parsed, list) else [parsed]


def generate_structured_data(schema_type, data, override=None, organization=None):
    """
    Returns a list of JSON-LD blocks for a page. Valid custom JSON-LD replaces
    the generated blocks entirely.
    """
    custom = parse_override(override)
    if custom is not None:
        return custom

    builder = BUILDERS.get(schema_type)
    if builder is None:
        logger.warning(f"Unknown structured data type: {schema_type}")
        return []

    schema = builder(data or {}, organization or {})
    return [schema] if schema else []


def combine_structured_data(*groups):
    """Flattens lists of blocks, keeping the first block per (@type, name)."""
    combined = []
    seen = set()
    for group in groups:
        blocks = group if isinstance(group, list) else [group]
        for block in blocks:
            if not isinstance(block, dict):
                continue
            key = (block.get('@type'), block.get('name'))
            if key in seen:
                continue
            seen.add(key)
            combined.append(block)
    return combined


def breadcrumbs_for_path(path):
    breadcrumbs = [{'name': 'Home', 'url': '/'}]
    current = ''
    for segment in [s for s in path.split('/') if s]:
        current += f"/{segment}"
        name = ' '.join(word.capitalize() for word in segment.split('-'))
        breadcrumbs.append({'name': name, 'url': f"{current}/"})
    return breadcrumbs
