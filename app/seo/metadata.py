# modularsite/app/seo/metadata.py
"""
The SEOData record and the fallback rules used when rendering it.

Open Graph values fall back to the base SEO fields, Twitter values fall back
to Open Graph and then to the base SEO fields. The chain never runs the other
way (Open Graph does not borrow from Twitter).
"""
from dataclasses import dataclass, field, fields
from collections.abc import Mapping


PAGE_TYPES = (
    'homepage', 'solution', 'industry', 'location', 'resource', 'company',
    'news', 'contact', 'quote', 'inventory', 'testimonial', 'faq',
)

BOOLEAN_FIELDS = ('robots_index', 'robots_follow', 'robots_nosnippet')


@dataclass
class SEOData:
    page_path: str
    page_type: str = 'homepage'
    seo_title: str = ''
    seo_description: str = ''
    focus_keyword: str = ''
    seo_keywords: list = field(default_factory=list)
    canonical_url: str = ''
    robots_index: bool = True
    robots_follow: bool = True
    robots_nosnippet: bool = False
    og_title: str = ''
    og_description: str = ''
    og_image: str = ''
    og_image_alt: str = ''
    twitter_title: str = ''
    twitter_description: str = ''
    twitter_image: str = ''
    twitter_image_alt: str = ''
    structured_data_type: str = 'WebPage'
    custom_json_ld: str = ''

    @classmethod
    def coerce(cls, obj):
        """
        Builds an SEOData from another SEOData, a mapping (form data, a JSON
        body) or any object carrying the same attributes (a PageMetadata row).
        Missing values take the dataclass defaults. An SEOData passed in is
        rebuilt the same way, so None values and loose keyword lists are
        normalized too.
        """
        if isinstance(obj, Mapping):
            getter = obj.get
        else:
            def getter(name, default=None):
                return getattr(obj, name, default)

        values = {}
        for f in fields(cls):
            raw = getter(f.name, None)
            if raw is None:
                continue
            if f.name == 'seo_keywords':
                values[f.name] = parse_keywords(raw)
            elif f.name in BOOLEAN_FIELDS:
                values[f.name] = _to_bool(raw)
            else:
                values[f.name] = str(raw)

        values.setdefault('page_path', '')
        return cls(**values)


def parse_keywords(raw):
    """Accepts a list or a comma-separated string; keeps insertion order."""
    if isinstance(raw, str):
        items = raw.split(',')
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        items = [raw]
    return [str(k).strip() for k in items if k is not None and str(k).strip()]


def _to_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def is_blank(value):
    return value is None or not str(value).strip()


def first_filled(*values):
    """Returns the first value that is not blank, or '' if all are."""
    for value in values:
        if not is_blank(value):
            return value
    return ''


def resolve_open_graph(data, fallback_title='', fallback_description=''):
    data = SEOData.coerce(data)
    title = first_filled(data.og_title, data.seo_title, fallback_title)
    return {
        'title': title,
        'description': first_filled(data.og_description, data.seo_description, fallback_description),
        'image': first_filled(data.og_image),
        'image_alt': first_filled(data.og_image_alt, title),
    }


def resolve_twitter(data, fallback_title='', fallback_description=''):
    data = SEOData.coerce(data)
    og = resolve_open_graph(data, fallback_title, fallback_description)
    title = first_filled(data.twitter_title, og['title'])
    return {
        'card': 'summary_large_image',
        'title': title,
        'description': first_filled(data.twitter_description, og['description']),
        'image': first_filled(data.twitter_image, og['image']),
        'image_alt': first_filled(data.twitter_image_alt, data.og_image_alt, title),
    }


def robots_content(data):
    data = SEOData.coerce(data)
    directives = [
        'index' if data.robots_index else 'noindex',
        'follow' if data.robots_follow else 'nofollow',
    ]
    if data.robots_nosnippet:
        directives.append('nosnippet')
    return ', '.join(directives)


def build_meta(data, fallback_title='', fallback_description='', current_url='', site_name=''):
    """
    Resolves everything a page head needs from one record. `data` may be None
    for pages without stored metadata, in which case only fallbacks apply.
    """
    if data is None:
        data = SEOData(page_path='')
    data = SEOData.coerce(data)

    title = first_filled(data.seo_title, fallback_title)
    description = first_filled(data.seo_description, fallback_description)
    og = resolve_open_graph(data, fallback_title, fallback_description)
    og.update({'type': 'website', 'url': current_url, 'site_name': site_name})

    return {
        'title': title,
        'description': description,
        'keywords': ', '.join(data.seo_keywords),
        'robots': robots_content(data),
        'canonical': first_filled(data.canonical_url, current_url),
        'og': og,
        'twitter': resolve_twitter(data, fallback_title, fallback_description),
    }
