# modularsite/app/seo/resources.py
from import_export import resources, fields, widgets

from .metadata import parse_keywords
from .models import PageMetadata, Redirect


class KeywordListWidget(widgets.Widget):
    """Keywords travel as one comma-separated cell."""

    def clean(self, value, row=None, **kwargs):
        return parse_keywords(value or '')

    def render(self, value, obj=None, **kwargs):
        if not value:
            return ''
        return ', '.join(value)


class PageMetadataResource(resources.ModelResource):
    seo_keywords = fields.Field(
        column_name='seo_keywords',
        attribute='seo_keywords',
        widget=KeywordListWidget(),
    )
    optimization_score = fields.Field(column_name='optimization_score', attribute='optimization_score', readonly=True)

    class Meta:
        model = PageMetadata
        # --- Use the path as the unique key ---
        import_id_fields = ['page_path']
        fields = (
            'page_path', 'page_name', 'page_type',
            'seo_title', 'seo_description', 'focus_keyword', 'seo_keywords', 'canonical_url',
            'robots_index', 'robots_follow', 'robots_nosnippet',
            'og_title', 'og_description', 'og_image', 'og_image_alt',
            'twitter_title', 'twitter_description', 'twitter_image', 'twitter_image_alt',
            'structured_data_type', 'custom_json_ld', 'is_active', 'optimization_score',
        )
        skip_unchanged = True
        report_skipped = True

    def before_import_row(self, row, **kwargs):
        """ Normalise the path so '/about' and '/about/' don't create two rows. """
        page_path = str(row.get('page_path') or '').strip()
        if page_path and not page_path.startswith('/'):
            page_path = f"/{page_path}"
        row['page_path'] = page_path


class RedirectResource(resources.ModelResource):
    class Meta:
        model = Redirect
        import_id_fields = ['source_path']
        fields = ('source_path', 'destination_path', 'redirect_type', 'is_active', 'hit_count')
        skip_unchanged = True
        report_skipped = True
