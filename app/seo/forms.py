# modularsite/app/seo/forms.py
from django import forms

from .metadata import parse_keywords
from .models import PageMetadata, Redirect
from .robots import validate_robots_txt
from .validation import evaluate

INPUT_CLASSES = 'w-full p-2 border border-gray-300 rounded-md shadow-sm focus:outline-none focus:ring-2 focus:ring-indigo-500'
CHECKBOX_CLASSES = 'h-4 w-4 text-indigo-600 border-gray-300 rounded focus:ring-indigo-500'


class KeywordListField(forms.CharField):
    """Edits a list of keywords as one comma-separated line."""

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return ', '.join(value)
        return value

    def to_python(self, value):
        return parse_keywords(value or '')


class PageMetadataForm(forms.ModelForm):
    seo_keywords = KeywordListField(
        required=False,
        help_text="Comma-separated, 3-10 recommended.",
        widget=forms.TextInput(attrs={'class': INPUT_CLASSES}),
    )

    class Meta:
        model = PageMetadata
        fields = [
            'page_name', 'page_path', 'page_type',
            'seo_title', 'seo_description', 'focus_keyword', 'seo_keywords', 'canonical_url',
            'robots_index', 'robots_follow', 'robots_nosnippet',
            'og_title', 'og_description', 'og_image', 'og_image_alt',
            'twitter_title', 'twitter_description', 'twitter_image', 'twitter_image_alt',
            'structured_data_type', 'custom_json_ld', 'is_active',
        ]
        widgets = {
            'page_name': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'page_path': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'page_type': forms.Select(attrs={'class': INPUT_CLASSES}),
            'seo_title': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'seo_description': forms.Textarea(attrs={'rows': 3, 'class': INPUT_CLASSES}),
            'focus_keyword': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'canonical_url': forms.TextInput(attrs={'class': INPUT_CLASSES, 'placeholder': 'https://'}),
            'robots_index': forms.CheckboxInput(attrs={'class': CHECKBOX_CLASSES}),
            'robots_follow': forms.CheckboxInput(attrs={'class': CHECKBOX_CLASSES}),
            'robots_nosnippet': forms.CheckboxInput(attrs={'class': CHECKBOX_CLASSES}),
            'og_title': forms.TextInput(attrs={'class': INPUT_CLASSES, 'placeholder': 'Defaults to the SEO title'}),
            'og_description': forms.Textarea(attrs={'rows': 2, 'class': INPUT_CLASSES, 'placeholder': 'Defaults to the meta description'}),
            'og_image': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'og_image_alt': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'twitter_title': forms.TextInput(attrs={'class': INPUT_CLASSES, 'placeholder': 'Defaults to the Open Graph title'}),
            'twitter_description': forms.Textarea(attrs={'rows': 2, 'class': INPUT_CLASSES}),
            'twitter_image': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'twitter_image_alt': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'structured_data_type': forms.Select(attrs={'class': INPUT_CLASSES}),
            'custom_json_ld': forms.Textarea(attrs={'rows': 6, 'class': INPUT_CLASSES + ' font-mono'}),
            'is_active': forms.CheckboxInput(attrs={'class': CHECKBOX_CLASSES}),
        }

    report = None

    def clean_page_path(self):
        page_path = self.cleaned_data['page_path'].strip()
        if not page_path.startswith('/'):
            raise forms.ValidationError("The path must start with '/'.")
        return page_path

    def clean(self):
        cleaned_data = super().clean()
        self.report = evaluate(cleaned_data)
        # Only critical findings block the save; warnings are shown, not enforced
        for issue in self.report.issues:
            if issue.field in self.fields and issue.field not in self.errors:
                self.add_error(issue.field, issue.message)
        return cleaned_data


class RedirectForm(forms.ModelForm):
    class Meta:
        model = Redirect
        fields = ['source_path', 'destination_path', 'redirect_type', 'is_active']
        widgets = {
            'source_path': forms.TextInput(attrs={'class': INPUT_CLASSES, 'placeholder': '/old-page/'}),
            'destination_path': forms.TextInput(attrs={'class': INPUT_CLASSES, 'placeholder': '/new-page/'}),
            'redirect_type': forms.Select(attrs={'class': INPUT_CLASSES}),
            'is_active': forms.CheckboxInput(attrs={'class': CHECKBOX_CLASSES}),
        }

    def clean_source_path(self):
        source_path = self.cleaned_data['source_path'].strip()
        if not source_path.startswith('/'):
            raise forms.ValidationError("The source path must start with '/'.")
        return source_path

    def clean_destination_path(self):
        destination_path = self.cleaned_data['destination_path'].strip()
        if not destination_path.startswith(('/', 'http://', 'https://')):
            raise forms.ValidationError("The destination must be a path starting with '/' or an absolute URL.")
        return destination_path

    def clean(self):
        cleaned_data = super().clean()
        source = cleaned_data.get('source_path')
        destination = cleaned_data.get('destination_path')
        if not source or not destination:
            return cleaned_data

        if source == destination:
            raise forms.ValidationError("A page cannot redirect to itself.")

        loops_back = Redirect.objects.filter(
            source_path=destination, destination_path=source, is_active=True
        ).exclude(pk=self.instance.pk)
        if loops_back.exists():
            raise forms.ValidationError(f"'{destination}' already redirects to '{source}'; this would create a loop.")
        return cleaned_data


class RobotsTxtForm(forms.Form):
    content = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'rows': 20, 'class': INPUT_CLASSES + ' font-mono'}),
        help_text="Leave the stored content blank to serve the generated default.",
    )

    def clean_content(self):
        content = self.cleaned_data['content']
        if not content.strip():
            return ''
        errors = validate_robots_txt(content)
        if errors:
            raise forms.ValidationError([f"Line {number}: {message}" for number, message in errors])
        return content.strip() + '\n'
