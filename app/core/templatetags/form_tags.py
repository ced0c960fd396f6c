# modularsite/app/core/templatetags/form_tags.py
from django import template

register = template.Library()


@register.filter(name='add_class')
def add_class(field, css_classes):
    """
    Renders a bound form field with extra CSS classes merged into its widget's.
    Usage: {{ form.seo_title|add_class:"mt-1 w-full" }}
    """
    existing = field.field.widget.attrs.get('class', '').split()
    merged = existing + [c for c in css_classes.split() if c not in existing]
    return field.as_widget(attrs={'class': ' '.join(merged)})


@register.filter(name='score_color')
def score_color(score):
    """Tailwind text colour for an optimization score."""
    if score is None:
        return 'text-gray-400'
    if score >= 80:
        return 'text-green-600'
    if score >= 50:
        return 'text-yellow-600'
    return 'text-red-600'
