# modularsite/app/inventory/forms.py
from django import forms
from django.db.models import F, Q

from locations.models import Location
from .models import InventoryItem

SELECT_CLASSES = 'p-2 border border-gray-300 rounded-md shadow-sm focus:outline-none focus:ring-2 focus:ring-indigo-500'


class InventoryFilterForm(forms.Form):
    SORT_CHOICES = [
        ('newest', 'Newest first'),
        ('price_asc', 'Monthly rate: low to high'),
        ('price_desc', 'Monthly rate: high to low'),
        ('size_desc', 'Largest first'),
    ]
    SORT_ORDERING = {
        'newest': ['-created_at'],
        'price_asc': [F('monthly_rate').asc(nulls_last=True), '-created_at'],
        'price_desc': [F('monthly_rate').desc(nulls_last=True), '-created_at'],
        'size_desc': ['-square_feet_value', '-created_at'],
    }

    q = forms.CharField(
        required=False,
        label="Search",
        widget=forms.TextInput(attrs={'class': SELECT_CLASSES, 'placeholder': 'Search buildings...'})
    )
    building_type = forms.ChoiceField(
        required=False,
        choices=[('', 'All types')] + list(InventoryItem.BuildingType.choices),
        widget=forms.Select(attrs={'class': SELECT_CLASSES})
    )
    condition = forms.ChoiceField(
        required=False,
        choices=[('', 'Any condition')] + list(InventoryItem.Condition.choices),
        widget=forms.Select(attrs={'class': SELECT_CLASSES})
    )
    status = forms.ChoiceField(
        required=False,
        choices=[('', 'Any status')] + list(InventoryItem.Status.choices),
        widget=forms.Select(attrs={'class': SELECT_CLASSES})
    )
    location = forms.ModelChoiceField(
        required=False,
        queryset=Location.objects.filter(is_active=True).order_by('state', 'city'),
        empty_label="All locations",
        widget=forms.Select(attrs={'class': SELECT_CLASSES})
    )
    sort = forms.ChoiceField(
        required=False,
        choices=SORT_CHOICES,
        widget=forms.Select(attrs={'class': SELECT_CLASSES})
    )

    def filter_queryset(self, queryset):
        """Applies the cleaned filters and ordering. Call after is_valid()."""
        data = self.cleaned_data
        if data.get('q'):
            queryset = queryset.filter(Q(title__icontains=data['q']) | Q(description__icontains=data['q']))
        for name in ('building_type', 'condition', 'status', 'location'):
            if data.get(name):
                queryset = queryset.filter(**{name: data[name]})

        queryset = queryset.annotate(square_feet_value=F('width_ft') * F('length_ft'))
        ordering = self.SORT_ORDERING.get(data.get('sort') or 'newest')
        return queryset.order_by(*ordering)
