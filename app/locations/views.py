# modularsite/app/locations/views.py
from itertools import groupby

from django.http import Http404
from django.shortcuts import render, get_object_or_404
from django.utils.html import strip_tags
from django.utils.text import Truncator

from core.models import SiteSetting
from inventory.models import InventoryItem
from seo.structured_data import generate_structured_data
from .models import Location


def location_list(request):
    locations = Location.objects.filter(is_active=True).order_by('state', 'city')
    locations_by_state = [
        (state, list(group)) for state, group in groupby(locations, key=lambda location: location.state)
    ]
    context = {
        'locations_by_state': locations_by_state,
        'page_title': 'Service Locations',
    }
    return render(request, 'locations/location_list.html', context)


def state_detail(request, state):
    state = state.upper()
    locations = list(Location.objects.filter(state=state, is_active=True).order_by('city'))
    if not locations:
        raise Http404(f"No locations in {state}.")

    site_settings = SiteSetting.load()
    structured_data = generate_structured_data(
        'CollectionPage',
        {
            'title': f"Modular Buildings in {state}",
            'path': request.path,
            'items': [{'name': str(location), 'path': location.get_absolute_url()} for location in locations],
        },
        organization=site_settings.organization_data(),
    )
    context = {
        'state': state,
        'locations': locations,
        'structured_data': structured_data,
        'page_title': f"Modular Buildings in {state}",
    }
    return render(request, 'locations/state_detail.html', context)


def location_detail(request, state, slug):
    location = get_object_or_404(Location, state=state.upper(), slug=slug, is_active=True)
    site_settings = SiteSetting.load()

    description = location.display_description(site_settings)
    structured_data = generate_structured_data(
        'LocalBusiness', location.structured_data(site_settings), organization=site_settings.organization_data()
    )
    available_items = InventoryItem.objects.filter(
        location=location, is_active=True, status=InventoryItem.Status.AVAILABLE
    )

    context = {
        'location': location,
        'description': description,
        'phone': location.display_phone(site_settings),
        'hours': location.display_hours(site_settings),
        'available_items': available_items,
        'structured_data': structured_data,
        'page_title': location.headline or f"Modular Buildings in {location}",
        'page_description': Truncator(strip_tags(description)).chars(160),
    }
    return render(request, 'locations/location_detail.html', context)
