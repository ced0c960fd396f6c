# modularsite/app/core/views.py
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Avg
from django.shortcuts import render, redirect

from inventory.models import InventoryItem
from locations.models import Location
from seo.models import PageMetadata, Redirect

logger = logging.getLogger(__name__)

DASHBOARD_FAILING_LIMIT = 20


def staff_required(view_func):
    """ Decorator to ensure the user is logged in AND is a staff member. """
    @login_required
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_staff:
            messages.error(request, "You do not have permission to access this page.")
            return redirect('core:home')
        return view_func(request, *args, **kwargs)
    return _wrapped_view


def home(request):
    featured_items = (
        InventoryItem.objects.filter(is_active=True, is_featured=True)
        .select_related('location')[:6]
    )
    locations = Location.objects.filter(is_active=True).order_by('state', 'city')
    context = {
        'featured_items': featured_items,
        'locations': locations,
    }
    return render(request, 'core/home.html', context)


@staff_required
def manage_dashboard(request):
    """
    Renders the management dashboard. The SEO table itself is loaded
    asynchronously from seo:api_manage_seo; only the summary is computed here.
    """
    pages = PageMetadata.objects.all()

    failing_pages = []
    for metadata in pages:
        report = metadata.validate()
        if not report.is_valid:
            failing_pages.append({'metadata': metadata, 'score': report.score, 'issues': report.issues})
    failing_pages.sort(key=lambda entry: entry['score'])

    average_score = pages.aggregate(avg=Avg('optimization_score'))['avg']
    logger.info(f"manage_dashboard: {len(failing_pages)} of {pages.count()} pages failing validation")

    context = {
        'page_count': pages.count(),
        'average_score': round(average_score) if average_score is not None else None,
        'failing_count': len(failing_pages),
        'failing_pages': failing_pages[:DASHBOARD_FAILING_LIMIT],
        'redirects': Redirect.objects.all(),
        'inventory_count': InventoryItem.objects.filter(is_active=True).count(),
        'location_count': Location.objects.filter(is_active=True).count(),
        'page_types': PageMetadata.PAGE_TYPE_CHOICES,
    }
    return render(request, 'core/manage_dashboard.html', context)
