# modularsite/app/inventory/views.py
import datetime
import logging

from django.core.paginator import Paginator, EmptyPage
from django.db.models import Q
from django.http import HttpResponse, JsonResponse
from django.shortcuts import render, get_object_or_404
from django.utils.html import strip_tags
from django.utils.text import Truncator

from core.models import SiteSetting
from core.views import staff_required
from seo.structured_data import generate_structured_data
from .forms import InventoryFilterForm
from .models import InventoryItem
from .resources import InventoryItemResource

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 12


def inventory_list(request):
    queryset = InventoryItem.objects.filter(is_active=True).select_related('location')

    form = InventoryFilterForm(request.GET or None)
    if form.is_bound and form.is_valid():
        queryset = form.filter_queryset(queryset)
    elif form.is_bound:
        logger.info(f"inventory_list: ignoring invalid filters {form.errors.as_json()}")

    paginator = Paginator(queryset, ITEMS_PER_PAGE)
    page_obj = paginator.get_page(request.GET.get('page'))

    # Keep the active filters on the pagination links
    query = request.GET.copy()
    query.pop('page', None)

    context = {
        'form': form,
        'page_obj': page_obj,
        'items': page_obj.object_list,
        'filter_query': query.urlencode(),
        'page_title': 'Modular Building Inventory',
    }
    return render(request, 'inventory/inventory_list.html', context)


def item_detail(request, slug):
    item = get_object_or_404(InventoryItem.objects.select_related('location'), slug=slug, is_active=True)
    site_settings = SiteSetting.load()

    structured_data = generate_structured_data(
        'Product', item.structured_data(site_settings), organization=site_settings.organization_data()
    )
    related_items = (
        InventoryItem.objects.filter(is_active=True, building_type=item.building_type)
        .exclude(pk=item.pk)[:3]
    )

    context = {
        'item': item,
        'related_items': related_items,
        'structured_data': structured_data,
        'page_title': item.title,
        'page_description': Truncator(strip_tags(item.description)).chars(160),
        'page_image': item.image_url,
    }
    return render(request, 'inventory/item_detail.html', context)


@staff_required
def api_manage_inventory(request):
    if not request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return JsonResponse({'error': 'Invalid request'}, status=400)

    search_query = request.GET.get('search', '')
    status_filter = request.GET.get('status', '')
    page_number = request.GET.get('page', 1)

    queryset = InventoryItem.objects.select_related('location').order_by('-created_at')
    if search_query:
        queryset = queryset.filter(Q(title__icontains=search_query) | Q(slug__icontains=search_query))
    if status_filter:
        queryset = queryset.filter(status=status_filter)

    paginator = Paginator(queryset, 50)
    try:
        page_obj = paginator.page(page_number)
    except EmptyPage:
        return JsonResponse({'items': [], 'pagination': {}})

    items = []
    for item in page_obj.object_list:
        items.append({
            'id': item.pk,
            'title': item.title,
            'slug': item.slug,
            'url': item.get_absolute_url(),
            'building_type': item.get_building_type_display(),
            'condition': item.get_condition_display(),
            'status': item.status,
            'size': item.size_label,
            'square_feet': item.square_feet,
            'monthly_rate': item.monthly_rate,
            'location': str(item.location) if item.location else None,
            'is_featured': item.is_featured,
            'is_active': item.is_active,
        })

    return JsonResponse({
        'items': items,
        'pagination': {
            'current_page': page_obj.number,
            'total_pages': paginator.num_pages,
            'has_next': page_obj.has_next(),
            'has_previous': page_obj.has_previous(),
        }
    })


@staff_required
def export_inventory_csv(request):
    """ Exports every inventory item to a CSV file. """
    queryset = InventoryItem.objects.all().select_related('location')
    dataset = InventoryItemResource().export(queryset)

    response = HttpResponse(dataset.csv, content_type='text/csv')
    filename = f"inventory-{datetime.date.today()}.csv"
    response['Content-Disposition'] = f'attachment; filename={filename}'
    logger.info(f"[export_inventory_csv] Exported {queryset.count()} items to {filename}")
    return response
