# modularsite/app/seo/views.py
import json
import logging

from django.conf import settings
from django.contrib import messages
from django.core.paginator import Paginator, EmptyPage
from django.db.models import Q
from django.http import HttpResponse, JsonResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from core.views import staff_required
from .forms import PageMetadataForm, RedirectForm, RobotsTxtForm
from .models import PageMetadata, Redirect, SEOSettings
from .robots import DEFAULT_ROBOTS_RULES, generate_robots_txt, validate_robots_txt
from .validation import evaluate, SEVERITY_WEIGHTS

logger = logging.getLogger(__name__)


def _is_ajax(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def _request_data(request):
    """
    Returns the submitted data, supporting both JSON bodies and form posts.
    Raises ValueError for a JSON body that can't be decoded into an object.
    """
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except RecursionError:
            raise ValueError("JSON body is nested too deeply.")
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object.")
        return data
    return request.POST


def _sitemap_urls():
    return [f"{settings.SITE_URL.rstrip('/')}{reverse('sitemap')}"]


def default_robots_txt():
    return generate_robots_txt(
        DEFAULT_ROBOTS_RULES,
        sitemaps=_sitemap_urls(),
        header="robots.txt for modular building rentals\nGenerated default; edit it in the SEO manager.",
    )


def _serialize_metadata(metadata):
    return {
        'id': metadata.id,
        'page_name': metadata.page_name,
        'page_path': metadata.page_path,
        'page_type': metadata.page_type,
        'seo_title': metadata.seo_title,
        'seo_description': metadata.seo_description,
        'focus_keyword': metadata.focus_keyword,
        'seo_keywords': metadata.seo_keywords,
        'canonical_url': metadata.canonical_url,
        'robots_index': metadata.robots_index,
        'robots_follow': metadata.robots_follow,
        'robots_nosnippet': metadata.robots_nosnippet,
        'og_title': metadata.og_title,
        'og_description': metadata.og_description,
        'og_image': metadata.og_image,
        'og_image_alt': metadata.og_image_alt,
        'twitter_title': metadata.twitter_title,
        'twitter_description': metadata.twitter_description,
        'twitter_image': metadata.twitter_image,
        'twitter_image_alt': metadata.twitter_image_alt,
        'structured_data_type': metadata.structured_data_type,
        'custom_json_ld': metadata.custom_json_ld,
        'is_active': metadata.is_active,
        'optimization_score': metadata.optimization_score,
        'update_url': reverse('seo:manage_seo_edit', args=[metadata.id]),
        'delete_url': reverse('seo:manage_seo_delete', args=[metadata.id]),
    }


def _save_metadata(request, form, success_message):
    """Shared POST handling for create and edit."""
    if _is_ajax(request):
        if form.is_valid():
            metadata = form.save()
            logger.info(f"Saved SEO metadata for {metadata.page_path} (score {metadata.optimization_score})")
            return JsonResponse({
                'success': True,
                'message': success_message,
                'report': form.report.to_dict(),
            })
        return JsonResponse({
            'success': False,
            'errors': form.errors,
            'report': form.report.to_dict() if form.report else None,
        }, status=400)

    if form.is_valid():
        form.save()
        messages.success(request, success_message)
        return redirect(reverse('core:manage_dashboard') + '#seo')
    return None


@staff_required
def manage_seo_create(request):
    if request.method == 'POST':
        try:
            data = _request_data(request)
        except ValueError:
            return JsonResponse({'success': False, 'error': 'Invalid JSON body.'}, status=400)

        form = PageMetadataForm(data)
        response = _save_metadata(request, form, "SEO settings created successfully.")
        if response:
            return response
    else:
        form = PageMetadataForm(initial={'page_path': request.GET.get('path', '')})

    context = {
        'form': form,
        'title': 'Create New SEO Setting',
        'report': form.report or evaluate(form.initial),
        'is_subpage': True,
    }
    return render(request, 'seo/manage_seo_form.html', context)


@staff_required
def manage_seo_edit(request, meta_id):
    metadata = get_object_or_404(PageMetadata, pk=meta_id)

    # Handle AJAX GET to fetch data for the modal
    if request.method == 'GET' and _is_ajax(request):
        data = _serialize_metadata(metadata)
        data['report'] = metadata.validate().to_dict()
        return JsonResponse(data)

    if request.method == 'POST':
        try:
            data = _request_data(request)
        except ValueError:
            return JsonResponse({'success': False, 'error': 'Invalid JSON body.'}, status=400)

        form = PageMetadataForm(data, instance=metadata)
        response = _save_metadata(request, form, f"SEO settings for '{metadata.page_name}' updated.")
        if response:
            return response
    else:
        form = PageMetadataForm(instance=metadata)

    context = {
        'form': form,
        'title': f"Editing SEO for: {metadata.page_name}",
        'metadata': metadata,
        'report': form.report or metadata.validate(),
        'is_subpage': True,
    }
    return render(request, 'seo/manage_seo_form.html', context)


@staff_required
@require_POST
def manage_seo_delete(request, meta_id):
    metadata = get_object_or_404(PageMetadata, pk=meta_id)
    page_name = metadata.page_name
    metadata.delete()
    if _is_ajax(request):
        return JsonResponse({'success': True})
    messages.success(request, f"SEO settings for '{page_name}' deleted.")
    return redirect(reverse('core:manage_dashboard') + '#seo')


@staff_required
@require_GET
def api_manage_seo(request):
    if not _is_ajax(request):
        return JsonResponse({'error': 'Invalid request'}, status=400)

    search_query = request.GET.get('search', '')
    page_type = request.GET.get('page_type', '')
    only_invalid = request.GET.get('invalid') == '1'
    page_number = request.GET.get('page', 1)

    queryset = PageMetadata.objects.all().order_by('page_path')
    if search_query:
        queryset = queryset.filter(
            Q(page_path__icontains=search_query) | Q(page_name__icontains=search_query) | Q(seo_title__icontains=search_query)
        )
    if page_type:
        queryset = queryset.filter(page_type=page_type)

    items = []
    for metadata in queryset:
        report = metadata.validate()
        if only_invalid and report.is_valid:
            continue
        items.append({
            'id': metadata.id,
            'page_name': metadata.page_name,
            'page_path': metadata.page_path,
            'page_type': metadata.page_type,
            'is_active': metadata.is_active,
            'score': report.score,
            'is_valid': report.is_valid,
            'issue_count': len(report.issues),
            'warning_count': len(report.warnings),
            'edit_url': reverse('seo:manage_seo_edit', args=[metadata.id]),
        })

    paginator = Paginator(items, 50)
    try:
        page_obj = paginator.page(page_number)
    except EmptyPage:
        return JsonResponse({'items': [], 'pagination': {}})

    return JsonResponse({
        'items': list(page_obj.object_list),
        'pagination': {
            'current_page': page_obj.number,
            'total_pages': paginator.num_pages,
            'has_next': page_obj.has_next(),
            'has_previous': page_obj.has_previous(),
        }
    })


@staff_required
@require_POST
def api_validate_seo(request):
    """Live feedback for the editor: validates the submitted record without saving."""
    try:
        data = _request_data(request)
    except ValueError:
        return JsonResponse({'error': 'Invalid JSON body.'}, status=400)

    report = evaluate(data)
    payload = report.to_dict()
    payload['weights'] = SEVERITY_WEIGHTS
    return JsonResponse(payload)


@require_GET
def robots_txt(request):
    content = SEOSettings.load().robots_txt or default_robots_txt()
    response = HttpResponse(content, content_type='text/plain; charset=utf-8')
    response['Cache-Control'] = 'public, max-age=3600'
    return response


@staff_required
def manage_robots(request):
    seo_settings = SEOSettings.load()

    if request.method == 'POST':
        form = RobotsTxtForm(request.POST)
        if form.is_valid():
            seo_settings.robots_txt = form.cleaned_data['content']
            seo_settings.save()
            logger.info(f"robots.txt updated by {request.user}")
            if seo_settings.robots_txt:
                message = "Robots.txt saved successfully."
            else:
                message = "Robots.txt reset to the generated default."
            if _is_ajax(request):
                return JsonResponse({'success': True, 'message': message, 'is_default': not seo_settings.robots_txt})
            messages.success(request, message)
            return redirect('seo:manage_robots')
        if _is_ajax(request):
            return JsonResponse({'success': False, 'errors': form.errors}, status=400)
    else:
        form = RobotsTxtForm(initial={'content': seo_settings.robots_txt or default_robots_txt()})

    if _is_ajax(request):
        return JsonResponse({'content': seo_settings.robots_txt or default_robots_txt(),
                             'is_default': not seo_settings.robots_txt})

    context = {
        'form': form,
        'title': 'Robots.txt Management',
        'is_default': not seo_settings.robots_txt,
        'is_subpage': True,
    }
    return render(request, 'seo/manage_robots.html', context)


@staff_required
@require_GET
def api_robots_preview(request):
    """The generated default, for the editor's reset button."""
    content = default_robots_txt()
    return JsonResponse({'content': content, 'errors': validate_robots_txt(content)})


@staff_required
@require_POST
def api_save_redirect(request, redirect_id=None):
    """Create or update a redirect."""
    try:
        data = _request_data(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON body.'}, status=400)

    if redirect_id:
        instance = get_object_or_404(Redirect, pk=redirect_id)
        form = RedirectForm(data, instance=instance)
    else:
        form = RedirectForm(data)

    if form.is_valid():
        saved = form.save()
        logger.info(f"Saved redirect {saved}")
        return JsonResponse({'success': True, 'id': saved.id})
    return JsonResponse({'success': False, 'errors': form.errors}, status=400)


@staff_required
@require_POST
def manage_redirect_delete(request, redirect_id):
    instance = get_object_or_404(Redirect, pk=redirect_id)
    instance.delete()
    return JsonResponse({'success': True})
