# modularsite/app/seo/middleware.py
import logging

from django.db.models import F
from django.http import HttpResponsePermanentRedirect, HttpResponseRedirect

from .models import Redirect

logger = logging.getLogger(__name__)

SKIPPED_PREFIXES = ('/admin/', '/static/', '/media/')


class RedirectMiddleware:
    """Serves the redirects managed in the SEO screens before URL resolution."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith(SKIPPED_PREFIXES):
            match = Redirect.objects.filter(source_path=request.path, is_active=True).first()
            if match:
                Redirect.objects.filter(pk=match.pk).update(hit_count=F('hit_count') + 1)
                logger.debug(f"Redirecting {request.path} -> {match.destination_path}")
                if match.is_permanent:
                    return HttpResponsePermanentRedirect(match.destination_path)
                return HttpResponseRedirect(match.destination_path)
        return self.get_response(request)
