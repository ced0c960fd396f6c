# modularsite/app/core/context_processors.py
from .models import SiteSetting


def site_settings_context(request):
    """
    Returns the singleton SiteSetting object.
    """
    return {
        'site_settings': SiteSetting.load(),
    }
