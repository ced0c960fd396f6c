# modularsite/app/locations/apps.py
from django.apps import AppConfig


class LocationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'locations'

    def ready(self):
        # This imports the signals so they are registered
        import locations.signals
