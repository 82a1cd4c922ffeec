"""Django app configuration for API app."""

from django.apps import AppConfig


class ApiConfig(AppConfig):
    """Configuration for REST/JSON API app."""

    name = 'server.apps.api'
    label = 'api'
    verbose_name = 'API'
