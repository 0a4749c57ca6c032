"""Django app configuration for core app."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for core app (health checks, server command)."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.core'
    verbose_name = 'Core'
