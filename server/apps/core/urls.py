"""URL routes for health and statistics."""

from django.urls import path

from server.apps.core import views

app_name = 'core'

urlpatterns = [
    path('status', views.status, name='status'),
    path('stats', views.stats, name='stats'),
]
