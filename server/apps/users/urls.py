"""URL routes for users and sessions."""

from django.urls import path

from server.apps.users import views

app_name = 'users'

urlpatterns = [
    path('users', views.users_collection, name='collection'),
    path('users/me', views.users_me, name='me'),
    path('connect', views.connect, name='connect'),
    path('disconnect', views.disconnect, name='disconnect'),
]
