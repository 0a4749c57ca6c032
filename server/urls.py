"""Root URL configuration.

- /admin/ : Django admin
- /status, /stats : health checks
- /users, /connect, /disconnect : accounts and sessions
- /files : file records and contents
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('server.apps.core.urls')),
    path('', include('server.apps.users.urls')),
    path('', include('server.apps.files.urls')),
]
