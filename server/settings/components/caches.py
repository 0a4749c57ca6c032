"""Cache configuration.

The ``sessions`` alias holds bearer tokens (``auth_<token>`` -> user id)
and is backed by Redis through django-redis.
"""

from server.settings.components import config

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'sessions': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': config('REDIS_URL', default='redis://localhost:6379/0'),
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            'SOCKET_CONNECT_TIMEOUT': 5,
            'SOCKET_TIMEOUT': 5,
        },
        # Tokens live under bare auth_<token> keys
        'KEY_FUNCTION': 'server.apps.files.infrastructure.sessions.raw_cache_key',
    },
}

# Cache alias used by the session resolver
SESSION_CACHE_ALIAS = 'sessions'
