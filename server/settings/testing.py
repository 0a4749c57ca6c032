"""Settings used by the test suite."""

from server.settings import *  # noqa: F401, F403, WPS347

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'default',
    },
    'sessions': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'sessions',
        'KEY_FUNCTION': 'server.apps.files.infrastructure.sessions.raw_cache_key',
    },
}

# Fast hashing keeps user fixtures cheap
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Let pytest's caplog see application records
LOGGING['loggers']['server']['propagate'] = True  # noqa: F405
