"""Django settings for the files manager project.

Settings are split into components under ``server.settings.components``
and combined here. Values come from the environment (or a ``.env`` file)
through ``python-decouple``.
"""

import django_stubs_ext

from server.settings.components.common import *  # noqa: F401, F403, WPS347
from server.settings.components.caches import *  # noqa: F401, F403, WPS347
from server.settings.components.files import *  # noqa: F401, F403, WPS347
from server.settings.components.logging import *  # noqa: F401, F403, WPS347

# Allows generic subscripts such as admin.ModelAdmin[File] at runtime
django_stubs_ext.monkeypatch()
