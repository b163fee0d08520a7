"""WSGI entry point serving the widgetboard JSON API.

Point a WSGI server at `widgetboard.wsgi:application`; settings come from
`DJANGO_SETTINGS_MODULE` (default: `widgetboard.settings`).
"""

from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "widgetboard.settings")

application = get_wsgi_application()
