"""ASGI config for the CityLocal 101 API."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "citylocal.settings")

application = get_asgi_application()
