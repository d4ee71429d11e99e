"""WSGI config for the CityLocal 101 API."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "citylocal.settings")

application = get_wsgi_application()
