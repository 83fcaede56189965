"""
ASGI config for the songdetect project.

Serve with an ASGI server so the async views share one event loop, e.g.:
    uvicorn songdetect.asgi:application
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'songdetect.settings')

application = get_asgi_application()
