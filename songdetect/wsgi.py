"""
WSGI config for the songdetect project.

The async views still work under WSGI, one request per worker thread.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'songdetect.settings')

application = get_wsgi_application()
