"""
Django settings for the songdetect project.

Values come from the environment (optionally a .env file in the project root).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from detect.service.constants import (
    DEFAULT_FDOWN_URL,
    DEFAULT_RECOGNITION_HOST,
    DEFAULT_RECOGNITION_URL,
    DEFAULT_TIKWM_URL,
    DEFAULT_YTDOWN_URL,
    MAX_UPLOAD_BYTES,
)

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-songdetect-dev-key')

DEBUG = _env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = [h.strip() for h in os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',') if h.strip()]

INSTALLED_APPS = [
    'detect',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'songdetect.urls'

WSGI_APPLICATION = 'songdetect.wsgi.application'
ASGI_APPLICATION = 'songdetect.asgi.application'

# No models: detection results are never persisted
DATABASES = {}

USE_TZ = True
TIME_ZONE = 'UTC'

# Song detect settings
RAPIDAPI_KEY = os.environ.get('RAPIDAPI_KEY', '')

SONGDETECT_UPLOAD_DIR = Path(os.environ.get('SONGDETECT_UPLOAD_DIR', str(BASE_DIR / 'uploads')))
SONGDETECT_MAX_UPLOAD_BYTES = int(os.environ.get('SONGDETECT_MAX_UPLOAD_BYTES', MAX_UPLOAD_BYTES))

SONGDETECT_YTDOWN_URL = os.environ.get('SONGDETECT_YTDOWN_URL', DEFAULT_YTDOWN_URL)
SONGDETECT_TIKWM_URL = os.environ.get('SONGDETECT_TIKWM_URL', DEFAULT_TIKWM_URL)
SONGDETECT_FDOWN_URL = os.environ.get('SONGDETECT_FDOWN_URL', DEFAULT_FDOWN_URL)
SONGDETECT_RECOGNITION_URL = os.environ.get('SONGDETECT_RECOGNITION_URL', DEFAULT_RECOGNITION_URL)
SONGDETECT_RECOGNITION_HOST = os.environ.get(
    'SONGDETECT_RECOGNITION_HOST', DEFAULT_RECOGNITION_HOST
)

SONGDETECT_RESOLVE_TIMEOUT = int(os.environ.get('SONGDETECT_RESOLVE_TIMEOUT', '30'))
SONGDETECT_DOWNLOAD_TIMEOUT = int(os.environ.get('SONGDETECT_DOWNLOAD_TIMEOUT', '60'))
SONGDETECT_RECOGNITION_TIMEOUT = int(os.environ.get('SONGDETECT_RECOGNITION_TIMEOUT', '60'))

# Uploads always go to disk, in the scratch directory, so the service gets a path
FILE_UPLOAD_HANDLERS = ['django.core.files.uploadhandler.TemporaryFileUploadHandler']
FILE_UPLOAD_TEMP_DIR = str(SONGDETECT_UPLOAD_DIR)
# Room for the 8 MB file plus multipart overhead; the file size itself is checked by the service
DATA_UPLOAD_MAX_MEMORY_SIZE = 2 * SONGDETECT_MAX_UPLOAD_BYTES

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'detect': {
            'handlers': ['console'],
            'level': os.environ.get('SONGDETECT_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
