"""
System checks for song detect configuration.

A missing RAPIDAPI_KEY is only reported here; requests fail with
Unconfigured when detection is actually attempted.
"""

from django.conf import settings
from django.core.checks import Tags, Warning, register


@register(Tags.compatibility)
def check_recognition_key(app_configs, **kwargs):
    if settings.RAPIDAPI_KEY:
        return []
    return [
        Warning(
            'RAPIDAPI_KEY is not set.',
            hint='Set RAPIDAPI_KEY in the environment or .env; /song-detect will answer 500 until then.',
            id='detect.W001',
        )
    ]
