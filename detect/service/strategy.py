"""
Platform detection.

Determines which upstream service resolves a given media URL.
"""

from detect.service.constants import PLATFORM_MARKERS, PLATFORM_YOUTUBE


def choose_platform(url):
    """
    Determine the platform for a media URL.

    Matching is a plain substring test, checked in a fixed order; the first
    platform with a matching marker wins.

    Args:
        url: The source URL

    Returns:
        str: 'youtube', 'tiktok' or 'facebook', or None if unsupported
    """
    if not url:
        return None

    for platform, markers in PLATFORM_MARKERS:
        if any(marker in url for marker in markers):
            return platform

    return None


def is_youtube_url(url):
    """Check if a URL is a YouTube URL."""
    return choose_platform(url) == PLATFORM_YOUTUBE
