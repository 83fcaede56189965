"""
Media URL resolution.

Maps a source URL to a normalized MediaDescriptor by calling the upstream
downloader service for its platform and extracting fields from that
service's own response shape.
"""

from dataclasses import dataclass
from typing import Any, Optional

import requests

from detect.html_extractor import extract_first_mp4_link
from detect.service.config import get_config
from detect.service.constants import (
    BROWSER_USER_AGENT,
    DEFAULT_FDOWN_REFERER,
    PLATFORM_FACEBOOK,
    PLATFORM_TIKTOK,
    PLATFORM_YOUTUBE,
)
from detect.service.exceptions import UnsupportedPlatform, UpstreamError
from detect.service.strategy import choose_platform
from detect.service.upstream import parse_json, upstream_errors


@dataclass
class MediaDescriptor:
    """Normalized result of resolving a media URL"""

    audio: Optional[str] = None
    video: Optional[str] = None
    title: Optional[str] = None
    raw: Any = None

    @property
    def has_media(self):
        return bool(self.audio or self.video)

    def as_dict(self):
        return {
            'audio': self.audio,
            'video': self.video,
            'title': self.title,
            'raw': self.raw,
        }


def _as_dict(value):
    return value if isinstance(value, dict) else {}


def _first_url(items):
    """Return the url of the first entry of a list of strings or {'url': ...} dicts."""
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    if isinstance(first, dict):
        return first.get('url') or None
    return first or None


def fetch_youtube(url, config=None, logger=None):
    """
    Fetch the raw downloader payload for a YouTube URL.

    Args:
        url: YouTube video URL
        config: Optional DetectConfig (defaults to current settings)
        logger: Optional callable(str) for logging

    Returns:
        dict: Raw JSON payload from the downloader

    Raises:
        UpstreamError, DetectTimeout
    """

    def log(message):
        if logger:
            logger(message)

    config = config or get_config()
    log(f'Requesting YouTube downloader: {url}')

    with upstream_errors('YouTube downloader'):
        response = requests.get(
            config.ytdown_url, params={'url': url}, timeout=config.resolve_timeout
        )
        response.raise_for_status()

    return parse_json(response, 'YouTube downloader')


def extract_youtube(payload):
    """Normalize a YouTube downloader payload. Missing fields become None."""
    data = _as_dict(payload.get('data') if isinstance(payload, dict) else None)
    if not data:
        data = _as_dict(payload)
    result = _as_dict(data.get('result'))

    return MediaDescriptor(
        audio=data.get('audio') or _first_url(data.get('audios')),
        video=data.get('video') or _first_url(data.get('videos')) or result.get('video') or None,
        title=data.get('title') or result.get('title') or None,
        raw=payload,
    )


def extract_tiktok(payload):
    """
    Normalize a TikTok API payload.

    Raises:
        UpstreamError: If the payload is empty or reports a non-zero code
    """
    if not isinstance(payload, dict) or payload.get('code') != 0:
        raise UpstreamError('Failed to fetch TikTok info', status=400, details=payload)

    data = _as_dict(payload.get('data'))
    return MediaDescriptor(
        audio=data.get('music') or None,
        video=data.get('play') or None,
        title=data.get('title') or None,
        raw=payload,
    )


def extract_facebook(html_content):
    """Normalize a scraped Facebook download page. Audio is never available."""
    return MediaDescriptor(
        audio=None,
        video=extract_first_mp4_link(html_content),
        title=None,
        raw=html_content,
    )


def _resolve_youtube(url, config, logger=None):
    return extract_youtube(fetch_youtube(url, config, logger=logger))


def _resolve_tiktok(url, config, logger=None):
    if logger:
        logger(f'Requesting TikTok API: {url}')

    with upstream_errors('TikTok API'):
        response = requests.get(
            config.tikwm_url, params={'url': url, 'hd': 1}, timeout=config.resolve_timeout
        )
        response.raise_for_status()

    return extract_tiktok(parse_json(response, 'TikTok API'))


def _resolve_facebook(url, config, logger=None):
    if logger:
        logger(f'Scraping Facebook download page: {url}')

    with upstream_errors('Facebook scraper'):
        response = requests.post(
            config.fdown_url,
            data={'URLz': url},
            headers={
                'Content-Type': 'application/x-www-form-urlencoded',
                'Referer': DEFAULT_FDOWN_REFERER,
                'User-Agent': BROWSER_USER_AGENT,
            },
            timeout=config.resolve_timeout,
        )
        response.raise_for_status()

    return extract_facebook(response.text or '')


RESOLVERS = {
    PLATFORM_YOUTUBE: _resolve_youtube,
    PLATFORM_TIKTOK: _resolve_tiktok,
    PLATFORM_FACEBOOK: _resolve_facebook,
}


def resolve(url, config=None, logger=None):
    """
    Resolve a media URL to a MediaDescriptor.

    Args:
        url: Source URL (YouTube, TikTok or Facebook)
        config: Optional DetectConfig (defaults to current settings)
        logger: Optional callable(str) for logging

    Returns:
        MediaDescriptor

    Raises:
        UnsupportedPlatform: If the URL matches no known platform (no network call is made)
        UpstreamError: If the upstream service fails or rejects the URL
        DetectTimeout: If the upstream call times out
    """
    platform = choose_platform(url)
    if platform is None:
        raise UnsupportedPlatform()

    config = config or get_config()
    descriptor = RESOLVERS[platform](url, config, logger=logger)

    if logger:
        logger(
            f'Resolved {platform}: audio={bool(descriptor.audio)} '
            f'video={bool(descriptor.video)} title={descriptor.title!r}'
        )
    return descriptor
