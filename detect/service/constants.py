"""
Platform and limit constants.

Centralized definitions of supported platforms, URL markers and size limits.
"""

PLATFORM_YOUTUBE = 'youtube'
PLATFORM_TIKTOK = 'tiktok'
PLATFORM_FACEBOOK = 'facebook'

# Substrings identifying each platform, checked in this order (first match wins)
PLATFORM_MARKERS = [
    (PLATFORM_YOUTUBE, ('youtube.com', 'youtu.be')),
    (PLATFORM_TIKTOK, ('tiktok.com',)),
    (PLATFORM_FACEBOOK, ('facebook.com', 'fb.watch')),
]

# 8 MB ceiling for audio sent to the recognition API
MAX_UPLOAD_BYTES = 8 * 1024 * 1024

# Scratch files created for downloaded media
TEMP_FILE_PREFIX = 'song_'
TEMP_FILE_SUFFIX = '.mp3'

# Download target lookup order: audio before video, then generic urls
DOWNLOAD_URL_CANDIDATES = [
    ('result', 'audio'),
    ('result', 'video'),
    ('data', 'audio'),
    ('data', 'video'),
    ('data', 'url'),
    ('result', 'url'),
]

BROWSER_USER_AGENT = 'Mozilla/5.0'

DEFAULT_YTDOWN_URL = 'https://nayan-video-downloader.vercel.app/ytdown'
DEFAULT_TIKWM_URL = 'https://tikwm.com/api'
DEFAULT_FDOWN_URL = 'https://fdown.net/download.php'
DEFAULT_FDOWN_REFERER = 'https://fdown.net/'
DEFAULT_RECOGNITION_URL = 'https://shazam-core.p.rapidapi.com/v1/tracks/detect'
DEFAULT_RECOGNITION_HOST = 'shazam-core.p.rapidapi.com'
