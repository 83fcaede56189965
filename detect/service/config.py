"""
Configuration adapter for detection settings.

Centralizes access to Django settings and environment variables,
ensuring consistent configuration across CLI and web app.
"""

from dataclasses import dataclass
from pathlib import Path

from django.conf import settings

from detect.service.constants import MAX_UPLOAD_BYTES


@dataclass(frozen=True)
class DetectConfig:
    """Immutable snapshot of the settings the service layer needs"""

    api_key: str
    recognition_url: str
    recognition_host: str
    ytdown_url: str
    tikwm_url: str
    fdown_url: str
    upload_dir: Path
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    resolve_timeout: int = 30
    download_timeout: int = 60
    recognition_timeout: int = 60

    @property
    def is_configured(self):
        """True when the recognition API key is set"""
        return bool(self.api_key)

    @classmethod
    def from_settings(cls):
        """Build a config from the active Django settings."""
        return cls(
            api_key=settings.RAPIDAPI_KEY or '',
            recognition_url=settings.SONGDETECT_RECOGNITION_URL,
            recognition_host=settings.SONGDETECT_RECOGNITION_HOST,
            ytdown_url=settings.SONGDETECT_YTDOWN_URL,
            tikwm_url=settings.SONGDETECT_TIKWM_URL,
            fdown_url=settings.SONGDETECT_FDOWN_URL,
            upload_dir=Path(settings.SONGDETECT_UPLOAD_DIR),
            max_upload_bytes=settings.SONGDETECT_MAX_UPLOAD_BYTES,
            resolve_timeout=settings.SONGDETECT_RESOLVE_TIMEOUT,
            download_timeout=settings.SONGDETECT_DOWNLOAD_TIMEOUT,
            recognition_timeout=settings.SONGDETECT_RECOGNITION_TIMEOUT,
        )


def get_config():
    """Get the current detection config"""
    return DetectConfig.from_settings()


def get_upload_dir():
    """Get the scratch directory path for uploads and downloads"""
    return Path(settings.SONGDETECT_UPLOAD_DIR)


def ensure_upload_dir():
    """
    Create the scratch directory if it does not exist.

    Returns:
        Path: The scratch directory
    """
    upload_dir = get_upload_dir()
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir
