"""
Audio acquisition.

Turns a detection request (an uploaded file or a media URL) into a local
file path, enforcing the size ceiling. Downloaded files live in the scratch
directory only for the duration of the request: every exit path releases them.
"""

import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import requests

from detect.service.config import get_config
from detect.service.constants import (
    DOWNLOAD_URL_CANDIDATES,
    TEMP_FILE_PREFIX,
    TEMP_FILE_SUFFIX,
)
from detect.service.exceptions import (
    BadRequest,
    DetectError,
    NotFound,
    PayloadTooLarge,
    UpstreamError,
)
from detect.service.resolve import fetch_youtube, resolve
from detect.service.strategy import is_youtube_url
from detect.service.upstream import upstream_errors


@dataclass
class UploadedFile:
    """A file already written to disk by the upload handler"""

    path: Path
    size_bytes: int


@dataclass
class RemoteURL:
    """A media URL to resolve and download"""

    url: str


DetectionRequest = Union[UploadedFile, RemoteURL]


@dataclass
class DownloadedFileInfo:
    """Information about a downloaded file"""

    path: Path
    file_size: int
    source_url: str
    mime_type: Optional[str] = None


def safe_unlink(path, logger=None):
    """Delete a file if it exists. Deletion is best-effort; errors are ignored."""
    if not path:
        return
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        if logger:
            logger(f'Could not delete {path}: {e}')


class TempAudioFile:
    """
    Scoped owner of a scratch file.

    The file is deleted when the scope exits, whichever branch was taken.
    Files that are not owned (uploads) are left alone.
    """

    def __init__(self, path=None, owned=True, logger=None):
        self.path = Path(path) if path else None
        self.owned = owned
        self.logger = logger

    def release(self):
        if self.owned and self.path is not None:
            safe_unlink(self.path, logger=self.logger)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


def new_temp_path(upload_dir):
    """
    Reserve a uniquely named scratch file (song_<timestamp>.mp3).

    The file is created exclusively so concurrent requests landing on the same
    millisecond get distinct names.

    Args:
        upload_dir: Scratch directory (created if absent)

    Returns:
        Path: Path of the newly created, empty file
    """
    upload_dir = Path(upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    stamp = int(time.time() * 1000)
    attempt = 0
    while True:
        suffix = f'_{attempt}' if attempt else ''
        path = upload_dir / f'{TEMP_FILE_PREFIX}{stamp}{suffix}{TEMP_FILE_SUFFIX}'
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            attempt += 1
            continue
        os.close(fd)
        return path


def select_download_url(payload):
    """
    Pick the URL to download from a media payload.

    Audio is preferred over video; the first non-empty candidate across the
    known payload shapes wins.

    Args:
        payload: dict with 'result' and/or 'data' sections

    Returns:
        str | None
    """
    if not isinstance(payload, dict):
        return None

    for section, field in DOWNLOAD_URL_CANDIDATES:
        container = payload.get(section)
        if isinstance(container, dict) and container.get(field):
            return container[field]
    return None


def fetch_media_payload(url, config=None, logger=None):
    """
    Get a media payload for a URL.

    YouTube URLs go straight to the downloader and return its raw payload.
    Everything else goes through the resolver and is wrapped as
    ``{'success': True, 'result': descriptor}``.

    Raises:
        UpstreamError: (status 400) if the media could not be fetched
    """
    config = config or get_config()
    try:
        if is_youtube_url(url):
            return fetch_youtube(url, config, logger=logger)
        descriptor = resolve(url, config, logger=logger)
        return {'success': True, 'result': descriptor.as_dict()}
    except DetectError as e:
        raise UpstreamError('Failed to fetch media', status=400, details=e.message) from e


def download_direct(url, out_path, timeout=60, max_bytes=None, logger=None):
    """
    Download media file directly via HTTP.

    Args:
        url: Direct media URL
        out_path: Output file path (Path object or str)
        timeout: Request timeout in seconds
        max_bytes: Stop and raise PayloadTooLarge once the body exceeds this
        logger: Optional callable(str) for logging

    Returns:
        DownloadedFileInfo
    """

    def log(message):
        if logger:
            logger(message)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    log(f'Downloading from: {url}')
    log(f'Saving to: {out_path}')

    with upstream_errors('Media download'):
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        written = 0
        with open(out_path, 'wb') as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    written += len(chunk)
                    if max_bytes is not None and written > max_bytes:
                        response.close()
                        raise PayloadTooLarge(_too_large_message(max_bytes))
                    f.write(chunk)

    file_size = out_path.stat().st_size
    mime_type = response.headers.get('content-type', 'application/octet-stream')

    log(f'Downloaded {file_size} bytes')

    return DownloadedFileInfo(
        path=out_path, file_size=file_size, source_url=url, mime_type=mime_type
    )


def check_size(path, max_bytes):
    """
    Enforce the size ceiling.

    Raises:
        PayloadTooLarge: If the file is bigger than max_bytes
    """
    size = Path(path).stat().st_size
    if size > max_bytes:
        raise PayloadTooLarge(_too_large_message(max_bytes))
    return size


def _too_large_message(max_bytes):
    mib = 1024 * 1024
    if max_bytes % mib == 0:
        return f'File too large (limit {max_bytes // mib}MB)'
    return f'File too large (limit {max_bytes} bytes)'


@contextmanager
def acquire(request, config=None, logger=None):
    """
    Produce a local audio file for a detection request.

    Use as a context manager; the yielded path is valid inside the block and
    any scratch file created for it is deleted on exit, including when
    resolution, download or validation fails.

    Args:
        request: UploadedFile or RemoteURL
        config: Optional DetectConfig (defaults to current settings)
        logger: Optional callable(str) for logging

    Yields:
        Path: Local file to fingerprint

    Raises:
        BadRequest: Empty URL
        UpstreamError: Media could not be fetched
        NotFound: No downloadable URL in the payload
        PayloadTooLarge: File above the size ceiling
    """

    def log(message):
        if logger:
            logger(message)

    config = config or get_config()
    temp = TempAudioFile(owned=False, logger=log)

    try:
        if isinstance(request, UploadedFile):
            log(f'Using uploaded file: {request.path}')
            source = Path(request.path)
        else:
            media_url = (request.url or '').strip()
            if not media_url:
                raise BadRequest('Empty url')

            payload = fetch_media_payload(media_url, config, logger=log)
            download_url = select_download_url(payload)
            if not download_url:
                raise NotFound()

            temp = TempAudioFile(new_temp_path(config.upload_dir), logger=log)
            info = download_direct(
                download_url,
                temp.path,
                timeout=config.download_timeout,
                max_bytes=config.max_upload_bytes,
                logger=log,
            )
            log(f'Fetched {info.file_size} bytes ({info.mime_type}) from {info.source_url}')
            source = info.path

        check_size(source, config.max_upload_bytes)
        yield source
    finally:
        temp.release()
