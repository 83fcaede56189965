"""
Song detection pipeline.

Runs one detection request through its stages:

    RECEIVED -> ACQUIRING -> VALIDATING_SIZE -> ENCODING -> DETECTING -> RESPONDING

Cleanup of scratch files happens on exit from any stage. The whole pipeline
is synchronous so callers in async code can run it as a single offloaded unit
that finishes (and cleans up) even if the caller goes away.
"""

from detect.service.config import get_config
from detect.service.download import RemoteURL, UploadedFile, acquire
from detect.service.exceptions import BadRequest, Unconfigured
from detect.service.fingerprint import FingerprintClient

STAGE_RECEIVED = 'received'
STAGE_ACQUIRING = 'acquiring'
STAGE_VALIDATING_SIZE = 'validating_size'
STAGE_ENCODING = 'encoding'
STAGE_DETECTING = 'detecting'
STAGE_RESPONDING = 'responding'
STAGE_CLEANUP = 'cleanup'

MISSING_INPUT_MESSAGE = "Upload a file or provide url in 'url' field."


def build_detection_request(file_path=None, file_size=None, url=None, logger=None):
    """
    Build a DetectionRequest from form inputs.

    An uploaded file takes precedence over a url when both are given; the url
    is ignored and the choice is logged.

    Args:
        file_path: Path of an uploaded file already on disk, if any
        file_size: Size of the uploaded file in bytes
        url: Media URL from the form, if any (None means the field was absent)
        logger: Optional callable(str) for logging

    Returns:
        UploadedFile | RemoteURL

    Raises:
        BadRequest: If neither input is present, or the url is blank
    """
    if file_path:
        if url and logger:
            logger(f'Both file and url provided; using the file and ignoring url {url!r}')
        return UploadedFile(path=file_path, size_bytes=file_size or 0)

    if url is None or url == '':
        raise BadRequest(MISSING_INPUT_MESSAGE)

    url = str(url).strip()
    if not url:
        raise BadRequest('Empty url')
    return RemoteURL(url=url)


def run_detection(request, config=None, client=None, logger=None):
    """
    Acquire audio for a request and send it to the recognition API.

    Args:
        request: UploadedFile or RemoteURL
        config: Optional DetectConfig (defaults to current settings)
        client: Optional FingerprintClient (defaults to one built from config)
        logger: Optional callable(str) for logging

    Returns:
        dict: ``{'success': True, 'detected': <recognition payload>}``

    Raises:
        DetectError subclasses for every expected failure
    """

    def log(message):
        if logger:
            logger(message)

    config = config or get_config()
    client = client or FingerprintClient.from_config(config)

    log(f'Stage: {STAGE_RECEIVED} ({type(request).__name__})')
    # Nothing is downloaded without a key; uploads are size-checked first
    if isinstance(request, RemoteURL) and not client.api_key:
        raise Unconfigured()

    try:
        log(f'Stage: {STAGE_ACQUIRING}')
        with acquire(request, config, logger=logger) as audio_path:
            log(f'Stage: {STAGE_VALIDATING_SIZE} passed for {audio_path.name}')
            if not client.api_key:
                raise Unconfigured()
            log(f'Stage: {STAGE_ENCODING} + {STAGE_DETECTING}')
            detected = client.detect(audio_path, logger=logger)
    finally:
        log(f'Stage: {STAGE_CLEANUP}')

    log(f'Stage: {STAGE_RESPONDING}')
    return {'success': True, 'detected': detected}
