"""
Client for the remote audio recognition API.

Sends base64-encoded audio to the Shazam Core detect endpoint on RapidAPI
and hands back whatever the API answered, untouched.
"""

import base64
from pathlib import Path

import requests

from detect.service.config import get_config
from detect.service.constants import DEFAULT_RECOGNITION_HOST, DEFAULT_RECOGNITION_URL
from detect.service.exceptions import Unconfigured
from detect.service.upstream import upstream_errors


def encode_audio(path):
    """Read a whole file and return its base64 encoding as text."""
    return base64.b64encode(Path(path).read_bytes()).decode('ascii')


class FingerprintClient:
    """Submits audio to the recognition API using a single shared API key"""

    def __init__(
        self,
        api_key,
        url=DEFAULT_RECOGNITION_URL,
        host=DEFAULT_RECOGNITION_HOST,
        timeout=60,
    ):
        self.api_key = api_key
        self.url = url
        self.host = host
        self.timeout = timeout

    @classmethod
    def from_config(cls, config=None):
        config = config or get_config()
        return cls(
            api_key=config.api_key,
            url=config.recognition_url,
            host=config.recognition_host,
            timeout=config.recognition_timeout,
        )

    @property
    def headers(self):
        return {
            'content-type': 'application/json',
            'X-RapidAPI-Key': self.api_key,
            'X-RapidAPI-Host': self.host,
        }

    def detect(self, path, logger=None):
        """
        Identify the song in an audio file.

        Args:
            path: Local audio file
            logger: Optional callable(str) for logging

        Returns:
            The recognition payload (parsed JSON, or text if not JSON)

        Raises:
            Unconfigured: If no API key is set (nothing is read or sent)
            DetectTimeout: If the API does not answer within the timeout
            UpstreamError: If the API answers with an error status
        """

        def log(message):
            if logger:
                logger(message)

        if not self.api_key:
            raise Unconfigured()

        audio = encode_audio(path)
        log(f'Submitting {len(audio)} base64 chars to {self.host}')

        with upstream_errors('Recognition API'):
            response = requests.post(
                self.url,
                json={'audio': audio},
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()

        try:
            return response.json()
        except ValueError:
            return response.text
