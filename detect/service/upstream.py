"""
Helpers shared by every outbound HTTP call.

Translates requests exceptions into the service error taxonomy while keeping
the upstream response body around for diagnostics.
"""

from contextlib import contextmanager

import requests

from detect.service.exceptions import DetectTimeout, UpstreamError


def error_body(exc):
    """
    Best-effort extraction of an upstream error body.

    Args:
        exc: Exception raised by requests

    Returns:
        Parsed JSON body, response text, or the exception message
    """
    response = getattr(exc, 'response', None)
    if response is not None:
        try:
            return response.json()
        except ValueError:
            pass
        text = getattr(response, 'text', '')
        if text:
            return text
    return str(exc)


@contextmanager
def upstream_errors(service):
    """
    Wrap a block of outbound requests calls.

    Args:
        service: Name of the upstream, used in error messages

    Raises:
        DetectTimeout: If the call timed out
        UpstreamError: For any other requests failure, including non-2xx responses
    """
    try:
        yield
    except requests.Timeout as e:
        raise DetectTimeout(f'{service} timed out', details=str(e)) from e
    except requests.RequestException as e:
        raise UpstreamError(f'{service} request failed: {e}', body=error_body(e)) from e


def parse_json(response, service):
    """Decode a JSON response body, raising UpstreamError if it is malformed."""
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(
            f'Malformed response from {service}',
            body=getattr(response, 'text', None),
        ) from e
