"""
Error taxonomy for the detection service.

Every failure raised by the service layer is a DetectError subclass carrying
the HTTP status it maps to. Views and management commands turn these into
``{'success': False, 'error': ...}`` payloads.
"""


class DetectError(Exception):
    """Base class for service errors that map onto an HTTP response."""

    status = 500
    default_message = 'Internal error'

    def __init__(self, message=None, status=None, details=None, body=None):
        """
        Args:
            message: Human readable error message
            status: Override the class HTTP status for this instance
            details: Optional extra diagnostic information
            body: Upstream error body, forwarded as the ``error`` field when present
        """
        self.message = message or self.default_message
        if status is not None:
            self.status = status
        self.details = details
        self.body = body
        super().__init__(self.message)

    def to_dict(self):
        """Serialize to the JSON error payload returned to clients."""
        payload = {
            'success': False,
            'error': self.body if self.body not in (None, '') else self.message,
        }
        if self.details is not None:
            payload['details'] = self.details
        return payload


class BadRequest(DetectError):
    """Missing or invalid client input"""

    status = 400
    default_message = 'Bad request'


class UnsupportedPlatform(DetectError):
    """The URL does not belong to any platform we know how to resolve"""

    status = 400
    default_message = 'Unsupported URL or platform'


class UpstreamError(DetectError):
    """A downstream service failed or answered with something unusable"""

    status = 500
    default_message = 'Upstream service error'


class NotFound(DetectError):
    """No downloadable media URL could be extracted"""

    status = 404
    default_message = 'No downloadable audio/video found.'


class PayloadTooLarge(DetectError):
    status = 413
    default_message = 'File too large'


class Unconfigured(DetectError):
    """A required secret is not configured"""

    status = 500
    default_message = 'RAPIDAPI_KEY not configured'


class DetectTimeout(DetectError):
    """An outbound call exceeded its time limit. Never retried."""

    status = 500
    default_message = 'Upstream request timed out'


class InternalError(DetectError):
    status = 500
    default_message = 'Internal error'
