import logging

from asgiref.sync import sync_to_async
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from detect.service.exceptions import BadRequest, DetectError, InternalError
from detect.service.pipeline import build_detection_request, run_detection
from detect.service.resolve import resolve

logger = logging.getLogger('detect')

LIVENESS_MESSAGE = 'Song-Detect API is up'


def error_response(error):
    """Render a DetectError as a JSON error response."""
    return JsonResponse(error.to_dict(), status=error.status)


def _unexpected(label, exc):
    logger.exception('%s: unexpected error', label)
    return error_response(InternalError(str(exc) or exc.__class__.__name__))


@require_GET
def home_view(request):
    """Liveness check."""
    return HttpResponse(LIVENESS_MESSAGE, content_type='text/plain')


@require_GET
async def media_view(request):
    """
    Resolve a media URL to its audio/video links.

    Params:
        url (required): YouTube, TikTok or Facebook URL

    Returns:
        JSON ``{'success': True, 'result': {audio, video, title, raw}}``
    """
    url = (request.GET.get('url') or '').strip()
    if not url:
        return error_response(BadRequest('Missing ?url parameter'))

    try:
        descriptor = await sync_to_async(resolve, thread_sensitive=False)(
            url, logger=logger.info
        )
    except DetectError as e:
        logger.error('Media error: %s', e.body or e.message)
        return error_response(e)
    except Exception as e:
        return _unexpected('Media error', e)

    return JsonResponse({'success': True, 'result': descriptor.as_dict()})


def _read_detection_form(request):
    """Parse the multipart form into a DetectionRequest (runs off the event loop)."""
    uploaded = request.FILES.get('file')
    file_path = uploaded.temporary_file_path() if uploaded is not None else None
    file_size = uploaded.size if uploaded is not None else None
    url = request.POST.get('url')
    return build_detection_request(file_path, file_size, url, logger=logger.warning)


@csrf_exempt
@require_POST
async def song_detect_view(request):
    """
    Identify a song from an uploaded file or a media URL.

    Form fields:
        file (optional): Audio/video file
        url (optional): Media URL, used only when no file is uploaded

    Returns:
        JSON ``{'success': True, 'detected': <recognition payload>}``
    """
    try:
        detection_request = await sync_to_async(_read_detection_form, thread_sensitive=False)(
            request
        )
        # Runs as one unit in a worker thread: if the client disconnects, the
        # thread still finishes and removes its scratch files.
        result = await sync_to_async(run_detection, thread_sensitive=False)(
            detection_request, logger=logger.info
        )
    except DetectError as e:
        logger.error('Song detect error: %s', e.body or e.message)
        return error_response(e)
    except Exception as e:
        return _unexpected('Song detect error', e)

    return JsonResponse(result)
