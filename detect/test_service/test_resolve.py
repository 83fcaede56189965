"""
Tests for service/resolve.py
"""

from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase, override_settings

from detect.service.exceptions import DetectTimeout, UnsupportedPlatform, UpstreamError
from detect.service.resolve import (
    MediaDescriptor,
    extract_facebook,
    extract_tiktok,
    extract_youtube,
    resolve,
)


def _json_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


class MediaDescriptorTest(SimpleTestCase):
    def test_defaults(self):
        """Test MediaDescriptor dataclass creation"""
        descriptor = MediaDescriptor()
        self.assertIsNone(descriptor.audio)
        self.assertIsNone(descriptor.video)
        self.assertIsNone(descriptor.title)
        self.assertFalse(descriptor.has_media)

    def test_as_dict(self):
        descriptor = MediaDescriptor(audio='a.mp3', title='t', raw={'x': 1})
        self.assertEqual(
            descriptor.as_dict(),
            {'audio': 'a.mp3', 'video': None, 'title': 't', 'raw': {'x': 1}},
        )
        self.assertTrue(descriptor.has_media)


class ExtractYoutubeTest(SimpleTestCase):
    """Tests for the YouTube field fallback chains"""

    def test_direct_fields(self):
        payload = {'data': {'audio': 'a.mp3', 'video': 'v.mp4', 'title': 'Song'}}
        descriptor = extract_youtube(payload)
        self.assertEqual(descriptor.audio, 'a.mp3')
        self.assertEqual(descriptor.video, 'v.mp4')
        self.assertEqual(descriptor.title, 'Song')
        self.assertEqual(descriptor.raw, payload)

    def test_list_fallbacks(self):
        payload = {
            'data': {
                'audios': [{'url': 'first.m4a'}, {'url': 'second.m4a'}],
                'videos': [{'url': 'first.mp4'}],
            }
        }
        descriptor = extract_youtube(payload)
        self.assertEqual(descriptor.audio, 'first.m4a')
        self.assertEqual(descriptor.video, 'first.mp4')

    def test_result_fallback(self):
        payload = {'data': {'result': {'video': 'r.mp4', 'title': 'From result'}}}
        descriptor = extract_youtube(payload)
        self.assertIsNone(descriptor.audio)
        self.assertEqual(descriptor.video, 'r.mp4')
        self.assertEqual(descriptor.title, 'From result')

    def test_payload_without_data_section(self):
        """The payload itself is used when there is no data object"""
        descriptor = extract_youtube({'audio': 'top.mp3', 'title': 'Top'})
        self.assertEqual(descriptor.audio, 'top.mp3')
        self.assertEqual(descriptor.title, 'Top')

    def test_missing_fields_are_none(self):
        descriptor = extract_youtube({'data': {}})
        self.assertIsNone(descriptor.audio)
        self.assertIsNone(descriptor.video)
        self.assertIsNone(descriptor.title)

    def test_non_dict_payload(self):
        descriptor = extract_youtube(['unexpected'])
        self.assertFalse(descriptor.has_media)


class ExtractTiktokTest(SimpleTestCase):
    def test_success(self):
        payload = {'code': 0, 'data': {'music': 'm.mp3', 'play': 'v.mp4', 'title': 't'}}
        descriptor = extract_tiktok(payload)
        self.assertEqual(descriptor.audio, 'm.mp3')
        self.assertEqual(descriptor.video, 'v.mp4')
        self.assertEqual(descriptor.title, 't')

    def test_nonzero_code_is_upstream_error(self):
        payload = {'code': -1, 'msg': 'Url parsing is failed!'}
        with self.assertRaises(UpstreamError) as ctx:
            extract_tiktok(payload)
        self.assertEqual(ctx.exception.status, 400)
        self.assertEqual(ctx.exception.message, 'Failed to fetch TikTok info')
        self.assertEqual(ctx.exception.details, payload)

    def test_empty_payload_is_upstream_error(self):
        with self.assertRaises(UpstreamError):
            extract_tiktok(None)


class ExtractFacebookTest(SimpleTestCase):
    def test_first_mp4_link(self):
        html = (
            '<a href="https://example.com/page">x</a>'
            '<a href="https://video.fbcdn.net/sd.mp4?token=1">SD</a>'
            '<a href="https://video.fbcdn.net/hd.mp4?token=2">HD</a>'
        )
        descriptor = extract_facebook(html)
        self.assertIsNone(descriptor.audio)
        self.assertEqual(descriptor.video, 'https://video.fbcdn.net/sd.mp4?token=1')
        self.assertEqual(descriptor.raw, html)

    def test_no_match_is_not_an_error(self):
        descriptor = extract_facebook('<html><body>Nothing here</body></html>')
        self.assertIsNone(descriptor.video)
        self.assertIsNone(descriptor.audio)


@override_settings(SONGDETECT_RESOLVE_TIMEOUT=5)
class ResolveServiceTest(SimpleTestCase):
    """Tests for resolve() dispatch and upstream calls"""

    @patch('detect.service.resolve.requests.get')
    def test_unsupported_makes_no_network_call(self, mock_get):
        with self.assertRaises(UnsupportedPlatform):
            resolve('https://soundcloud.com/artist/track')
        mock_get.assert_not_called()

    @patch('detect.service.resolve.requests.get')
    def test_youtube(self, mock_get):
        mock_get.return_value = _json_response({'data': {'video': 'v.mp4', 'title': 'Clip'}})

        descriptor = resolve('https://youtu.be/abc')

        self.assertEqual(descriptor.video, 'v.mp4')
        self.assertIsNone(descriptor.audio)
        args, kwargs = mock_get.call_args
        self.assertIn('ytdown', args[0])
        self.assertEqual(kwargs['params'], {'url': 'https://youtu.be/abc'})
        self.assertEqual(kwargs['timeout'], 5)

    @patch('detect.service.resolve.requests.get')
    def test_tiktok_requests_hd(self, mock_get):
        mock_get.return_value = _json_response(
            {'code': 0, 'data': {'music': 'm.mp3', 'play': 'v.mp4', 'title': 't'}}
        )

        descriptor = resolve('https://www.tiktok.com/@a/video/123')

        self.assertEqual(descriptor.audio, 'm.mp3')
        kwargs = mock_get.call_args[1]
        self.assertEqual(kwargs['params'], {'url': 'https://www.tiktok.com/@a/video/123', 'hd': 1})

    @patch('detect.service.resolve.requests.post')
    def test_facebook_posts_form(self, mock_post):
        response = MagicMock()
        response.text = '<a href="https://cdn.example.com/clip.mp4">Download</a>'
        mock_post.return_value = response

        descriptor = resolve('https://fb.watch/abc/')

        self.assertEqual(descriptor.video, 'https://cdn.example.com/clip.mp4')
        kwargs = mock_post.call_args[1]
        self.assertEqual(kwargs['data'], {'URLz': 'https://fb.watch/abc/'})
        self.assertEqual(kwargs['headers']['Referer'], 'https://fdown.net/')
        self.assertIn('User-Agent', kwargs['headers'])

    @patch('detect.service.resolve.requests.get')
    def test_http_error_keeps_upstream_body(self, mock_get):
        error_response = MagicMock()
        error_response.json.return_value = {'message': 'quota exceeded'}
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError(
            '429 Too Many Requests', response=error_response
        )
        mock_get.return_value = response

        with self.assertRaises(UpstreamError) as ctx:
            resolve('https://www.youtube.com/watch?v=abc')

        self.assertEqual(ctx.exception.status, 500)
        self.assertEqual(ctx.exception.body, {'message': 'quota exceeded'})
        self.assertEqual(ctx.exception.to_dict()['error'], {'message': 'quota exceeded'})

    @patch('detect.service.resolve.requests.get')
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout('read timed out')

        with self.assertRaises(DetectTimeout):
            resolve('https://www.tiktok.com/@a/video/1')

    @patch('detect.service.resolve.requests.get')
    def test_malformed_json(self, mock_get):
        response = MagicMock()
        response.json.side_effect = ValueError('No JSON')
        response.text = '<html>gateway error</html>'
        mock_get.return_value = response

        with self.assertRaises(UpstreamError) as ctx:
            resolve('https://youtu.be/abc')
        self.assertEqual(ctx.exception.body, '<html>gateway error</html>')

    @patch('detect.service.resolve.requests.get')
    def test_with_logger(self, mock_get):
        """Test resolve with logger callback"""
        mock_get.return_value = _json_response({'data': {'audio': 'a.mp3'}})
        logs = []

        resolve('https://youtu.be/abc', logger=logs.append)

        self.assertTrue(any('Resolved youtube' in log for log in logs))
