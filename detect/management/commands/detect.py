"""
Django management command for identifying a song.

Runs the same pipeline as POST /song-detect on a local file or a media URL
and prints the recognition result. Nothing is stored.
"""

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from detect.service.exceptions import DetectError
from detect.service.pipeline import build_detection_request, run_detection


class Command(BaseCommand):
    help = 'Identify a song from a local audio file or a media URL'

    def add_arguments(self, parser):
        source = parser.add_mutually_exclusive_group(required=True)
        source.add_argument('--file', type=str, help='Path to a local audio/video file')
        source.add_argument('--url', type=str, help='YouTube, TikTok or Facebook URL')
        parser.add_argument('--json', action='store_true', help='Output result as JSON')
        parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    def handle(self, *args, **options):
        output_json = options['json']
        logger = self.stdout.write if options['verbose'] else None

        file_path = options['file']
        file_size = None
        if file_path:
            path = Path(file_path)
            if not path.is_file():
                raise CommandError(f'File not found: {file_path}')
            file_size = path.stat().st_size

        try:
            request = build_detection_request(file_path, file_size, options['url'], logger=logger)
            result = run_detection(request, logger=logger)
        except DetectError as e:
            if output_json:
                self.stdout.write(json.dumps(e.to_dict(), default=str))
                return
            raise CommandError(f'{e.message} (HTTP {e.status})')

        if output_json:
            self.stdout.write(json.dumps(result, indent=2, default=str))
            return

        detected = result['detected']
        track = detected.get('track') if isinstance(detected, dict) else None
        if track:
            self.stdout.write(
                self.style.SUCCESS(f"✓ {track.get('title', '?')} - {track.get('subtitle', '?')}")
            )
        else:
            self.stdout.write(self.style.WARNING('No match found'))
