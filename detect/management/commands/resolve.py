"""
Django management command for resolving a media URL.

Prints the audio/video links and title found for a YouTube, TikTok or
Facebook URL, the same way GET /media does.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from detect.service.exceptions import DetectError
from detect.service.resolve import resolve


class Command(BaseCommand):
    help = 'Resolve a media URL to its audio/video download links'

    def add_arguments(self, parser):
        parser.add_argument('url', type=str, help='YouTube, TikTok or Facebook URL')
        parser.add_argument('--json', action='store_true', help='Output result as JSON')
        parser.add_argument(
            '--raw', action='store_true', help='Include the raw upstream payload in JSON output'
        )
        parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    def handle(self, *args, **options):
        url = options['url']
        output_json = options['json']
        logger = self.stdout.write if options['verbose'] else None

        try:
            descriptor = resolve(url, logger=logger)
        except DetectError as e:
            if output_json:
                self.stdout.write(json.dumps(e.to_dict(), default=str))
                return
            raise CommandError(e.message)

        if output_json:
            result = descriptor.as_dict()
            if not options['raw']:
                result.pop('raw')
            self.stdout.write(json.dumps({'success': True, 'result': result}, indent=2))
            return

        self.stdout.write(f'Title: {descriptor.title or "-"}')
        self.stdout.write(f'Audio: {descriptor.audio or "-"}')
        self.stdout.write(f'Video: {descriptor.video or "-"}')
        if descriptor.has_media:
            self.stdout.write(self.style.SUCCESS('✓ Media found'))
        else:
            self.stdout.write(self.style.WARNING('No media links found'))
