"""
Django management command to check recognition API configuration.

Usage:
    ./manage.py check_recognition
"""

from django.core.management.base import BaseCommand

from detect.service.config import get_config


class Command(BaseCommand):
    help = 'Check recognition API and downloader configuration'

    def handle(self, *args, **options):
        config = get_config()

        self.stdout.write('\n=== Recognition Configuration ===\n')
        self.stdout.write(f'SONGDETECT_RECOGNITION_URL: {config.recognition_url}')
        self.stdout.write(f'SONGDETECT_RECOGNITION_HOST: {config.recognition_host}')
        self.stdout.write(f'SONGDETECT_RECOGNITION_TIMEOUT: {config.recognition_timeout}s')

        self.stdout.write('\n=== Downloaders ===\n')
        self.stdout.write(f'YouTube: {config.ytdown_url}')
        self.stdout.write(f'TikTok: {config.tikwm_url}')
        self.stdout.write(f'Facebook: {config.fdown_url}')

        self.stdout.write('\n=== Limits ===\n')
        self.stdout.write(f'Upload dir: {config.upload_dir}')
        self.stdout.write(f'Max file size: {config.max_upload_bytes} bytes')

        if config.is_configured:
            masked = f'{config.api_key[:4]}…' if len(config.api_key) > 4 else '****'
            self.stdout.write(self.style.SUCCESS(f'\nRAPIDAPI_KEY: set ({masked})'))
        else:
            self.stdout.write(self.style.ERROR('\nRAPIDAPI_KEY: NOT set'))
            self.stdout.write('  /song-detect will answer 500 until RAPIDAPI_KEY is configured.')

        self.stdout.write('')
