"""
Management command to clean up abandoned scratch files.

Finds and removes song_*.mp3 downloads left in the upload directory by a
crashed or killed worker. Requests delete their own files, so anything older
than a few minutes is abandoned.
"""
from datetime import datetime, timedelta, timezone

from django.core.management.base import BaseCommand

from detect.service.config import get_upload_dir
from detect.service.constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX
from detect.service.download import safe_unlink


class Command(BaseCommand):
    help = 'Clean up abandoned song_* scratch files from interrupted requests'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without actually deleting'
        )
        parser.add_argument(
            '--max-age',
            type=int,
            default=60,
            help='Maximum age in minutes before considering a file abandoned (default: 60)'
        )

    def handle(self, *args, **options):
        """Find and clean up abandoned scratch files"""
        dry_run = options['dry_run']
        max_age_minutes = options['max_age']

        upload_dir = get_upload_dir()
        if not upload_dir.exists():
            self.stdout.write(self.style.SUCCESS("No upload directory found"))
            return

        files = sorted(
            f for f in upload_dir.glob(f'{TEMP_FILE_PREFIX}*{TEMP_FILE_SUFFIX}') if f.is_file()
        )
        if not files:
            self.stdout.write(self.style.SUCCESS("No scratch files found"))
            return

        now = datetime.now(timezone.utc)
        max_age = timedelta(minutes=max_age_minutes)
        old_files = []
        for path in files:
            stat = path.stat()
            age = now - datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
            if age > max_age:
                old_files.append((path, age, stat.st_size))

        if not old_files:
            self.stdout.write(self.style.SUCCESS(
                f"Found {len(files)} scratch file{'s' if len(files) != 1 else ''}, "
                f"but none are older than {max_age_minutes} minutes"
            ))
            return

        self.stdout.write(f"\nFound {len(old_files)} abandoned file{'s' if len(old_files) != 1 else ''}:")
        total_size = 0
        for path, age, size in old_files:
            total_size += size
            age_str = str(age).split('.')[0]
            self.stdout.write(f"  {path.name:40} | Age: {age_str:15} | Size: {size / (1024 * 1024):6.1f} MB")
        self.stdout.write(f"Total size: {total_size / (1024 * 1024):.1f} MB\n")

        if dry_run:
            self.stdout.write(self.style.WARNING(
                f"\nDRY RUN: Would delete {len(old_files)} file{'s' if len(old_files) != 1 else ''}"
            ))
            self.stdout.write("Run without --dry-run to actually delete")
            return

        errors = []
        for path, _, _ in old_files:
            safe_unlink(path, logger=errors.append)
            if errors:
                self.stdout.write(self.style.ERROR(f"✗ {errors.pop()}"))
            else:
                self.stdout.write(self.style.SUCCESS(f"✓ Deleted: {path.name}"))

        self.stdout.write(self.style.SUCCESS(f"\n✓ Cleanup finished for {len(old_files)} file(s)"))
