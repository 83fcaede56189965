from django.apps import AppConfig


class DetectConfig(AppConfig):
    name = 'detect'

    def ready(self):
        """Register system checks and make sure the scratch directory exists"""
        from detect import checks  # noqa: F401
        from detect.service.config import ensure_upload_dir

        ensure_upload_dir()
