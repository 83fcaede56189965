"""
Service layer for song detection.

This module contains reusable functions for resolving media URLs, acquiring
audio and calling the recognition API, independent of HTTP request handling.
These functions are used by:
- The web API views (detect/views.py)
- The CLI management commands (management/commands/resolve.py, detect.py)
"""
