"""
URL configuration for the songdetect project.
"""

from django.urls import path

from detect.views import home_view, media_view, song_detect_view

urlpatterns = [
    # Liveness
    path('', home_view, name='home'),
    # Public endpoints
    path('media', media_view, name='media'),
    path('song-detect', song_detect_view, name='song_detect'),
]
