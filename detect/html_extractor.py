"""
HTML media extraction utilities.

Provides functions to pull direct video links out of scraped download pages.
"""
import re

from bs4 import BeautifulSoup

# Matched against the raw page text, so hrefs inside scripts and templates count too
MP4_HREF_PATTERN = re.compile(r'href="(https?://[^"]+\.mp4[^"]*)"', re.IGNORECASE)


def _decode_entities(value):
    """Resolve HTML entities (e.g. &amp;) in an attribute value."""
    return BeautifulSoup(value, 'html.parser').get_text()


def extract_mp4_links(html_content):
    """
    Extract absolute .mp4 links from an HTML page.

    Scans the raw page for every ``href="http(s)://...mp4..."`` occurrence,
    in document order, whether it sits on a real tag or inside script text.

    Args:
        html_content: HTML page as a string

    Returns:
        list[str]: Matching URLs (may be empty)
    """
    if not html_content:
        return []

    return [_decode_entities(match) for match in MP4_HREF_PATTERN.findall(html_content)]


def extract_first_mp4_link(html_content):
    """
    Extract the first .mp4 link from an HTML page.

    Returns:
        str | None: First matching URL, or None when the page has none
    """
    links = extract_mp4_links(html_content)
    return links[0] if links else None
