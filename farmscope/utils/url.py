"""
URL Utilities for FarmScope

Provides absolute-URL building against a known origin, image source
selection and filtering, and identifier/slug derivation from URLs and titles.
"""

import re
from typing import Optional, Sequence
from urllib.parse import urlparse, unquote

from bs4.element import Tag


SCHEME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*:')
INLINE_IMAGE_PATTERN = re.compile(r'^\s*data:image', re.IGNORECASE)

NON_CONTENT_IMAGE_MARKERS = ('icon', 'logo', 'avatar')

# Eager source first, then lazy-load attributes
IMAGE_SOURCE_ATTRIBUTES = ('src', 'data-src', 'data-lazy-src')
GALLERY_SOURCE_ATTRIBUTES = ('src', 'data-src', 'data-large-image')


def has_scheme(url: str) -> bool:
    """Check whether a URL carries a scheme (http:, https:, data:, ...)"""
    return bool(SCHEME_PATTERN.match(url or ''))


def is_absolute(url: Optional[str]) -> bool:
    """Check whether a URL is an absolute http(s) URL"""
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def normalize_url(raw: Optional[str], base: str) -> Optional[str]:
    """
    Convert a relative href/src to an absolute URL against a base origin

    Args:
        raw: Raw attribute value (absolute URL, root-relative or bare path)
        base: Origin such as "https://pestoscope.com"

    Returns:
        Absolute URL, the raw value unchanged if it already has a scheme,
        or None for empty input
    """
    if raw is None:
        return None

    value = raw.strip()
    if not value:
        return None

    if has_scheme(value):
        return value

    if value.startswith('//'):
        scheme = urlparse(base).scheme or 'https'
        return f"{scheme}:{value}"

    return f"{base.rstrip('/')}/{value.lstrip('/')}"


def origin_of(url: str) -> str:
    """Scheme and host of a URL, without trailing slash"""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def is_inline_image(src: Optional[str]) -> bool:
    """Check for inline-embedded (data URI) images"""
    return bool(src) and bool(INLINE_IMAGE_PATTERN.match(src))


def is_non_content_image(src: str) -> bool:
    """Check whether an image filename marks it as an icon, logo or avatar"""
    path = unquote(urlparse(src).path) or src
    filename = path.rstrip('/').rsplit('/', 1)[-1].lower()
    return any(marker in filename for marker in NON_CONTENT_IMAGE_MARKERS)


def image_source(img: Optional[Tag], attributes: Sequence[str] = IMAGE_SOURCE_ATTRIBUTES) -> Optional[str]:
    """Return the first non-empty source attribute of an image element"""
    if img is None:
        return None

    for attribute in attributes:
        value = img.get(attribute)
        if isinstance(value, list):
            value = ' '.join(value)
        if value and value.strip():
            return value.strip()

    return None


def resolve_image(img: Optional[Tag], base: str, content_only: bool = False,
                  attributes: Sequence[str] = IMAGE_SOURCE_ATTRIBUTES) -> Optional[str]:
    """
    Resolve an image element to an absolute URL

    Args:
        img: <img> element
        base: Origin used for relative sources
        content_only: Reject icon/logo/avatar filenames (body images)
        attributes: Source attributes in priority order

    Returns:
        Absolute image URL or None when missing or rejected
    """
    src = image_source(img, attributes)
    if not src or is_inline_image(src):
        return None

    if content_only and is_non_content_image(src):
        return None

    return normalize_url(src, base)


def last_path_segment(url: str) -> str:
    """Last non-empty path segment of a URL, or an empty string"""
    path = urlparse(url).path if has_scheme(url) else url.split('?', 1)[0].split('#', 1)[0]
    segments = [segment for segment in path.split('/') if segment]
    return segments[-1] if segments else ''


def slugify(title: str) -> str:
    """Lower-case a title and collapse non-alphanumeric runs to single hyphens"""
    return re.sub(r'[^a-z0-9]+', '-', title.lower()).strip('-')


def host_matches(url: str, marker: str) -> bool:
    """Check that a URL's host contains the given marker"""
    return marker.lower() in urlparse(url).netloc.lower()
