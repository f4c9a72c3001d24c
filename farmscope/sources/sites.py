"""
Site Profiles

Selector chains and defaults tuned to the two upstream WordPress sites.
Routes and batch jobs pick a profile; base URLs can be swapped from config.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional, Pattern, Tuple
from urllib.parse import urlparse

from farmscope.core.config import SourceConfig
from farmscope.utils.url import origin_of


@dataclass(frozen=True)
class SiteProfile:
    """How advisories are laid out on one site"""
    name: str
    base_url: str
    feed_url: str
    host_marker: str
    id_prefix: str
    default_category: str
    default_excerpt: str
    fallback_excerpt: str
    excerpt_length: int
    container_selectors: Tuple[str, ...]
    title_selectors: Tuple[str, ...]
    date_selectors: Tuple[str, ...]
    author_selectors: Tuple[str, ...]
    excerpt_selectors: Tuple[str, ...]
    category_selectors: Tuple[str, ...]
    fallback_link_selectors: Tuple[str, ...] = ('h2 a', 'h3 a')
    fallback_ancestors: Tuple[str, ...] = ('article', 'div', 'section')
    content_selectors: Tuple[str, ...] = ('.entry-content', 'article .content', '.post-content')
    date_text_pattern: Optional[Pattern] = None
    min_paragraph_length: int = 0

    def with_sources(self, base_url: str, feed_url: str) -> 'SiteProfile':
        """Copy of the profile pointed at other origins"""
        origin = origin_of(base_url)
        host = urlparse(origin).netloc
        if host.startswith('www.'):
            host = host[4:]
        return replace(self, base_url=origin, feed_url=feed_url, host_marker=host)


KISANMITRA = SiteProfile(
    name='kisanmitra',
    base_url='https://www.kisanmitra.net',
    feed_url='https://www.kisanmitra.net/category/farm-advisories/',
    host_marker='kisanmitra.net',
    id_prefix='advisory',
    default_category='Farm Advisory',
    default_excerpt='Farm advisory information available. Click to read more.',
    fallback_excerpt='Farm advisory information available.',
    excerpt_length=200,
    container_selectors=('article', '.post', '.entry'),
    title_selectors=(
        'h3.blog-title a',
        'header h3 a',
        'header h2 a',
        'h2 a',
        'h1 a',
        '.entry-title a',
        'a[rel="bookmark"]',
        'h3 a',
    ),
    date_selectors=('time', '.entry-date', '.posted-on', '.blog-date', '.date'),
    author_selectors=('.author a', '.entry-author a', '[rel="author"]'),
    excerpt_selectors=('.blog-content', '.entry-content', '.entry-summary', '.post-content', 'p'),
    category_selectors=('.cat-links a', '.category a', '.category'),
    fallback_link_selectors=('h3 a', 'h2 a'),
    content_selectors=('.blog-content', '.entry-content', '.post-content', 'article', '.content'),
    date_text_pattern=re.compile(r'Date:\s*(\d{1,2}/\d{1,2}/\d{4})'),
    min_paragraph_length=11,
)

PESTOSCOPE = SiteProfile(
    name='pestoscope',
    base_url='https://pestoscope.com',
    feed_url='https://pestoscope.com/category/pest-advisory/',
    host_marker='pestoscope.com',
    id_prefix='pest-advisory',
    default_category='Pest Advisory',
    default_excerpt='Pest management advisory information available. Click to read more.',
    fallback_excerpt='Pest management information available.',
    excerpt_length=250,
    container_selectors=('article', '.post', '.entry'),
    title_selectors=(
        'header h2 a',
        'h2 a',
        'h1 a',
        '.entry-title a',
        'a[rel="bookmark"]',
        'h3 a',
    ),
    date_selectors=('.posted-on time', '.entry-date', 'time', '.posted-on'),
    author_selectors=('.author a', '.entry-author a', '.entry-author', '[rel="author"]'),
    excerpt_selectors=('.entry-content', '.entry-summary', 'p'),
    category_selectors=('.cat-links a', '.category a', '.category'),
    content_selectors=('.entry-content', 'article .content', '.post-content'),
)


def farm_profile(sources: Optional[SourceConfig] = None, excerpt_length: Optional[int] = None) -> SiteProfile:
    """Kisanmitra profile for the configured origin"""
    profile = KISANMITRA
    if sources:
        profile = profile.with_sources(sources.farm_base_url, sources.farm_advisory_url)
    if excerpt_length is not None:
        profile = replace(profile, excerpt_length=excerpt_length)
    return profile


def pest_profile(sources: Optional[SourceConfig] = None, excerpt_length: Optional[int] = None) -> SiteProfile:
    """Pestoscope profile for the configured origin"""
    profile = PESTOSCOPE
    if sources:
        profile = profile.with_sources(sources.pest_base_url, sources.pest_advisory_url)
    if excerpt_length is not None:
        profile = replace(profile, excerpt_length=excerpt_length)
    return profile
