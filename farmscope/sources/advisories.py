"""
Advisory Feed Extraction

Parses a WordPress category page into Advisory records. Article-like
containers are tried first; when none yields a record, every heading link
pointing at the site is scanned and its nearest enclosing block is used.
A link with no enclosing block gets the fallback excerpt and no date.
"""

from typing import Iterator, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from farmscope.core.base import Advisory, AdvisoryDetail, MissingRequiredField
from farmscope.core.logging import get_logger
from farmscope.processors.assembler import assemble, truncate_excerpt
from farmscope.processors.document import parse_document
from farmscope.processors.media import ImageExtractor
from farmscope.processors.selectors import (
    SelectorChain,
    attribute,
    closest,
    element_text,
    select_all
)
from farmscope.sources.sites import SiteProfile
from farmscope.utils.url import host_matches, is_absolute, last_path_segment, normalize_url, resolve_image


def extract_advisories(html: Union[str, BeautifulSoup], profile: SiteProfile,
                       limit: Optional[int] = 20) -> List[Advisory]:
    """
    Extract advisories from a feed page

    Args:
        html: Raw HTML or an already parsed document
        profile: Site profile with selector chains
        limit: Maximum number of advisories kept (first N in document order)

    Returns:
        Advisories in document order; empty when nothing matched
    """
    document = html if isinstance(html, BeautifulSoup) else parse_document(html)

    candidates = list(_from_containers(document, profile))
    if not candidates:
        candidates = list(_from_heading_links(document, profile))

    advisories = assemble(candidates, limit=limit)
    get_logger().debug(f"{profile.name}: {len(candidates)} advisory candidates, {len(advisories)} kept")
    return advisories


def _from_containers(document: BeautifulSoup, profile: SiteProfile) -> Iterator[Advisory]:
    title_chain = SelectorChain(*profile.title_selectors)

    for index, container in enumerate(SelectorChain(*profile.container_selectors).select(document)):
        try:
            title, link = _require_title_and_link(title_chain.first(container), profile)
        except MissingRequiredField as e:
            get_logger().debug(f"{profile.name}: dropping container {index}: {e}")
            continue

        excerpt = truncate_excerpt(SelectorChain(*profile.excerpt_selectors).text(container),
                                   profile.excerpt_length)

        yield Advisory(
            id=last_path_segment(link) or f"{profile.id_prefix}-{index}",
            title=title,
            date=_extract_date(container, profile),
            excerpt=excerpt or profile.default_excerpt,
            link=link,
            category=SelectorChain(*profile.category_selectors).text(container) or profile.default_category,
            author=SelectorChain(*profile.author_selectors).text(container) or None,
            image=resolve_image(container.find('img'), profile.base_url)
        )


def _from_heading_links(document: BeautifulSoup, profile: SiteProfile) -> Iterator[Advisory]:
    for index, anchor in enumerate(select_all(document, profile.fallback_link_selectors)):
        try:
            title, link = _require_title_and_link(anchor, profile)
        except MissingRequiredField as e:
            get_logger().debug(f"{profile.name}: dropping heading link {index}: {e}")
            continue

        if not host_matches(link, profile.host_marker):
            continue

        advisory_id = last_path_segment(link) or f"{profile.id_prefix}-{index}"
        block = closest(anchor.parent, profile.fallback_ancestors) if anchor.parent else None
        if block is None:
            yield Advisory(
                id=advisory_id,
                title=title,
                date='',
                excerpt=profile.fallback_excerpt,
                link=link,
                category=profile.default_category
            )
            continue

        excerpt = truncate_excerpt(element_text(block), profile.excerpt_length)

        yield Advisory(
            id=advisory_id,
            title=title,
            date=_extract_date(block, profile),
            excerpt=excerpt or profile.fallback_excerpt,
            link=link,
            category=profile.default_category,
            author=SelectorChain(*profile.author_selectors).text(block) or None,
            image=resolve_image(block.find('img'), profile.base_url)
        )


def _require_title_and_link(anchor: Optional[Tag], profile: SiteProfile):
    title = element_text(anchor)
    if not title:
        raise MissingRequiredField('title')

    link = normalize_url(attribute(anchor, 'href'), profile.base_url)
    if not is_absolute(link):
        raise MissingRequiredField('link')

    return title, link


def _extract_date(block: Union[Tag, BeautifulSoup], profile: SiteProfile) -> str:
    element = SelectorChain(*profile.date_selectors).first(block)
    date = attribute(element, 'datetime') or element_text(element)
    if date:
        return date

    if profile.date_text_pattern is not None:
        match = profile.date_text_pattern.search(block.get_text(' '))
        if match:
            return match.group(1)

    return ''


def extract_advisory_detail(html: Union[str, BeautifulSoup], profile: SiteProfile) -> AdvisoryDetail:
    """
    Extract the full text and body images of an advisory page

    Args:
        html: Raw HTML or an already parsed document
        profile: Site profile with content region selectors

    Returns:
        AdvisoryDetail with paragraphs joined by blank lines
    """
    document = html if isinstance(html, BeautifulSoup) else parse_document(html)

    min_length = max(profile.min_paragraph_length, 1)
    paragraphs = [
        text for text in (
            element_text(p) for p in select_all(document, [f"{s} p" for s in profile.content_selectors])
        )
        if len(text) >= min_length
    ]

    images = ImageExtractor(profile.base_url)
    images.add_content_images(document, [f"{s} img" for s in profile.content_selectors])

    return AdvisoryDetail(full_content='\n\n'.join(paragraphs), images=images.result())
