"""
Image Extractor

Collects image URLs from detail pages: gallery images are taken as-is,
body images are filtered for icons, logos and avatars. Inline data URIs
are always rejected and every URL is made absolute and deduplicated.
"""

from typing import List, Optional, Sequence, Set

from bs4 import BeautifulSoup

from farmscope.processors.selectors import select_all
from farmscope.utils.url import (
    GALLERY_SOURCE_ATTRIBUTES,
    IMAGE_SOURCE_ATTRIBUTES,
    resolve_image
)


GALLERY_IMAGE_SELECTORS = (
    '.woocommerce-product-gallery__image img',
    '.product-images img',
    '.wp-post-image',
)

CONTENT_IMAGE_SELECTORS = (
    '.entry-content img',
    '.product-description img',
    'article img',
)


class ImageExtractor:
    """Ordered, deduplicated image collection against one origin"""

    def __init__(self, base_url: str, limit: Optional[int] = None):
        self.base_url = base_url
        self.limit = limit
        self.images: List[str] = []
        self._seen: Set[str] = set()

    def add_gallery_images(self, root: BeautifulSoup,
                           selectors: Sequence[str] = GALLERY_IMAGE_SELECTORS) -> None:
        """Primary/gallery images: no filename filtering"""
        for img in select_all(root, selectors):
            self._add(resolve_image(img, self.base_url, attributes=GALLERY_SOURCE_ATTRIBUTES))

    def add_content_images(self, root: BeautifulSoup,
                           selectors: Sequence[str] = CONTENT_IMAGE_SELECTORS) -> None:
        """Body images: icon/logo/avatar filenames are skipped"""
        for img in select_all(root, selectors):
            self._add(resolve_image(img, self.base_url, content_only=True,
                                    attributes=IMAGE_SOURCE_ATTRIBUTES))

    def _add(self, url: Optional[str]) -> None:
        if not url or url in self._seen:
            return
        self._seen.add(url)
        self.images.append(url)

    def result(self) -> List[str]:
        """Collected images, capped at the configured limit"""
        if self.limit is None:
            return list(self.images)
        return self.images[:self.limit]
