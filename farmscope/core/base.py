"""
Base Classes and Data Models for FarmScope

Defines the typed records produced by the extraction pipeline, the
component base class shared by fetcher/orchestrator/storage, and the
error taxonomy used across routes and batch jobs.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field


@dataclass
class Advisory:
    """Short-form advisory article discovered on a feed page"""
    id: str
    title: str
    date: str
    excerpt: str
    link: str
    category: str
    author: Optional[str] = None
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'date': self.date,
            'excerpt': self.excerpt,
            'link': self.link,
            'category': self.category,
            'author': self.author,
            'image': self.image
        }


@dataclass
class AdvisoryDetail:
    """Full body of an advisory page (batch mode only)"""
    full_content: str
    images: List[str] = field(default_factory=list)


@dataclass
class Category:
    """Crop/product grouping discovered on the pest site homepage"""
    name: str
    slug: str
    url: str
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'slug': self.slug,
            'url': self.url,
            'image': self.image
        }


@dataclass
class PestDetail:
    """Structured content of a single pest/disease detail page"""
    id: str
    title: str
    url: str
    images: List[str] = field(default_factory=list)
    caused_by: str = ""
    problem_category: str = ""
    symptoms: str = ""
    comments: str = ""
    management: str = ""
    control: str = ""
    sku: str = ""
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'images': list(self.images),
            'causedBy': self.caused_by,
            'problemCategory': self.problem_category,
            'symptoms': self.symptoms,
            'comments': self.comments,
            'management': self.management,
            'control': self.control,
            'sku': self.sku,
            'category': self.category,
            'url': self.url
        }


@dataclass
class PestItem:
    """Product-style pest listing inside a category page"""
    id: str
    title: str
    slug: str
    url: str
    image: Optional[str] = None
    excerpt: str = ""
    price: Optional[str] = None
    detail: Optional[PestDetail] = None

    def to_dict(self, include_detail: bool = False) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'image': self.image,
            'excerpt': self.excerpt,
            'price': self.price,
            'url': self.url
        }
        if include_detail:
            data['detail'] = self.detail.to_dict() if self.detail else None
        return data


class BaseComponent(ABC):
    """Base class for components with an explicit lifecycle"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self._initialized = False

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the component"""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Clean up resources"""
        pass

    def is_initialized(self) -> bool:
        """Check if component is initialized"""
        return self._initialized

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()


class FetcherInterface(BaseComponent):
    """Interface for outbound page fetching"""

    @abstractmethod
    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """Fetch a page and return its HTML, raising FetchFailed on failure"""
        pass


class SnapshotWriterInterface(ABC):
    """Interface for snapshot persistence"""

    @abstractmethod
    def write(self, name: str, payload: Dict[str, Any]) -> str:
        """Write a snapshot document and return its path"""
        pass


class ScraperError(Exception):
    """Base exception for scraper errors"""
    pass


class ConfigurationError(ScraperError):
    """Configuration-related errors"""
    pass


class FetchFailed(ScraperError):
    """Non-success status or network failure reaching the origin"""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        message = f"Failed to fetch {url}"
        if status is not None:
            message += f": HTTP {status}"
        elif reason:
            message += f": {reason}"
        super().__init__(message)


class MissingRequiredField(ScraperError):
    """A candidate record lacks its title or link"""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing required field: {field_name}")


class MissingRequestParameter(ScraperError):
    """A required route parameter was not supplied"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name.upper()} parameter is required")


class StorageError(ScraperError):
    """Snapshot storage errors"""
    pass
