"""
Data Models for Page View Stats

Defines the data structures used by the stats page generator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


PageKey = Tuple[Optional[str], Optional[str]]


@dataclass(frozen=True)
class ViewEvent:
    """A single recorded page view from the access log."""

    url: Optional[str] = None
    title: Optional[str] = None
    recorded_at: Optional[str] = None

    @property
    def page_key(self) -> PageKey:
        """Identity of the viewed page: the (url, title) pair."""
        return (self.url, self.title)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ViewEvent':
        """Create ViewEvent from a log record."""
        return cls(
            url=data.get("url"),
            title=data.get("title"),
            recorded_at=data.get("recorded_at")
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "title": self.title,
            "recorded_at": self.recorded_at
        }


@dataclass
class PageAggregate:
    """View count for one distinct (url, title) page."""

    url: Optional[str]
    title: Optional[str]
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "title": self.title,
            "count": self.count
        }


@dataclass
class StatsSummary:
    """Aggregated statistics rendered into the stats page."""

    total_views: int = 0
    today_views: int = 0
    unique_pages: int = 0
    pages: List[PageAggregate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "totalViews": self.total_views,
            "todayViews": self.today_views,
            "uniquePages": self.unique_pages,
            "pages": [page.to_dict() for page in self.pages]
        }
