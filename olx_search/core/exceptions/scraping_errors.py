"""
Exceptions for fetching, extraction and enrichment failures.
"""

from typing import Optional

from .base import OlxSearchError


class SearchError(OlxSearchError):
    """Base exception for search pipeline errors."""
    
    pass


class TransportError(SearchError):
    """Raised when every transport failed to deliver a page."""
    
    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        """
        Initialize transport error.
        
        Args:
            url: URL that could not be fetched
            message: Error message
            status_code: HTTP status code if one was received
        """
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")


class ExtractionError(SearchError):
    """Raised when the embedded page data is missing or malformed."""
    
    def __init__(self, url: str, message: str = "The page structure may have changed."):
        """
        Initialize extraction error.
        
        Args:
            url: URL of the page that could not be parsed
            message: Error message
        """
        self.url = url
        super().__init__(f"Could not extract search results from {url}. {message}")


class EnrichmentSkip(SearchError):
    """Marks a detail page that could not be used to enrich an item."""
    
    def __init__(self, url: str, message: str):
        """
        Initialize enrichment skip.
        
        Args:
            url: Detail page URL
            message: Reason the item was left unenriched
        """
        self.url = url
        super().__init__(f"Skipped enrichment for {url}: {message}")
