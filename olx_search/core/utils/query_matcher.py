"""
Strict term matching of items against a search query.
"""

import re
import unicodedata
from typing import Iterable, List

from olx_search.core.models.item import Item
from olx_search.shared.logging.log_setup import get_logger

logger = get_logger(__name__)

# portuguese and english function words ignored when matching
STOP_WORDS = frozenset({
    "de", "da", "do", "das", "dos", "e", "ou", "em", "com", "para", "por",
    "um", "uma", "o", "a", "os", "as", "no", "na", "nos", "nas",
    "the", "and", "or", "for", "in", "of", "to", "with",
})


class QueryMatcher:
    """Checks that every significant query term appears in an item."""
    
    def __init__(self, query: str):
        """
        Initialize matcher for one query.
        
        Args:
            query: Raw search query
        """
        self.query = query
        self.tokens = self.tokenize(query)
    
    @staticmethod
    def normalize_text(text: str) -> str:
        """
        Normalize text for matching.
        
        Case-folds, strips diacritics, turns punctuation into spaces and
        collapses whitespace.
        
        Args:
            text: Raw text
            
        Returns:
            Normalized text
        """
        decomposed = unicodedata.normalize("NFD", text.casefold())
        stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
        cleaned = re.sub(r"[^\w\s]", " ", stripped)
        return re.sub(r"\s+", " ", cleaned).strip()
    
    @classmethod
    def tokenize(cls, query: str) -> List[str]:
        """
        Split a query into significant tokens.
        
        Args:
            query: Raw search query
            
        Returns:
            Tokens longer than one character that are not stop words
        """
        return [
            token for token in cls.normalize_text(query).split(" ")
            if len(token) > 1 and token not in STOP_WORDS
        ]
    
    @classmethod
    def build_corpus(cls, item: Item) -> str:
        """Normalized title, description and property values of an item."""
        parts = [cls.normalize_text(item.title or "")]
        if item.description:
            parts.append(cls.normalize_text(item.description))
        for prop in item.properties or []:
            parts.append(cls.normalize_text(prop.value or ""))
        return " ".join(parts)
    
    def matches(self, item: Item) -> bool:
        """
        Check whether an item contains every query token.
        
        An empty token list matches everything.
        
        Args:
            item: Item to check
            
        Returns:
            True if all tokens are substrings of the item corpus
        """
        if not self.tokens:
            return True
        corpus = self.build_corpus(item)
        return all(token in corpus for token in self.tokens)
    
    def filter(self, items: Iterable[Item]) -> List[Item]:
        """
        Keep the items matching the query, preserving order.
        
        Args:
            items: Candidate items
            
        Returns:
            Matching items
        """
        items = list(items)
        kept = [item for item in items if self.matches(item)]
        logger.debug(
            "strict_filter_applied",
            tokens=self.tokens,
            before=len(items),
            after=len(kept),
        )
        return kept

