"""
Ordering and truncation of result lists.
"""

from decimal import Decimal
from typing import List, Sequence

from olx_search.core.models.item import Item
from olx_search.core.models.search_request import SortOrder

INFINITE_PRICE = Decimal("Infinity")
ZERO_PRICE = Decimal("0")


class ResultShaper:
    """Sorts items by the requested order and caps the list length."""
    
    @staticmethod
    def sort_items(items: Sequence[Item], sort: SortOrder) -> List[Item]:
        """
        Sort items without mutating them.
        
        Price orders treat a missing price as the extreme value that keeps
        the item at the tail. Date and relevance keep upstream order.
        
        Args:
            items: Items in upstream order
            sort: Requested order
            
        Returns:
            New list in the requested order
        """
        if sort == SortOrder.PRICE_ASC:
            return sorted(
                items,
                key=lambda item: item.price if item.price is not None else INFINITE_PRICE,
            )
        if sort == SortOrder.PRICE_DESC:
            return sorted(
                items,
                key=lambda item: item.price if item.price is not None else ZERO_PRICE,
                reverse=True,
            )
        return list(items)
    
    @classmethod
    def shape(cls, items: Sequence[Item], sort: SortOrder, limit: int) -> List[Item]:
        """
        Sort, then truncate to the limit.
        
        Args:
            items: Candidate items
            sort: Requested order
            limit: Maximum number of items
            
        Returns:
            At most `limit` items
        """
        return cls.sort_items(items, sort)[:limit]
