"""
Base exception classes for all domain-specific errors.
"""

from typing import Any


class OlxSearchError(Exception):
    """Base exception for all application-specific errors."""
    
    pass


class ValidationError(OlxSearchError):
    """Base exception for all validation-related errors."""
    
    def __init__(self, field: str, value: Any, message: str):
        """
        Initialize validation error.
        
        Args:
            field: Field that failed validation
            value: Invalid value
            message: Error message
        """
        self.field = field
        self.value = value
        super().__init__(f"Validation failed for {field}={value}: {message}")


class InvalidOptionError(ValidationError):
    """Raised when a search option is out of range or malformed."""
    
    pass


class UnknownCategoryError(ValidationError):
    """Raised when a category slug is not in the category registry."""
    
    def __init__(self, category: str, valid_categories: list[tuple[str, str]]):
        """
        Initialize unknown category error.
        
        Args:
            category: Rejected slug
            valid_categories: All known (slug, name) pairs
        """
        listing = "\n".join(f"  {slug:<55} {name}" for slug, name in valid_categories)
        self.valid_slugs = [slug for slug, _ in valid_categories]
        super().__init__(
            field="category",
            value=category,
            message=f'Unknown category "{category}".\n\nValid categories:\n{listing}',
        )


class UnknownRegionError(ValidationError):
    """Raised when a region code is not a Brazilian UF."""
    
    def __init__(self, region: str):
        """
        Initialize unknown region error.
        
        Args:
            region: Rejected region code
        """
        super().__init__(
            field="region",
            value=region,
            message=f'Unknown state "{region}". Use a valid Brazilian UF (e.g. sp, rj, mg).',
        )
