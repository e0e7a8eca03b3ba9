"""
Module runner for olx_search.scrapers package.

Allows running the search with: python -m olx_search.scrapers
"""

from .main import main

if __name__ == "__main__":
    main()
