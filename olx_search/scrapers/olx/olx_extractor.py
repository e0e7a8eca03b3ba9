"""
Extraction of JSON payloads embedded in OLX pages.
"""

import json
from typing import Any, Dict, Optional

from olx_search.shared.logging.log_setup import get_logger

logger = get_logger(__name__)

NEXT_DATA_MARKER = '<script id="__NEXT_DATA__" type="application/json">'
LD_JSON_MARKER = 'application/ld+json">'
SCRIPT_OPEN = "<script"
SCRIPT_CLOSE = "</script>"
AD_PROPERTIES_KEY = '"adProperties"'

# enclosing-object candidates examined per key occurrence
MAX_ENCLOSING_CANDIDATES = 256


def find_object_end(text: str, start: int, stop: Optional[int] = None) -> Optional[int]:
    """
    Find the end of the JSON object opening at `start`.
    
    Braces inside string literals are ignored; backslash escapes inside
    strings are honored.
    
    Args:
        text: Document text
        start: Index of an opening brace
        stop: Index where scanning gives up, defaults to the end of the text
        
    Returns:
        Index just past the matching closing brace, or None if unbalanced
    """
    depth = 0
    in_string = False
    escaped = False
    end = len(text) if stop is None else min(stop, len(text))
    for index in range(start, end):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
            if depth < 0:
                return None
    return None


class OlxExtractor:
    """Locates and decodes the JSON blocks OLX inlines in its HTML."""
    
    @staticmethod
    def _script_json(html: str, marker: str) -> Optional[Any]:
        """
        Parse the JSON between a marker and the next closing script tag.
        
        Args:
            html: Page HTML
            marker: Text immediately preceding the JSON
            
        Returns:
            Decoded JSON, or None if the block is absent or malformed
        """
        idx = html.find(marker)
        if idx < 0:
            return None
        
        json_start = idx + len(marker)
        json_end = html.find(SCRIPT_CLOSE, json_start)
        if json_end < 0:
            return None
        
        try:
            return json.loads(html[json_start:json_end])
        except json.JSONDecodeError as e:
            logger.debug("embedded_json_malformed", marker=marker, error=str(e))
            return None
    
    @classmethod
    def extract_next_data(cls, html: str) -> Optional[Dict[str, Any]]:
        """
        Extract `props.pageProps` from the __NEXT_DATA__ block.
        
        Args:
            html: Search page HTML
            
        Returns:
            The pageProps object, or None if absent or malformed
        """
        data = cls._script_json(html, NEXT_DATA_MARKER)
        if not isinstance(data, dict):
            return None
        props = data.get("props")
        page_props = props.get("pageProps") if isinstance(props, dict) else None
        return page_props if isinstance(page_props, dict) else None
    
    @classmethod
    def extract_ld_json(cls, html: str) -> Optional[Dict[str, Any]]:
        """
        Extract the first application/ld+json object.
        
        Args:
            html: Detail page HTML
            
        Returns:
            Decoded object, or None
        """
        data = cls._script_json(html, LD_JSON_MARKER)
        return data if isinstance(data, dict) else None
    
    @staticmethod
    def extract_enclosing_object(html: str, key: str = AD_PROPERTIES_KEY) -> Optional[Dict[str, Any]]:
        """
        Recover the JSON object that owns a quoted key.
        
        For each occurrence of the key, opening braces before it are tried
        nearest first. The first one whose balanced object extends past the
        key and decodes to an object holding the key wins. Candidates and
        scans stay within the script element containing the key.
        
        Args:
            html: Document text
            key: Quoted property name, e.g. '"adProperties"'
            
        Returns:
            Decoded object, or None
        """
        name = key.strip('"')
        key_idx = html.find(key)
        while key_idx >= 0:
            floor = max(html.rfind(SCRIPT_OPEN, 0, key_idx), 0)
            ceiling = html.find(SCRIPT_CLOSE, key_idx)
            if ceiling < 0:
                ceiling = len(html)
            candidate = html.rfind("{", floor, key_idx)
            attempts = 0
            while candidate >= 0 and attempts < MAX_ENCLOSING_CANDIDATES:
                attempts += 1
                end = find_object_end(html, candidate, ceiling)
                if end is not None and end > key_idx:
                    try:
                        data = json.loads(html[candidate:end])
                    except json.JSONDecodeError:
                        data = None
                    if isinstance(data, dict) and name in data:
                        return data
                candidate = html.rfind("{", floor, candidate)
            key_idx = html.find(key, key_idx + len(key))
        
        logger.debug("enclosing_object_not_found", key=key)
        return None
