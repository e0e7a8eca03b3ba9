"""
Render search results as JSON, JSON lines, CSV or a terminal table.
"""

import csv
import io
import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import colorama

from olx_search.core.models.search_result import SearchResult

OUTPUT_FORMATS = ("json", "jsonl", "csv", "table")


def _dim(text: str) -> str:
    return f"{colorama.Style.DIM}{text}{colorama.Style.RESET_ALL}"


def _bold(text: str) -> str:
    return f"{colorama.Style.BRIGHT}{text}{colorama.Style.RESET_ALL}"


def _color(text: str, color: str) -> str:
    return f"{color}{text}{colorama.Style.RESET_ALL}"


class ResultFormatter:
    """Formats SearchResult objects for stdout."""
    
    @staticmethod
    def item_dicts(result: SearchResult, fields: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        """
        Serialize items, optionally keeping only some fields.
        
        Args:
            result: Search result
            fields: Field names to keep, in the given order
            
        Returns:
            JSON-ready item dictionaries
        """
        items = [item.model_dump(mode="json") for item in result.items]
        if not fields:
            return items
        return [{field: item[field] for field in fields if field in item} for item in items]
    
    @classmethod
    def format_json(cls, result: SearchResult, fields: Optional[Sequence[str]] = None, pretty: bool = False) -> str:
        """Whole result as one JSON document."""
        payload = result.model_dump(mode="json")
        payload["items"] = cls.item_dicts(result, fields)
        return json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False)
    
    @classmethod
    def format_jsonl(cls, result: SearchResult, fields: Optional[Sequence[str]] = None) -> str:
        """One JSON document per item."""
        return "\n".join(json.dumps(item, ensure_ascii=False) for item in cls.item_dicts(result, fields))
    
    @classmethod
    def format_csv(cls, result: SearchResult, fields: Optional[Sequence[str]] = None) -> str:
        """
        Items as CSV with a header row.
        
        Nested values (lists, objects) are written as JSON.
        
        Args:
            result: Search result
            fields: Columns to keep
            
        Returns:
            CSV text, empty when there are no items
        """
        items = cls.item_dicts(result, fields)
        if not items:
            return ""
        
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        keys = list(items[0].keys())
        writer.writerow(keys)
        for item in items:
            row = []
            for key in keys:
                value = item.get(key)
                if value is None:
                    row.append("")
                elif isinstance(value, (dict, list)):
                    row.append(json.dumps(value, ensure_ascii=False))
                else:
                    row.append(str(value))
            writer.writerow(row)
        return buffer.getvalue().rstrip("\n")
    
    @staticmethod
    def format_price(value: Optional[Decimal]) -> str:
        """Price in pt-BR notation, e.g. 1.200,50."""
        if value is None:
            return ""
        return f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    
    @classmethod
    def format_table(cls, result: SearchResult) -> str:
        """
        Items as human-readable cards.
        
        Args:
            result: Search result
            
        Returns:
            Multi-line colored text
        """
        items = result.items
        if not items:
            return "No results found."
        
        lines = [_dim(f"─── Found {len(items)} result{'' if len(items) == 1 else 's'} ───"), ""]
        for index, item in enumerate(items, 1):
            if item.price is not None:
                price = _color(f"BRL {cls.format_price(item.price)}", colorama.Fore.GREEN)
            else:
                price = _color("Preço não informado", colorama.Fore.YELLOW)
            
            badges = ""
            if item.discount_percent:
                badges += _color(f" -{item.discount_percent}%", colorama.Fore.YELLOW)
            if item.old_price:
                badges += _dim(f" (era {cls.format_price(item.old_price)})")
            if item.has_price_reduction:
                badges += _color(" [PREÇO REDUZIDO]", colorama.Fore.YELLOW)
            if item.is_professional_seller:
                badges += _color(" [PROFISSIONAL]", colorama.Fore.MAGENTA)
            if item.has_payment_integration:
                badges += _color(" [OLX PAY]", colorama.Fore.CYAN)
            if item.has_delivery_integration:
                badges += _color(" [OLX ENTREGA]", colorama.Fore.CYAN)
            if item.is_featured:
                badges += _color(" [DESTAQUE]", colorama.Fore.YELLOW)
            
            details = ""
            if item.location:
                details += _dim(f" • {item.location}")
            if item.posted_at:
                details += _dim(f" • {datetime.fromtimestamp(item.posted_at):%d/%m/%Y}")
            if item.seller_name:
                details += _dim(f" • {item.seller_name}")
            
            lines.append(f"{_dim(f'{index:>2}.')} {_bold(item.title[:72])}")
            lines.append(f"    {price}{badges}{details}")
            if item.permalink:
                lines.append(f"    {_dim(item.permalink)}")
            
            photo_count = len(item.images) if item.images and len(item.images) > 1 else item.image_count
            if photo_count > 1:
                lines.append(_dim(f"    PHOTOS: {photo_count} fotos"))
            
            if item.properties:
                lines.append(_color("    ─ Características", colorama.Fore.CYAN))
                for prop in item.properties:
                    lines.append(_dim(f"      {prop.name}: ") + (prop.value or ""))
            
            if item.description:
                description = " ".join(item.description.split())
                if len(description) > 120:
                    description = description[:120] + "…"
                lines.append(_dim(f"    DESCRIPTION: {description}"))
            
            lines.append("")
        
        return "\n".join(lines)
    
    @classmethod
    def render(
        cls,
        result: SearchResult,
        output_format: str = "json",
        fields: Optional[Sequence[str]] = None,
        pretty: bool = False,
    ) -> str:
        """
        Render a result in the requested format.
        
        Args:
            result: Search result
            output_format: One of json, jsonl, csv, table
            fields: Item fields to keep (ignored by table)
            pretty: Indent JSON output
            
        Returns:
            Rendered text
            
        Raises:
            ValueError: If the format is unknown
        """
        if output_format == "json":
            return cls.format_json(result, fields, pretty)
        if output_format == "jsonl":
            return cls.format_jsonl(result, fields)
        if output_format == "csv":
            return cls.format_csv(result, fields)
        if output_format == "table":
            return cls.format_table(result)
        raise ValueError(f"Unknown format \"{output_format}\". Supported: {', '.join(OUTPUT_FORMATS)}")
