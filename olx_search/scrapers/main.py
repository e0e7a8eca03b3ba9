#!/usr/bin/env python3
"""
Command line entry point for olx-search.

Parses arguments, runs the search pipeline and prints the result to stdout.
Diagnostics go to stderr (or to a log file with --log).
"""

import argparse
import json
import sys
from typing import List, Optional

from olx_search.core.exceptions.base import OlxSearchError
from olx_search.core.models.search_request import SearchRequest, SortOrder
from olx_search.output.result_formatter import OUTPUT_FORMATS, ResultFormatter
from olx_search.scrapers.olx.olx_catalog import get_categories
from olx_search.scrapers.olx.olx_pipeline import OlxSearch
from olx_search.shared.config.app_settings import get_app_config
from olx_search.shared.logging.log_setup import build_log_file_path, get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="olx-search",
        description="Search OLX Brazil from the terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  olx-search "iPhone 15"
  olx-search "notebook Dell" -l 5 -f table
  olx-search "carro civic" --sort price_asc --pretty
  olx-search "tv samsung" --fields title,price,permalink --format csv
  olx-search "notebook" --state sp,rj,mg --sort price_asc
  olx-search "celular" --category celulares --sort date
  olx-search "Samsung S20" --strict -f table
  olx-search --list-categories
        """
    )
    
    parser.add_argument("query", nargs="*", help="Search query")
    parser.add_argument("-l", "--limit", type=int, help="Max results to return (default: 20)")
    parser.add_argument(
        "--sort",
        choices=[order.value for order in SortOrder],
        help="Sort order (default: relevance)",
    )
    parser.add_argument("--state", help='Brazilian state(s): single UF or comma separated (e.g. "sp,rj")')
    parser.add_argument("--category", help='Category slug (e.g. "celulares", "informatica/notebooks")')
    parser.add_argument("--list-categories", action="store_true", help="List valid categories and exit")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (default: 15)")
    parser.add_argument("--concurrency", type=int, help="Max parallel detail requests (default: 5)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Only keep results containing ALL search terms",
    )
    parser.add_argument("-f", "--format", default="json", choices=OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument("--raw", action="store_true", help="Output the raw pageProps object")
    parser.add_argument("--fields", help='Comma separated item fields (e.g. "title,price,permalink")')
    parser.add_argument("--log", action="store_true", help="Write a JSON debug log file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser


def print_categories() -> None:
    """Print the category registry as a two-column list."""
    categories = get_categories()
    print("\nCategorias disponíveis na OLX Brasil:\n")
    print(f"  {'Slug':<57} Nome")
    print(f"  {'─' * 56} {'─' * 45}")
    for category in categories:
        print(f"  {category['slug']:<57} {category['name']}")
    print(f"\n  Total: {len(categories)} categorias")
    print('  Uso: olx-search "query" --category celulares\n')


def report_capping(result, limit: int) -> None:
    """Explain on stderr why fewer items than requested came back."""
    got = len(result.items)
    results_limit = result.pagination.results_limit
    if got < limit and result.pagination.capped:
        note = f"Note: Returned {got} of {limit} requested."
        if results_limit and limit > results_limit:
            note += f" The platform limits browsable results to {results_limit}."
        elif result.pagination.total > got:
            note += f" {result.pagination.total} total results available on OLX."
        print(note, file=sys.stderr)
    elif got >= limit and results_limit and limit > results_limit:
        print(
            f"Note: The platform limits browsable results to {results_limit}. Requested: {limit}.",
            file=sys.stderr,
        )


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    app_config = get_app_config()
    
    log_file = str(build_log_file_path(app_config.LOG_DIR)) if args.log else None
    log_level = "DEBUG" if args.verbose or args.log else app_config.LOG_LEVEL
    setup_logging(log_level=log_level, log_file=log_file)
    
    if args.list_categories:
        print_categories()
        return
    
    query = " ".join(args.query).strip()
    if not query:
        print("ERROR: No search query provided. Use --help for usage info.", file=sys.stderr)
        sys.exit(1)
    
    fields = [f.strip() for f in args.fields.split(",") if f.strip()] if args.fields else None
    
    try:
        request = SearchRequest.from_options(
            query,
            limit=args.limit,
            timeout=args.timeout,
            sort=args.sort,
            concurrency=args.concurrency,
            regions=args.state,
            category=args.category,
            strict=args.strict,
        )
        pipeline = OlxSearch()
        
        if args.raw:
            print(json.dumps(pipeline.search_raw(request), indent=2, ensure_ascii=False))
            return
        
        result = pipeline.search(request)
        print(ResultFormatter.render(result, args.format, fields=fields, pretty=args.pretty))
        report_capping(result, request.limit)
        
    except KeyboardInterrupt:
        print("\nWARNING: Search interrupted by user", file=sys.stderr)
        sys.exit(130)
    except OlxSearchError as e:
        logger.error("search_failed", error=str(e), error_type=type(e).__name__)
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
